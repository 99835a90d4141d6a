from __future__ import annotations

from typing import Iterator

from .. import events as ev
from ..context import ExecutionContext
from ..model import Command
from .common import action

_INITRAMFS_STEPS = ("Collecting modules", "Building image", "Compressing (gzip)", "Writing /boot/initramfs.img")
_GRUB_ENTRIES = ("Linux 6.6.8-arch1-1", "Linux 6.6.8-arch1-1 (fallback)", "Windows Boot Manager", "UEFI Firmware Settings")
_BOOTLOADER_STEPS = ("Checking EFI/BIOS mode", "Installing boot files", "Creating NVRAM entry", "Generating configuration")
_FSTAB_ENTRIES = (
    "UUID=xxxx-xxxx / ext4 defaults 0 1",
    "UUID=yyyy-yyyy /boot/efi vfat umask=0077 0 2",
    "UUID=zzzz-zzzz /home ext4 defaults 0 2",
    "tmpfs /tmp tmpfs defaults,nosuid,nodev 0 0",
)
_KERNEL_STAGES = ("Configuring", "Compiling kernel", "Compiling modules", "Installing modules", "Installing kernel")
_UPDATE_STAGES = ("Syncing repositories", "Checking for updates", "Downloading packages", "Installing updates", "Cleaning cache")
_SERVICE_VERBS = {
    "enable_service": "Enabling",
    "disable_service": "Disabling",
    "start_service": "Starting",
    "stop_service": "Stopping",
}


def load_module(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Loading kernel module {cmd.arg('module')}")


def unload_module(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Unloading kernel module {cmd.arg('module')}")


def update_initramfs(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, "Updating initramfs", *_INITRAMFS_STEPS)


def update_grub(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, "Updating GRUB", *_GRUB_ENTRIES)


def install_bootloader(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Installing bootloader on {cmd.arg('target')}", *_BOOTLOADER_STEPS)


def generate_fstab(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, "Generating /etc/fstab", *_FSTAB_ENTRIES)


def compile_kernel(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Compiling kernel {cmd.arg('version')}", *_KERNEL_STAGES)


def create_partition(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Creating partition on {cmd.arg('device')} ({cmd.arg('size')})")


def format_partition(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Formatting {cmd.arg('device')} as {cmd.arg('fs')}")


def mount(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Mounting {cmd.arg('device')} -> {cmd.arg('to')}")


def unmount(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Unmounting {cmd.arg('mount_point')}")


def set_hostname(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Setting hostname {cmd.arg('value')}")


def set_timezone(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Setting timezone {cmd.arg('value')}")


def set_locale(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Setting locale {cmd.arg('value')}")


def create_user(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Creating user {cmd.arg('username')}", f"Groups: {cmd.arg('groups')}")


def set_password(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Setting password for {cmd.arg('user')}")


def manage_service(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"{_SERVICE_VERBS[cmd.name]} service {cmd.arg('service')}")


def update_system(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    updated = ctx.rng.randint(50, 199)
    yield action(cmd, f"Updating system ({updated} packages)", *_UPDATE_STAGES, updated=updated)


def sync_time(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, "Synchronizing time (NTP)", "Server: pool.ntp.org")


def network_config(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    iface = cmd.arg("interface")
    config = cmd.arg("config")
    if config == "dhcp":
        ip = ctx.info.ip_address()
        yield action(cmd, f"Configuring network {iface} (dhcp)", f"DHCP lease {ip}", ip=ip)
    else:
        yield action(cmd, f"Configuring network {iface} ({config})", "Applying static configuration")


def firewall_rule(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Adding firewall rule: {cmd.arg('rule')}")


HANDLERS = {
    "load_module": load_module,
    "unload_module": unload_module,
    "update_initramfs": update_initramfs,
    "update_grub": update_grub,
    "install_bootloader": install_bootloader,
    "generate_fstab": generate_fstab,
    "compile_kernel": compile_kernel,
    "create_partition": create_partition,
    "format": format_partition,
    "mount": mount,
    "unmount": unmount,
    "set_hostname": set_hostname,
    "set_timezone": set_timezone,
    "set_locale": set_locale,
    "create_user": create_user,
    "set_password": set_password,
    "enable_service": manage_service,
    "disable_service": manage_service,
    "start_service": manage_service,
    "stop_service": manage_service,
    "update_system": update_system,
    "sync_time": sync_time,
    "network_config": network_config,
    "firewall_rule": firewall_rule,
}
