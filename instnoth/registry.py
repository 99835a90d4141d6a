from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

STRING = "string"
INT = "int"
QUOTED = "quoted"

REQUIRED = object()


@dataclass(frozen=True)
class ArgSpec:
    name: str
    type: str = STRING
    default: Any = REQUIRED
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    @property
    def required(self) -> bool:
        return self.default is REQUIRED


@dataclass(frozen=True)
class CommandSchema:
    """Argument shape of one command.

    `shell` is the equivalent shell command echoed in verbose mode (formatted
    with the command's args). `pace_ms` is the simulated time the command
    takes when not in quick mode.
    """

    name: str
    positional: Tuple[ArgSpec, ...] = ()
    options: Tuple[ArgSpec, ...] = ()
    shell: Optional[str] = None
    pace_ms: int = 0

    def option(self, name: str) -> Optional[ArgSpec]:
        for spec in self.options:
            if spec.name == name:
                return spec
        return None

    @property
    def slots(self) -> Tuple[ArgSpec, ...]:
        return self.positional + self.options


def _cmd(
    name: str,
    *positional: ArgSpec,
    options: Tuple[ArgSpec, ...] = (),
    shell: Optional[str] = None,
    pace_ms: int = 0,
) -> CommandSchema:
    return CommandSchema(name=name, positional=tuple(positional), options=options, shell=shell, pace_ms=pace_ms)


def _text(name: str = "text") -> ArgSpec:
    return ArgSpec(name, QUOTED)


def _s(name: str) -> ArgSpec:
    return ArgSpec(name, STRING)


_SCHEMAS = [
    # Output
    _cmd("message", _text()),
    _cmd("success", _text()),
    _cmd("warning", _text()),
    _cmd("error", _text()),
    _cmd("delay", ArgSpec("ms", INT)),
    _cmd("progress", ArgSpec("value", INT, min_value=0, max_value=100)),
    # Files and packages
    _cmd("create_dir", _s("path"), shell="mkdir -p {path}", pace_ms=200),
    _cmd("download", _s("url"), options=(ArgSpec("size", INT, 1024),), shell="curl -LO {url}", pace_ms=600),
    _cmd("extract", _s("archive"), options=(ArgSpec("to", STRING, ""),), shell="tar -xf {archive} -C {to}", pace_ms=500),
    _cmd("install_dep", _s("name"), options=(ArgSpec("version", STRING, "latest"),), pace_ms=1500),
    _cmd("configure", options=(ArgSpec("key", STRING, ""), ArgSpec("value", STRING, "")), pace_ms=100),
    _cmd("cleanup", shell="rm -rf /tmp/instnoth_*", pace_ms=300),
    _cmd("copy_file", _s("source"), options=(ArgSpec("to", STRING, ""),), shell="cp {source} {to}", pace_ms=150),
    _cmd("symlink", _s("source"), options=(ArgSpec("to", STRING, ""),), shell="ln -s {source} {to}", pace_ms=100),
    _cmd("set_permission", _s("path"), options=(ArgSpec("mode", STRING, "755"),), shell="chmod {mode} {path}", pace_ms=50),
    _cmd("run_script", _s("script"), shell="sh {script}", pace_ms=600),
    _cmd("check_dep", _s("name"), pace_ms=200),
    _cmd("write_config", _s("path"), options=(ArgSpec("content", QUOTED, ""),), pace_ms=100),
    _cmd("check_integrity", _s("target"), shell="sha256sum -c {target}", pace_ms=1500),
    _cmd("verify_signature", _s("file"), shell="gpg --verify {file}", pace_ms=400),
    _cmd("install_packages", _s("packages"), pace_ms=800),
    _cmd("install_driver", _s("driver"), pace_ms=1500),
    # Hardware detection
    _cmd("detect_cpu", pace_ms=500),
    _cmd("detect_memory", pace_ms=400),
    _cmd("detect_disk", pace_ms=600),
    _cmd("detect_gpu", pace_ms=500),
    _cmd("detect_network", pace_ms=500),
    _cmd("detect_os", pace_ms=300),
    _cmd("detect_kernel", pace_ms=200),
    _cmd("detect_bios", pace_ms=400),
    _cmd("scan_hardware", pace_ms=1500),
    _cmd("detect_drivers", pace_ms=900),
    _cmd("run_test", _s("name"), options=(ArgSpec("duration", INT, 1000),)),
    _cmd("test_hardware", _s("component")),
    _cmd("benchmark_cpu", pace_ms=1600),
    _cmd("benchmark_memory", pace_ms=1200),
    _cmd("benchmark_disk", pace_ms=1600),
    # Kernel and boot
    _cmd("load_module", _s("module"), shell="modprobe {module}", pace_ms=300),
    _cmd("unload_module", _s("module"), shell="modprobe -r {module}", pace_ms=200),
    _cmd("update_initramfs", shell="update-initramfs -u", pace_ms=1600),
    _cmd("update_grub", shell="grub-mkconfig -o /boot/grub/grub.cfg", pace_ms=900),
    _cmd("install_bootloader", _s("target"), shell="grub-install {target}", pace_ms=1600),
    _cmd("generate_fstab", shell="genfstab -U /mnt >> /mnt/etc/fstab", pace_ms=600),
    _cmd("compile_kernel", _s("version"), shell="make -j$(nproc) && make modules_install install", pace_ms=5200),
    # Storage
    _cmd("create_partition", _s("device"), options=(ArgSpec("size", STRING, "100%"),),
         shell="parted {device} mkpart primary 0% {size}", pace_ms=500),
    _cmd("format", _s("device"), options=(ArgSpec("fs", STRING, "ext4"),), shell="mkfs.{fs} {device}", pace_ms=2000),
    _cmd("mount", _s("device"), options=(ArgSpec("to", STRING, ""),), shell="mount {device} {to}", pace_ms=300),
    _cmd("unmount", _s("mount_point"), shell="umount {mount_point}", pace_ms=200),
    # System
    _cmd("set_hostname", _s("value"), shell="hostnamectl set-hostname {value}", pace_ms=100),
    _cmd("set_timezone", _s("value"), shell="timedatectl set-timezone {value}", pace_ms=100),
    _cmd("set_locale", _s("value"), shell="localectl set-locale LANG={value}", pace_ms=100),
    _cmd("create_user", _s("username"), options=(ArgSpec("groups", STRING, "users"),),
         shell="useradd -m -G {groups} {username}", pace_ms=300),
    _cmd("set_password", _s("user"), shell="passwd {user}", pace_ms=300),
    _cmd("enable_service", _s("service"), shell="systemctl enable {service}", pace_ms=200),
    _cmd("disable_service", _s("service"), shell="systemctl disable {service}", pace_ms=200),
    _cmd("start_service", _s("service"), shell="systemctl start {service}", pace_ms=200),
    _cmd("stop_service", _s("service"), shell="systemctl stop {service}", pace_ms=200),
    _cmd("update_system", shell="apt-get update && apt-get upgrade -y", pace_ms=2500),
    _cmd("sync_time", shell="timedatectl set-ntp true", pace_ms=500),
    _cmd("network_config", _s("interface"), options=(ArgSpec("config", STRING, "dhcp"),), pace_ms=1200),
    _cmd("firewall_rule", _s("rule"), shell="ufw {rule}", pace_ms=100),
]

COMMANDS: Dict[str, CommandSchema] = {s.name: s for s in _SCHEMAS}


def lookup(name: str) -> Optional[CommandSchema]:
    return COMMANDS.get(name)


def command_names() -> Tuple[str, ...]:
    return tuple(COMMANDS)
