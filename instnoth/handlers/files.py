from __future__ import annotations

from typing import Iterator

from .. import events as ev
from ..context import ExecutionContext
from ..model import Command
from .common import action

_EXTRACTED_FILES = ("bin/main", "lib/libcore.so", "share/data.dat", "etc/config.conf", "doc/README.md")
_SCRIPT_OUTPUT = ("Initializing...", "Loading modules...", "Applying configuration...", "Done.")


def download(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield ev.Download(url=cmd.arg("url"), size=cmd.arg("size"))


def extract(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Extracting {cmd.arg('archive')} -> {cmd.arg('to')}", *_EXTRACTED_FILES)


def install_dep(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Installing dependency {cmd.arg('name')} (v{cmd.arg('version')})")


def configure(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Configuring {cmd.arg('key')}={cmd.arg('value')}")


def cleanup(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, "Cleaning up temporary files")


def create_dir(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Creating directory {cmd.arg('path')}")


def copy_file(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Copying {cmd.arg('source')} -> {cmd.arg('to')}")


def symlink(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Linking {cmd.arg('source')} -> {cmd.arg('to')}")


def set_permission(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Setting mode {cmd.arg('mode')} on {cmd.arg('path')}")


def run_script(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Running script {cmd.arg('script')}", *_SCRIPT_OUTPUT)


def check_dep(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Checking dependency {cmd.arg('name')} ... OK")


def write_config(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    content = cmd.arg("content")
    lines = content.splitlines()
    preview = lines[:3] + (["..."] if len(lines) > 3 else [])
    yield action(cmd, f"Writing configuration {cmd.arg('path')}", *preview)


def check_integrity(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Checking integrity of {cmd.arg('target')}", "Computing checksums", "Integrity confirmed")


def verify_signature(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Verifying signature of {cmd.arg('file')} ... VALID", key_id=ctx.info.key_id())


def install_packages(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    names = cmd.arg("packages").split()
    yield action(cmd, f"Installing packages ({len(names)})", *names)


def install_driver(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield action(cmd, f"Installing driver {cmd.arg('driver')}")


HANDLERS = {
    "download": download,
    "extract": extract,
    "install_dep": install_dep,
    "configure": configure,
    "cleanup": cleanup,
    "create_dir": create_dir,
    "copy_file": copy_file,
    "symlink": symlink,
    "set_permission": set_permission,
    "run_script": run_script,
    "check_dep": check_dep,
    "write_config": write_config,
    "check_integrity": check_integrity,
    "verify_signature": verify_signature,
    "install_packages": install_packages,
    "install_driver": install_driver,
}
