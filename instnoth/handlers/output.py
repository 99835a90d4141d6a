from __future__ import annotations

from typing import Iterator

from .. import events as ev
from ..context import ExecutionContext
from ..model import Command


def message(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield ev.Message(cmd.arg("text"))


def success(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield ev.Success(cmd.arg("text"))


def warning(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield ev.WarningMessage(cmd.arg("text"))


def error(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    # Scripted errors are just output; the run continues.
    yield ev.ErrorMessage(cmd.arg("text"))


def delay(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    ms = cmd.arg("ms")
    yield ev.Wait(ms=ms)
    ctx.pause(ms)


def progress(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    # Direct set, never a delta. Going backwards is allowed.
    yield ev.Progress(value=ctx.set_progress(cmd.arg("value")))


HANDLERS = {
    "message": message,
    "success": success,
    "warning": warning,
    "error": error,
    "delay": delay,
    "progress": progress,
}
