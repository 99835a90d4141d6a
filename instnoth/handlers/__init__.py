"""Command handlers, one generator function per command name.

A handler takes `(cmd, ctx)` and yields events. Handlers never touch the
host: every effect is an event.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator

from ..context import ExecutionContext
from ..events import OutputEvent
from ..model import Command
from . import files, hardware, output, system

Handler = Callable[[Command, ExecutionContext], Iterator[OutputEvent]]

HANDLERS: Dict[str, Handler] = {}
for _module in (output, files, hardware, system):
    HANDLERS.update(_module.HANDLERS)

__all__ = ["HANDLERS", "Handler"]
