from __future__ import annotations

from typing import Any

from .. import events as ev
from ..model import Command


def action(cmd: Command, summary: str, *steps: str, **extra: Any) -> ev.Action:
    """Build the Action event for `cmd`; `extra` adds fabricated values to its args."""

    args = dict(cmd.args)
    args.update(extra)
    return ev.Action(command=cmd.name, summary=summary, args=args, steps=tuple(steps))
