from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from . import events as ev
from .context import ExecutionContext
from .handlers import HANDLERS
from .model import Command, Script
from .registry import COMMANDS

logger = logging.getLogger(__name__)

_unhandled = sorted(set(COMMANDS) - set(HANDLERS))
if _unhandled:
    raise RuntimeError(f"Commands without a handler: {', '.join(_unhandled)}")


class ScriptState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    # Reserved: no command in the current vocabulary can fail at runtime.
    FAILED = "failed"


class Engine:
    """Replays resolved scripts as a lazy stream of events.

    Scripts run in the given order, phases and commands in declaration
    order. Quick mode skips every wait but never changes the events.
    """

    def __init__(
        self,
        *,
        quick: bool = False,
        verbose: bool = False,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rng is None:
            rng = random.Random(seed)
        self.ctx = ExecutionContext(quick=quick, verbose=verbose, rng=rng, sleep=sleep)
        self.states: Dict[str, ScriptState] = {}

    def state_of(self, path: str) -> ScriptState:
        return self.states.get(path, ScriptState.NOT_STARTED)

    def run(self, scripts: Sequence[Script]) -> Iterator[ev.OutputEvent]:
        scripts = list(scripts)
        for script in scripts:
            self.states[script.path] = ScriptState.NOT_STARTED

        packages = tuple((s.package, s.version) for s in scripts)
        yield ev.InstallPlan(packages=packages)

        for script in scripts:
            yield from self.run_script(script)

        logger.info("Run completed: %d script(s)", len(scripts))
        yield ev.RunCompleted(packages=packages)

    def run_script(self, script: Script) -> Iterator[ev.OutputEvent]:
        ctx = self.ctx
        ctx.reset_for_script()
        self.states[script.path] = ScriptState.RUNNING
        logger.info("Running %s (%s v%s)", script.path, script.package, script.version)

        yield ev.ScriptStarted(
            path=script.path,
            package=script.package,
            version=script.version,
            description=script.description,
            author=script.author,
            dependencies=script.dependencies,
        )

        try:
            for index, phase in enumerate(script.phases):
                ctx.phase_index = index
                logger.debug("Phase %d: %s", index, phase.name)
                yield ev.PhaseStarted(name=phase.name, index=index)
                for cmd in phase.commands:
                    yield from self.run_command(cmd)
        except Exception:
            self.states[script.path] = ScriptState.FAILED
            logger.exception("Script %s failed", script.path)
            raise

        self.states[script.path] = ScriptState.COMPLETED
        yield ev.ScriptCompleted(package=script.package, version=script.version)

    def run_command(self, cmd: Command) -> Iterator[ev.OutputEvent]:
        schema = COMMANDS[cmd.name]
        if self.ctx.verbose:
            shell = schema.shell.format(**cmd.args) if schema.shell else None
            yield ev.CommandEcho(line=cmd.raw, shell=shell)
        yield from HANDLERS[cmd.name](cmd, self.ctx)
        self.ctx.pause(schema.pace_ms)


def execute(
    scripts: Sequence[Script],
    *,
    quick: bool = False,
    verbose: bool = False,
    rng: Optional[random.Random] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[ev.OutputEvent]:
    """Run `scripts` to completion and return every event."""

    engine = Engine(quick=quick, verbose=verbose, rng=rng, sleep=sleep)
    return list(engine.run(scripts))
