from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .sysinfo import FakeSystemInfo


@dataclass
class ExecutionContext:
    """Run-scoped mutable state, owned by a single Engine for one run.

    `rng` is created once per run and shared by every script so a fixed seed
    reproduces the whole run. `sleep` takes seconds, like `time.sleep`.
    """

    quick: bool = False
    verbose: bool = False
    rng: random.Random = field(default_factory=random.Random)
    sleep: Callable[[float], None] = time.sleep
    progress: int = 0
    phase_index: Optional[int] = None
    info: FakeSystemInfo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.info = FakeSystemInfo(self.rng)

    def pause(self, ms: int) -> None:
        if self.quick or ms <= 0:
            return
        self.sleep(ms / 1000.0)

    def set_progress(self, value: int) -> int:
        self.progress = max(0, min(100, int(value)))
        return self.progress

    def reset_for_script(self) -> None:
        self.progress = 0
        self.phase_index = None
