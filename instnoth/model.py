from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Command:
    """One validated command invocation.

    `args` maps every slot of the command's schema (positional and named) to
    its value; optional slots that were not given carry their default.
    """

    name: str
    args: Dict[str, Any]
    line: int
    raw: str

    def arg(self, name: str) -> Any:
        return self.args[name]


@dataclass(frozen=True)
class Phase:
    name: str
    commands: Tuple[Command, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class Script:
    path: str
    package: str
    version: str
    description: Optional[str] = None
    author: Optional[str] = None
    dependencies: Tuple[str, ...] = ()
    phases: Tuple[Phase, ...] = ()

    @property
    def command_count(self) -> int:
        return sum(len(p.commands) for p in self.phases)


@dataclass
class DependencyGraph:
    """Scripts keyed by path plus their resolved `depends:` edges.

    Both mappings keep first-discovery order.
    """

    scripts: Dict[str, Script] = field(default_factory=dict)
    edges: Dict[str, List[str]] = field(default_factory=dict)
    roots: List[str] = field(default_factory=list)

    def add(self, script: Script, deps: List[str]) -> None:
        self.scripts[script.path] = script
        self.edges[script.path] = list(deps)

    def dependencies_of(self, path: str) -> List[str]:
        return list(self.edges.get(path) or [])
