"""Events produced by the execution engine.

The renderer depends only on these types; the engine never prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class InstallPlan:
    packages: Tuple[Tuple[str, str], ...]  # (package, version)


@dataclass(frozen=True)
class ScriptStarted:
    path: str
    package: str
    version: str
    description: Optional[str] = None
    author: Optional[str] = None
    dependencies: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PhaseStarted:
    name: str
    index: int


@dataclass(frozen=True)
class Message:
    text: str


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class WarningMessage:
    text: str


@dataclass(frozen=True)
class ErrorMessage:
    text: str


@dataclass(frozen=True)
class Wait:
    ms: int


@dataclass(frozen=True)
class Progress:
    value: int


@dataclass(frozen=True)
class CommandEcho:
    line: str
    shell: Optional[str] = None


@dataclass(frozen=True)
class Detection:
    label: str
    value: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BenchmarkResult:
    label: str
    score: Union[int, float]
    unit: str


@dataclass(frozen=True)
class TestResult:
    name: str
    duration_ms: int
    elapsed_ms: int
    passed: bool = True

    __test__ = False  # not a pytest class


@dataclass(frozen=True)
class Download:
    url: str
    size: int


@dataclass(frozen=True)
class Action:
    """A simulated operation with no real effect."""

    command: str
    summary: str
    args: Dict[str, Any] = field(default_factory=dict)
    steps: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScriptCompleted:
    package: str
    version: str


@dataclass(frozen=True)
class RunCompleted:
    packages: Tuple[Tuple[str, str], ...]


OutputEvent = Union[
    InstallPlan,
    ScriptStarted,
    PhaseStarted,
    Message,
    Success,
    WarningMessage,
    ErrorMessage,
    Wait,
    Progress,
    CommandEcho,
    Detection,
    BenchmarkResult,
    TestResult,
    Download,
    Action,
    ScriptCompleted,
    RunCompleted,
]
