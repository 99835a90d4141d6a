"""Plain-text console rendering of engine events.

This is the only module that knows about glyphs and layout.
"""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Set, TextIO

from . import events as ev
from .model import DependencyGraph

RULE = "-" * 67
BAR_WIDTH = 30


def progress_bar(value: int, width: int = BAR_WIDTH) -> str:
    value = max(0, min(100, value))
    filled = (width * value) // 100
    return "[" + "#" * filled + "." * (width - filled) + f"] {value}%"


def _fmt_score(score) -> str:
    if isinstance(score, int):
        return f"{score:,}"
    return f"{score}"


class ConsoleRenderer:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def write(self, line: str = "") -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def render(self, events: Iterable[ev.OutputEvent]) -> None:
        for event in events:
            self.handle(event)

    def handle(self, event: ev.OutputEvent) -> None:
        method = getattr(self, "on_" + type(event).__name__, None)
        if method is not None:
            method(event)

    def on_InstallPlan(self, e: ev.InstallPlan) -> None:
        if len(e.packages) < 2:
            return
        self.write()
        self.write(f"Install plan: {len(e.packages)} packages")
        for i, (package, version) in enumerate(e.packages, start=1):
            self.write(f"  {i}. {package} (v{version})")
        self.write(RULE)

    def on_ScriptStarted(self, e: ev.ScriptStarted) -> None:
        self.write()
        self.write("=" * 67)
        self.write("  InstNoth Installer")
        self.write("=" * 67)
        self.write(f"Package:     {e.package}")
        self.write(f"Version:     {e.version}")
        if e.description:
            self.write(f"Description: {e.description}")
        if e.author:
            self.write(f"Author:      {e.author}")
        if e.dependencies:
            self.write(f"Depends:     {', '.join(e.dependencies)}")
        self.write(RULE)

    def on_PhaseStarted(self, e: ev.PhaseStarted) -> None:
        self.write()
        self.write(f"> {e.name}")
        self.write("-" * 50)

    def on_Message(self, e: ev.Message) -> None:
        self.write(f"  -> {e.text}")

    def on_Success(self, e: ev.Success) -> None:
        self.write(f"  [ok] {e.text}")

    def on_WarningMessage(self, e: ev.WarningMessage) -> None:
        self.write(f"  [!] {e.text}")

    def on_ErrorMessage(self, e: ev.ErrorMessage) -> None:
        self.write(f"  [x] {e.text}")

    def on_Progress(self, e: ev.Progress) -> None:
        self.write(f"  Progress: {progress_bar(e.value)}")

    def on_CommandEcho(self, e: ev.CommandEcho) -> None:
        self.write(f"    # {e.line}")
        if e.shell:
            self.write(f"    $ {e.shell}")

    def on_Detection(self, e: ev.Detection) -> None:
        self.write(f"  [?] {e.label}: {e.value}")
        items = [(k, v) for k, v in e.details.items() if not isinstance(v, list)]
        for i, (key, value) in enumerate(items):
            branch = "`-" if i == len(items) - 1 else "|-"
            self.write(f"    {branch} {key}: {value}")

    def on_BenchmarkResult(self, e: ev.BenchmarkResult) -> None:
        self.write(f"  [bench] {e.label}: {_fmt_score(e.score)} {e.unit}")

    def on_TestResult(self, e: ev.TestResult) -> None:
        status = "PASSED" if e.passed else "FAILED"
        self.write(f"  [test] {e.name} ({e.elapsed_ms} ms) {status}")

    def on_Download(self, e: ev.Download) -> None:
        self.write(f"  [v] Downloading {e.url}")
        self.write(f"    [ok] {e.size} bytes")

    def on_Action(self, e: ev.Action) -> None:
        self.write(f"  * {e.summary}")
        for step in e.steps:
            self.write(f"    - {step}")

    def on_ScriptCompleted(self, e: ev.ScriptCompleted) -> None:
        self.write()
        self.write(f"  [ok] {e.package} {e.version} installed successfully")
        self.write("=" * 67)

    def on_RunCompleted(self, e: ev.RunCompleted) -> None:
        if len(e.packages) < 2:
            return
        self.write()
        self.write(f"  [ok] Installed {len(e.packages)} packages:")
        for package, version in e.packages:
            self.write(f"    * {package} (v{version})")


def dependency_tree_lines(graph: DependencyGraph) -> List[str]:
    """Indented dependency tree for every root; repeated subtrees are not expanded twice."""

    lines: List[str] = []
    shown: Set[str] = set()

    def walk(path: str, indent: int) -> None:
        script = graph.scripts[path]
        prefix = "  " * indent
        marker = "*" if indent == 0 else "|-"
        lines.append(f"{prefix}{marker} {script.package} (v{script.version}) [{path}]")
        if path in shown:
            lines.append(f"{prefix}  `- (already shown)")
            return
        shown.add(path)
        for dep in graph.dependencies_of(path):
            walk(dep, indent + 1)

    for root in graph.roots:
        walk(root, 0)
    return lines
