from __future__ import annotations

from typing import Dict, List, Sequence


def memory_loader(files: Dict[str, str]):
    """Loader for the resolver that serves scripts from a dict."""

    def load(path: str) -> str:
        try:
            return files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    return load


def script_source(package: str, *, version: str = "1.0", depends: Sequence[str] = (), body: str = "") -> str:
    lines = [f'package: "{package}"', f'version: "{version}"']
    if depends:
        lines.append("depends: " + " ".join(f'"{d}"' for d in depends))
    if body:
        lines.append('phase "Main" {')
        lines.extend("    " + ln for ln in body.strip().splitlines())
        lines.append("}")
    return "\n".join(lines) + "\n"


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
