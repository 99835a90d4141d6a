from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .errors import DependencyCycleError, DependencyNotFoundError, ScriptDecodeError
from .model import DependencyGraph, Script
from .parser import parse

logger = logging.getLogger(__name__)

Loader = Callable[[str], str]

_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


def read_script_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def normalize_path(path: str, *, relative_to: Optional[str] = None) -> str:
    """Normalize a script path; relative dependency paths resolve against the referring script's directory."""

    if relative_to is not None and not os.path.isabs(path):
        path = os.path.join(os.path.dirname(relative_to), path)
    return os.path.normpath(path)


def load_script(path: str, *, loader: Loader = read_script_text, referenced_by: Optional[str] = None) -> Script:
    try:
        text = loader(path)
    except FileNotFoundError as e:
        raise DependencyNotFoundError(path, referenced_by) from e
    except UnicodeDecodeError as e:
        raise ScriptDecodeError(path, f"byte {e.start}: {e.reason}") from e
    return parse(text, path)


def load_graph(requested_paths: Iterable[str], *, loader: Loader = read_script_text) -> DependencyGraph:
    """Parse every requested script and its `depends:` closure, each exactly once."""

    graph = DependencyGraph()

    def visit(path: str, referenced_by: Optional[str]) -> None:
        if path in graph.scripts:
            return
        script = load_script(path, loader=loader, referenced_by=referenced_by)
        deps = [normalize_path(d, relative_to=path) for d in script.dependencies]
        graph.add(script, deps)
        for dep in deps:
            visit(dep, path)

    for requested in requested_paths:
        path = normalize_path(requested)
        if path not in graph.roots:
            graph.roots.append(path)
        visit(path, None)

    return graph


def install_order(graph: DependencyGraph, roots: Optional[Iterable[str]] = None) -> List[str]:
    """Depth-first topological order: every dependency before its dependents.

    Ties break by first discovery. Re-entering a node that is still in
    progress means a cycle; the error carries the full path around it.
    """

    color: Dict[str, int] = {}
    stack: List[str] = []
    order: List[str] = []

    def visit(path: str) -> None:
        state = color.get(path, _UNVISITED)
        if state == _DONE:
            return
        if state == _IN_PROGRESS:
            raise DependencyCycleError(stack[stack.index(path):] + [path])

        color[path] = _IN_PROGRESS
        stack.append(path)
        for dep in graph.dependencies_of(path):
            visit(dep)
        stack.pop()
        color[path] = _DONE
        order.append(path)

    for root in graph.roots if roots is None else roots:
        visit(root)
    return order


def resolve(
    requested_paths: Iterable[str],
    skip_deps: bool = False,
    *,
    loader: Loader = read_script_text,
) -> List[Script]:
    """Load and order scripts for installation.

    With `skip_deps` the requested scripts come back exactly as given, with no
    dependency expansion. Otherwise the result is a deterministic
    dependency-first linearization with each script appearing once.
    """

    requested = list(requested_paths)

    if skip_deps:
        cache: Dict[str, Script] = {}
        scripts: List[Script] = []
        for p in requested:
            path = normalize_path(p)
            if path not in cache:
                cache[path] = load_script(path, loader=loader)
            scripts.append(cache[path])
        logger.info("Skipping dependency resolution for %d script(s)", len(scripts))
        return scripts

    graph = load_graph(requested, loader=loader)
    order = install_order(graph)
    logger.info("Install order: %s", " -> ".join(order))
    return [graph.scripts[p] for p in order]
