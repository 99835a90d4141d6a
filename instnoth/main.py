from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO

from . import __version__
from .builtins import BUILTIN_SCRIPTS, builtin_path
from .config import load_run_config
from .engine import Engine
from .errors import InstnothError
from .logging_utils import configure_logging
from .model import Script
from .render import ConsoleRenderer, dependency_tree_lines
from .resolver import install_order, load_graph, resolve

logger = logging.getLogger(__name__)


def locate_scripts(files: Sequence[str]) -> List[str]:
    """Use the file when it exists, else a built-in script of that name."""

    paths: List[str] = []
    for f in files:
        if not Path(f).exists():
            builtin = builtin_path(f)
            if builtin is not None:
                logger.info("Using built-in script %s for %s", builtin, f)
                paths.append(builtin)
                continue
        paths.append(f)
    return paths


def run(
    *,
    files: Sequence[str],
    quick: bool = False,
    verbose: bool = False,
    skip_deps: bool = False,
    show_deps: bool = False,
    seed: Optional[int] = None,
    out: Optional[TextIO] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[Script]:
    """Resolve and simulate the given scripts, rendering to `out`.

    All scripts are parsed and ordered before anything is rendered, so a bad
    script aborts the run with no install output.
    """

    renderer = ConsoleRenderer(out)
    paths = locate_scripts(files)

    if show_deps:
        graph = load_graph(paths)
        # raises on a cycle, like an install
        install_order(graph)
        renderer.write()
        renderer.write("Dependency tree:")
        renderer.write("-" * 40)
        for line in dependency_tree_lines(graph):
            renderer.write(line)
        renderer.write()
        return list(graph.scripts.values())

    scripts = resolve(paths, skip_deps=skip_deps)
    engine = Engine(quick=quick, verbose=verbose, seed=seed, sleep=sleep)
    renderer.render(engine.run(scripts))
    return scripts


def list_builtin(out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    out.write("\nBuilt-in install scripts:\n")
    out.write("-" * 40 + "\n")
    for name, description in BUILTIN_SCRIPTS.items():
        out.write(f"  {name:<10} - {description}\n")
    out.write("\nUsage:\n")
    out.write("  instnoth --file python\n")
    out.write("  instnoth --file path/to/a.instnoth path/to/b.instnoth\n")
    out.write("  instnoth --file all --show-deps\n\n")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="instnoth", description="Installer simulator that installs nothing")
    p.add_argument("-f", "--file", nargs="+", default=None, help="Install script(s) (.instnoth) or built-in names")
    p.add_argument("-q", "--quick", action="store_true", help="Skip all simulated waits")
    p.add_argument("-v", "--verbose", action="store_true", help="Echo every command and its shell equivalent")
    p.add_argument("--show-deps", action="store_true", help="Show the dependency tree without installing")
    p.add_argument("--skip-deps", action="store_true", help="Install only the given scripts, not their dependencies")
    p.add_argument("--list-builtin", action="store_true", help="List the bundled example scripts")
    p.add_argument("--seed", type=int, default=None, help="Seed for fabricated hardware data")
    p.add_argument("--config", default=None, help="Run configuration (YAML)")
    p.add_argument("--log", default=None, help="Write a log file")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_run_config(args.config)
        verbose = bool(args.verbose or cfg.verbose)
        configure_logging(
            log_path=args.log or cfg.log_path,
            level=cfg.log_level,
            console_level=logging.INFO if verbose else logging.WARNING,
        )

        if args.list_builtin:
            list_builtin()
            return 0

        if not args.file:
            sys.stderr.write("instnoth: no install script given, use --file <path.instnoth> [...]\n")
            sys.stderr.write("See --list-builtin for the bundled scripts\n")
            return 1

        run(
            files=args.file,
            quick=bool(args.quick or cfg.quick),
            verbose=verbose,
            skip_deps=bool(args.skip_deps or cfg.skip_deps),
            show_deps=bool(args.show_deps),
            seed=args.seed if args.seed is not None else cfg.seed,
        )
    except (InstnothError, OSError) as e:
        logger.debug("Run aborted", exc_info=True)
        sys.stderr.write(f"instnoth: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
