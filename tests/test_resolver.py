from __future__ import annotations

import pytest

from instnoth.builtins import BUILTIN_DIR
from instnoth.errors import DependencyCycleError, DependencyNotFoundError, ParseError, ScriptDecodeError
from instnoth.resolver import install_order, load_graph, normalize_path, resolve

from helpers import memory_loader, script_source


def _packages(scripts):
    return [s.package for s in scripts]


def test_dependencies_come_first():
    loader = memory_loader(
        {
            "python.instnoth": script_source("python"),
            "nodejs.instnoth": script_source("nodejs"),
            "all.instnoth": script_source("all", depends=["python.instnoth", "nodejs.instnoth"]),
        }
    )

    scripts = resolve(["all.instnoth"], loader=loader)

    assert [s.path for s in scripts] == ["python.instnoth", "nodejs.instnoth", "all.instnoth"]


def test_shared_dependency_installed_once():
    loader = memory_loader(
        {
            "base.instnoth": script_source("base"),
            "a.instnoth": script_source("a", depends=["base.instnoth"]),
            "b.instnoth": script_source("b", depends=["base.instnoth"]),
            "top.instnoth": script_source("top", depends=["a.instnoth", "b.instnoth"]),
        }
    )

    scripts = resolve(["top.instnoth", "b.instnoth"], loader=loader)

    assert _packages(scripts) == ["base", "a", "b", "top"]


def test_requested_order_breaks_ties():
    loader = memory_loader({"x.instnoth": script_source("x"), "y.instnoth": script_source("y")})

    assert _packages(resolve(["y.instnoth", "x.instnoth"], loader=loader)) == ["y", "x"]
    assert _packages(resolve(["x.instnoth", "y.instnoth", "x.instnoth"], loader=loader)) == ["x", "y"]


def test_cycle_reports_full_path():
    loader = memory_loader(
        {
            "a.instnoth": script_source("a", depends=["b.instnoth"]),
            "b.instnoth": script_source("b", depends=["a.instnoth"]),
        }
    )

    with pytest.raises(DependencyCycleError) as excinfo:
        resolve(["a.instnoth"], loader=loader)

    assert excinfo.value.cycle == ["a.instnoth", "b.instnoth", "a.instnoth"]
    assert "a.instnoth -> b.instnoth -> a.instnoth" in str(excinfo.value)


def test_longer_cycle_starts_at_reentered_node():
    loader = memory_loader(
        {
            "root.instnoth": script_source("root", depends=["a.instnoth"]),
            "a.instnoth": script_source("a", depends=["b.instnoth"]),
            "b.instnoth": script_source("b", depends=["c.instnoth"]),
            "c.instnoth": script_source("c", depends=["a.instnoth"]),
        }
    )

    with pytest.raises(DependencyCycleError) as excinfo:
        resolve(["root.instnoth"], loader=loader)

    assert excinfo.value.cycle == ["a.instnoth", "b.instnoth", "c.instnoth", "a.instnoth"]


def test_self_dependency_is_a_cycle():
    loader = memory_loader({"a.instnoth": script_source("a", depends=["a.instnoth"])})

    with pytest.raises(DependencyCycleError) as excinfo:
        resolve(["a.instnoth"], loader=loader)

    assert excinfo.value.cycle == ["a.instnoth", "a.instnoth"]


def test_missing_dependency_names_referrer():
    loader = memory_loader({"a.instnoth": script_source("a", depends=["gone.instnoth"])})

    with pytest.raises(DependencyNotFoundError) as excinfo:
        resolve(["a.instnoth"], loader=loader)

    assert excinfo.value.path == "gone.instnoth"
    assert excinfo.value.referenced_by == "a.instnoth"


def test_missing_requested_script():
    with pytest.raises(DependencyNotFoundError) as excinfo:
        resolve(["nope.instnoth"], loader=memory_loader({}))
    assert excinfo.value.referenced_by is None


def test_parse_error_in_dependency_propagates():
    loader = memory_loader(
        {
            "a.instnoth": script_source("a", depends=["b.instnoth"]),
            "b.instnoth": 'package: "b"\n',
        }
    )

    with pytest.raises(ParseError) as excinfo:
        resolve(["a.instnoth"], loader=loader)
    assert excinfo.value.path == "b.instnoth"


def test_skip_deps_returns_requested_only():
    loader = memory_loader(
        {
            "a.instnoth": script_source("a", depends=["missing.instnoth"]),
            "b.instnoth": script_source("b"),
        }
    )

    scripts = resolve(["b.instnoth", "a.instnoth", "b.instnoth"], skip_deps=True, loader=loader)

    assert _packages(scripts) == ["b", "a", "b"]


def test_dependency_paths_are_relative_to_referring_script():
    loader = memory_loader(
        {
            "pkgs/app.instnoth": script_source("app", depends=["../lib/core.instnoth"]),
            "lib/core.instnoth": script_source("core", depends=["util.instnoth"]),
            "lib/util.instnoth": script_source("util"),
        }
    )

    scripts = resolve(["pkgs/app.instnoth"], loader=loader)

    assert [s.path for s in scripts] == ["lib/util.instnoth", "lib/core.instnoth", "pkgs/app.instnoth"]


def test_normalize_path():
    assert normalize_path("./a/../b.instnoth") == "b.instnoth"
    assert normalize_path("dep.instnoth", relative_to="dir/main.instnoth") == "dir/dep.instnoth"
    assert normalize_path("/abs/dep.instnoth", relative_to="dir/main.instnoth") == "/abs/dep.instnoth"


def test_load_graph_records_edges_and_roots():
    loader = memory_loader(
        {
            "a.instnoth": script_source("a", depends=["b.instnoth"]),
            "b.instnoth": script_source("b"),
        }
    )

    graph = load_graph(["a.instnoth"], loader=loader)

    assert graph.roots == ["a.instnoth"]
    assert set(graph.scripts) == {"a.instnoth", "b.instnoth"}
    assert graph.dependencies_of("a.instnoth") == ["b.instnoth"]
    assert install_order(graph) == ["b.instnoth", "a.instnoth"]


def test_builtin_scripts_resolve_from_disk():
    scripts = resolve([str(BUILTIN_DIR / "devstack.instnoth")])

    assert _packages(scripts)[-2:] == ["All", "DevStack"]
    assert [s.path.rsplit("/", 1)[-1] for s in scripts] == [
        "python.instnoth",
        "nodejs.instnoth",
        "docker.instnoth",
        "all.instnoth",
        "devstack.instnoth",
    ]


def test_undecodable_dependency_names_the_file(tmp_path):
    (tmp_path / "dep.instnoth").write_bytes(b'package: "\xfe\xff"\nversion: "1"\n')
    top = tmp_path / "top.instnoth"
    top.write_text(script_source("top", depends=["dep.instnoth"]), encoding="utf-8")

    with pytest.raises(ScriptDecodeError) as excinfo:
        resolve([str(top)])

    assert excinfo.value.path == str(tmp_path / "dep.instnoth")
