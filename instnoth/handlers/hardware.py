from __future__ import annotations

from typing import Iterator, List, Tuple

from .. import events as ev
from ..context import ExecutionContext
from ..model import Command
from ..sysinfo import hardware_tests
from .common import action

# label -> (low, high, unit); scores are drawn uniformly in [low, high].
_CPU_BENCH: List[Tuple[str, int, int, str]] = [
    ("Single-thread", 8000, 15000, "points"),
    ("Multi-thread", 60000, 120000, "points"),
    ("Floating point", 30000, 60000, "points"),
    ("Integer ops", 45000, 90000, "points"),
]
_MEMORY_BENCH: List[Tuple[str, int, int, str]] = [
    ("Read", 30000, 60000, "MB/s"),
    ("Write", 28000, 55000, "MB/s"),
    ("Copy", 25000, 50000, "MB/s"),
]
_DISK_BENCH: List[Tuple[str, int, int, str]] = [
    ("Sequential Read", 500, 7000, "MB/s"),
    ("Sequential Write", 450, 6500, "MB/s"),
    ("Random Read 4K", 10000, 120000, "IOPS"),
    ("Random Write 4K", 9000, 100000, "IOPS"),
]

HARDWARE_TEST_MS = 500


def detect_cpu(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    cpu = ctx.info.cpu()
    yield ev.Detection("CPU", f"{cpu['vendor']} {cpu['model']}", cpu)


def detect_memory(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    mem = ctx.info.memory()
    yield ev.Detection("Memory", f"{mem['size_gb']} GB {mem['type']}", mem)


def detect_disk(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    disk = ctx.info.disk()
    yield ev.Detection("Disk", f"{disk['vendor']} {disk['model']}", disk)


def detect_gpu(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    gpu = ctx.info.gpu()
    yield ev.Detection("GPU", f"{gpu['vendor']} {gpu['model']}", gpu)


def detect_network(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    nic = ctx.info.network()
    yield ev.Detection("Network", nic["adapter"], nic)


def detect_os(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    name, version = ctx.info.os()
    yield ev.Detection("OS", f"{name} {version}", {"name": name, "version": version})


def detect_kernel(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield ev.Detection("Kernel", ctx.info.kernel())


def detect_bios(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    bios = ctx.info.bios()
    yield ev.Detection("BIOS", f"{bios['vendor']} {bios['type']}", bios)


def scan_hardware(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    for bus, devices in ctx.info.buses():
        yield ev.Detection(f"{bus} bus", ", ".join(devices), {"devices": devices})


def detect_drivers(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    for name, device in ctx.info.drivers():
        yield ev.Detection("Driver", name, {"device": device})


def _test(ctx: ExecutionContext, name: str, duration_ms: int) -> ev.TestResult:
    ctx.pause(duration_ms)
    return ev.TestResult(name=name, duration_ms=duration_ms, elapsed_ms=ctx.info.jitter(duration_ms))


def run_test(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield _test(ctx, cmd.arg("name"), cmd.arg("duration"))


def test_hardware(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    component = cmd.arg("component")
    yield action(cmd, f"Testing {component}")
    for name in hardware_tests(component):
        yield _test(ctx, name, HARDWARE_TEST_MS)


def _bench(ctx: ExecutionContext, table: List[Tuple[str, int, int, str]]) -> Iterator[ev.OutputEvent]:
    for label, low, high, unit in table:
        yield ev.BenchmarkResult(label=label, score=ctx.rng.randint(low, high), unit=unit)


def benchmark_cpu(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield from _bench(ctx, _CPU_BENCH)


def benchmark_memory(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield from _bench(ctx, _MEMORY_BENCH)
    yield ev.BenchmarkResult(label="Latency", score=round(ctx.rng.uniform(55.0, 95.0), 1), unit="ns")


def benchmark_disk(cmd: Command, ctx: ExecutionContext) -> Iterator[ev.OutputEvent]:
    yield from _bench(ctx, _DISK_BENCH)


HANDLERS = {
    "detect_cpu": detect_cpu,
    "detect_memory": detect_memory,
    "detect_disk": detect_disk,
    "detect_gpu": detect_gpu,
    "detect_network": detect_network,
    "detect_os": detect_os,
    "detect_kernel": detect_kernel,
    "detect_bios": detect_bios,
    "scan_hardware": scan_hardware,
    "detect_drivers": detect_drivers,
    "run_test": run_test,
    "test_hardware": test_hardware,
    "benchmark_cpu": benchmark_cpu,
    "benchmark_memory": benchmark_memory,
    "benchmark_disk": benchmark_disk,
}
