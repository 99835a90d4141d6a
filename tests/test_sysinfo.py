from __future__ import annotations

import random

from instnoth.sysinfo import FakeSystemInfo, hardware_tests, normalize_component


def test_component_aliases():
    assert normalize_component("RAM") == "memory"
    assert normalize_component("storage") == "disk"
    assert hardware_tests("ram") == hardware_tests("memory")
    assert hardware_tests("toaster") == ["Basic test", "Functional test"]


def test_same_seed_same_facts():
    a = FakeSystemInfo(random.Random(11))
    b = FakeSystemInfo(random.Random(11))

    assert [a.cpu(), a.disk(), a.network(), a.key_id()] == [b.cpu(), b.disk(), b.network(), b.key_id()]


def test_generated_formats():
    info = FakeSystemInfo(random.Random(0))

    mac = info.mac_address()
    assert len(mac.split(":")) == 6
    assert info.ip_address().startswith("192.168.")
    assert len(info.key_id()) == 16
    assert 3 <= len(info.drivers())


def test_jitter_stays_near_base():
    info = FakeSystemInfo(random.Random(1))
    for _ in range(50):
        assert 850 <= info.jitter(1000) <= 1150
    assert info.jitter(0) == 0
