from __future__ import annotations

import random
from typing import Any, Dict, List, Tuple

# (vendor, model, cores, max MHz)
_CPUS = [
    ("Intel", "Core i9-13900K", 24, 5800),
    ("Intel", "Core i7-12700K", 12, 5000),
    ("Intel", "Core i5-13600K", 14, 5100),
    ("Intel", "Xeon E5-2699 v4", 22, 3600),
    ("AMD", "Ryzen 9 7950X", 16, 5700),
    ("AMD", "Ryzen 7 7800X3D", 8, 5000),
    ("AMD", "Ryzen 5 7600X", 6, 5300),
    ("AMD", "EPYC 7742", 64, 3400),
    ("AMD", "Threadripper 3990X", 64, 4300),
    ("Apple", "M2 Ultra", 24, 3500),
]

# (GB, type, MHz)
_MEMORY = [
    (8, "DDR4", 2666),
    (16, "DDR4", 3200),
    (32, "DDR4", 3600),
    (32, "DDR5", 4800),
    (64, "DDR5", 5600),
    (128, "DDR5", 6000),
    (16, "DDR5", 5200),
    (64, "DDR4", 3200),
]

# (vendor, model, GB, bus)
_DISKS = [
    ("Samsung", "990 PRO", 2000, "NVMe"),
    ("Samsung", "870 EVO", 1000, "SATA"),
    ("WD", "Black SN850X", 2000, "NVMe"),
    ("WD", "Blue SN570", 500, "NVMe"),
    ("Seagate", "Barracuda", 2000, "HDD"),
    ("Crucial", "MX500", 1000, "SATA"),
    ("Kingston", "NV2", 1000, "NVMe"),
    ("Toshiba", "X300", 4000, "HDD"),
    ("Intel", "Optane 905P", 960, "NVMe"),
]

# (vendor, model, GB VRAM)
_GPUS = [
    ("NVIDIA", "GeForce RTX 4090", 24),
    ("NVIDIA", "GeForce RTX 4080", 16),
    ("NVIDIA", "GeForce RTX 4070 Ti", 12),
    ("NVIDIA", "GeForce RTX 3080", 10),
    ("AMD", "Radeon RX 7900 XTX", 24),
    ("AMD", "Radeon RX 7800 XT", 16),
    ("AMD", "Radeon RX 6800", 16),
    ("Intel", "Arc A770", 16),
    ("Intel", "Arc A380", 6),
    ("NVIDIA", "Quadro RTX 8000", 48),
]

_NICS = [
    ("Intel", "I225-V 2.5GbE", "2.5 Gbps"),
    ("Intel", "X710 10GbE", "10 Gbps"),
    ("Realtek", "RTL8125", "2.5 Gbps"),
    ("Realtek", "RTL8111", "1 Gbps"),
    ("Broadcom", "BCM57416", "10 Gbps"),
    ("Mellanox", "ConnectX-6", "100 Gbps"),
    ("Intel", "Wi-Fi 6E AX211", "2.4 Gbps"),
    ("Qualcomm", "Atheros AR9485", "300 Mbps"),
]

_BIOSES = [
    ("American Megatrends", "UEFI", "3.5.2"),
    ("Phoenix", "UEFI", "2.1.0"),
    ("Insyde", "UEFI", "5.0"),
    ("Award", "Legacy BIOS", "6.0"),
    ("AMI", "Aptio V", "1.24"),
    ("Dell", "UEFI", "2.8.1"),
    ("HP", "UEFI", "F.47"),
    ("Lenovo", "UEFI", "N24ET82W"),
]

_KERNELS = [
    "6.6.8-arch1-1",
    "6.5.0-14-generic",
    "6.1.52-gentoo",
    "5.15.0-91-generic",
    "6.6.6-200.fc39.x86_64",
    "6.4.12-1-MANJARO",
    "5.10.0-27-amd64",
    "6.2.16-300.fc38.x86_64",
]

_SYSTEMS = [
    ("Ubuntu", "22.04.3 LTS (Jammy Jellyfish)"),
    ("Fedora", "39 (Workstation Edition)"),
    ("Debian", "12 (Bookworm)"),
    ("Arch Linux", "Rolling Release"),
    ("openSUSE", "Tumbleweed"),
    ("Linux Mint", "21.2 (Victoria)"),
    ("Pop!_OS", "22.04 LTS"),
    ("Manjaro", "23.1 (Vulcan)"),
    ("CentOS Stream", "9"),
    ("Rocky Linux", "9.3"),
]

_BUSES = [
    ("PCI", ["VGA controller", "Ethernet controller", "USB controller", "Audio device"]),
    ("USB", ["Keyboard", "Mouse", "USB hub", "Webcam"]),
    ("ACPI", ["Power button", "Thermal zone", "Battery"]),
    ("SATA", ["SSD", "HDD", "Optical drive"]),
    ("NVMe", ["NVMe SSD"]),
]

_DRIVERS = [
    ("nvidia", "NVIDIA graphics"),
    ("amdgpu", "AMD graphics"),
    ("iwlwifi", "Intel Wi-Fi"),
    ("r8169", "Realtek Ethernet"),
    ("xhci_hcd", "USB 3.0"),
    ("nvme", "NVMe SSD"),
    ("snd_hda_intel", "Intel HD Audio"),
]

# Per-component test names for `test_hardware`.
HARDWARE_TESTS: Dict[str, List[str]] = {
    "memory": ["Memory cell check", "Read/write test", "Stress test"],
    "cpu": ["Arithmetic operations", "SIMD instructions", "Thermal monitoring"],
    "disk": ["Sector scan", "SMART check", "Read/write throughput"],
    "gpu": ["Rendering", "CUDA/OpenCL compute", "Temperature"],
}
_HARDWARE_ALIASES = {"ram": "memory", "storage": "disk"}


def normalize_component(component: str) -> str:
    c = component.lower()
    return _HARDWARE_ALIASES.get(c, c)


def hardware_tests(component: str) -> List[str]:
    return list(HARDWARE_TESTS.get(normalize_component(component)) or ["Basic test", "Functional test"])


class FakeSystemInfo:
    """Fabricates plausible hardware facts from an injected random source.

    Nothing here looks at the host machine; the same seed always yields the
    same sequence of answers.
    """

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def cpu(self) -> Dict[str, Any]:
        vendor, model, cores, mhz = self.rng.choice(_CPUS)
        return {"vendor": vendor, "model": model, "cores": cores, "frequency_mhz": mhz}

    def memory(self) -> Dict[str, Any]:
        size, kind, mhz = self.rng.choice(_MEMORY)
        return {"size_gb": size, "type": kind, "speed_mhz": mhz}

    def disk(self) -> Dict[str, Any]:
        vendor, model, size, bus = self.rng.choice(_DISKS)
        return {"vendor": vendor, "model": model, "size_gb": size, "type": bus}

    def gpu(self) -> Dict[str, Any]:
        vendor, model, vram = self.rng.choice(_GPUS)
        return {"vendor": vendor, "model": model, "vram_gb": vram}

    def network(self) -> Dict[str, Any]:
        vendor, model, speed = self.rng.choice(_NICS)
        return {
            "adapter": f"{vendor} {model}",
            "speed": speed,
            "mac": self.mac_address(),
            "ip": self.ip_address(),
        }

    def os(self) -> Tuple[str, str]:
        return self.rng.choice(_SYSTEMS)

    def kernel(self) -> str:
        return self.rng.choice(_KERNELS)

    def bios(self) -> Dict[str, Any]:
        vendor, kind, version = self.rng.choice(_BIOSES)
        return {"vendor": vendor, "type": kind, "version": version}

    def mac_address(self) -> str:
        return ":".join(f"{self.rng.randrange(256):02x}" for _ in range(6))

    def ip_address(self) -> str:
        return f"192.168.{self.rng.randrange(0, 255)}.{self.rng.randrange(1, 254)}"

    def buses(self) -> List[Tuple[str, List[str]]]:
        found = []
        for bus, devices in _BUSES:
            k = self.rng.randint(1, len(devices))
            found.append((bus, devices[:k]))
        return found

    def drivers(self) -> List[Tuple[str, str]]:
        k = self.rng.randint(3, len(_DRIVERS))
        picked = set(self.rng.sample(range(len(_DRIVERS)), k))
        return [d for i, d in enumerate(_DRIVERS) if i in picked]

    def key_id(self) -> str:
        return f"{self.rng.getrandbits(64):016X}"

    def jitter(self, base: int, spread: float = 0.15) -> int:
        """`base` +/- `spread`, never negative."""

        delta = int(base * spread)
        return max(0, base + self.rng.randint(-delta, delta))
