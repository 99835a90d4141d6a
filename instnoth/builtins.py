from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

BUILTIN_DIR = Path(__file__).resolve().parent / "builtin"

BUILTIN_SCRIPTS: Dict[str, str] = {
    "python": "Python 3.12",
    "nodejs": "Node.js 20 LTS",
    "docker": "Docker Engine",
    "linux": "Arch Linux",
    "all": "Everything (Python + Node.js + Docker)",
    "devstack": "Full developer stack",
}


def builtin_path(name: str) -> Optional[str]:
    """Path of the bundled script called `name` (with or without extension)."""

    stem = name[: -len(".instnoth")] if name.endswith(".instnoth") else name
    if stem not in BUILTIN_SCRIPTS:
        return None
    return str(BUILTIN_DIR / f"{stem}.instnoth")
