"""InstNoth: an installer simulator that installs nothing.

Core design goals:
- Declarative `.instnoth` scripts, validated entirely at parse time
- Deterministic dependency ordering across scripts
- Execution as a stream of events, never real system changes
- Injectable randomness for fabricated hardware data
- Centralized logging
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
