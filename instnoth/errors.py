from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence


class InstnothError(RuntimeError):
    pass


class ParseErrorKind(str, Enum):
    UNTERMINATED_STRING = "UnterminatedString"
    UNKNOWN_DIRECTIVE = "UnknownDirective"
    UNKNOWN_COMMAND = "UnknownCommand"
    ARITY_MISMATCH = "ArityMismatch"
    TYPE_MISMATCH = "TypeMismatch"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    UNCLOSED_PHASE_BLOCK = "UnclosedPhaseBlock"
    VALUE_OUT_OF_RANGE = "ValueOutOfRange"
    DUPLICATE_DEPENDENCY = "DuplicateDependency"


class ParseError(InstnothError):
    """Malformed script text. Parsing stops at the first one."""

    def __init__(
        self,
        kind: ParseErrorKind,
        detail: str,
        *,
        line: int,
        column: int = 1,
        path: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.line = line
        self.column = column
        self.path = path
        # Only set for MissingRequiredField (package|version).
        self.field = field
        where = f"{path or '<string>'}:{line}:{column}"
        super().__init__(f"{where}: {kind.value}: {detail}")


class DependencyError(InstnothError):
    pass


class DependencyCycleError(DependencyError):
    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__("Dependency cycle: " + " -> ".join(self.cycle))


class DependencyNotFoundError(DependencyError):
    def __init__(self, path: str, referenced_by: Optional[str] = None) -> None:
        self.path = path
        self.referenced_by = referenced_by
        if referenced_by:
            msg = f"Script not found: {path} (required by {referenced_by})"
        else:
            msg = f"Script not found: {path}"
        super().__init__(msg)


class ConfigError(InstnothError):
    pass


class ScriptDecodeError(InstnothError):
    """Script bytes are not valid UTF-8."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: not valid UTF-8 ({reason})")
