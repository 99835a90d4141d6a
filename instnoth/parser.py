from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import ParseError, ParseErrorKind
from .model import Command, Phase, Script
from .registry import INT, QUOTED, ArgSpec, CommandSchema, lookup

logger = logging.getLogger(__name__)

_SCALAR_DIRECTIVES = ("package", "version", "description", "author")
_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t"}
_INT_RE = re.compile(r"[0-9]+")
_OPTION_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class Token:
    kind: str  # word|string|option
    value: str
    column: int
    name: Optional[str] = None
    quoted: bool = False


def _read_quoted(text: str, start: int, *, line: int, path: str) -> Tuple[str, int]:
    """Read a quoted string whose opening quote is at `start`.

    Returns (value, index just past the closing quote).
    """

    out: List[str] = []
    i = start + 1
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        if c == '"':
            return "".join(out), i + 1
        out.append(c)
        i += 1
    raise ParseError(
        ParseErrorKind.UNTERMINATED_STRING,
        "missing closing quote",
        line=line,
        column=start + 1,
        path=path,
    )


def tokenize(text: str, *, line: int = 1, path: str = "<string>") -> List[Token]:
    """Split one source line into tokens; an unquoted `#` at a token boundary ends the line."""

    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c.isspace():
            i += 1
            continue
        if c == "#":
            break
        if c == '"':
            col = i + 1
            value, i = _read_quoted(text, i, line=line, path=path)
            tokens.append(Token(kind="string", value=value, column=col, quoted=True))
            continue

        start = i
        while i < n and not text[i].isspace() and text[i] != '"':
            i += 1
        word = text[start:i]
        col = start + 1

        if "=" in word:
            name, _, value = word.partition("=")
            if _OPTION_NAME_RE.fullmatch(name):
                if value == "" and i < n and text[i] == '"':
                    value, i = _read_quoted(text, i, line=line, path=path)
                    tokens.append(Token(kind="option", value=value, column=col, name=name, quoted=True))
                else:
                    tokens.append(Token(kind="option", value=value, column=col, name=name))
                continue
        tokens.append(Token(kind="word", value=word, column=col))
    return tokens


class _Parser:
    def __init__(self, source: str, path: str) -> None:
        self.source = source
        self.path = path
        self.meta: Dict[str, str] = {}
        self.dependencies: List[str] = []
        self.phases: List[Phase] = []

    def error(self, kind: ParseErrorKind, detail: str, *, line: int, column: int = 1, field: Optional[str] = None) -> ParseError:
        return ParseError(kind, detail, line=line, column=column, path=self.path, field=field)

    def parse(self) -> Script:
        phase_name: Optional[str] = None
        phase_line = 0
        phase_col = 1
        awaiting_brace = False
        commands: List[Command] = []

        lines = self.source.splitlines()
        for line_no, text in enumerate(lines, start=1):
            tokens = tokenize(text, line=line_no, path=self.path)
            if not tokens:
                continue
            head = tokens[0]

            if awaiting_brace:
                if len(tokens) == 1 and head.kind == "word" and head.value == "{":
                    awaiting_brace = False
                    continue
                raise self.error(
                    ParseErrorKind.UNCLOSED_PHASE_BLOCK,
                    f"expected '{{' to open phase {phase_name!r}",
                    line=line_no,
                    column=head.column,
                )

            if phase_name is not None:
                if len(tokens) == 1 and head.kind == "word" and head.value == "}":
                    self.phases.append(Phase(name=phase_name, commands=tuple(commands), line=phase_line))
                    phase_name = None
                    commands = []
                    continue
                commands.append(self.parse_command(tokens, text.strip(), line_no))
                continue

            if head.kind == "word" and head.value == "phase":
                phase_name, awaiting_brace = self.parse_phase_header(tokens, line_no)
                phase_line, phase_col = line_no, head.column
                continue

            self.parse_directive(tokens, line_no)

        if phase_name is not None:
            raise self.error(
                ParseErrorKind.UNCLOSED_PHASE_BLOCK,
                f"phase {phase_name!r} is never closed",
                line=phase_line,
                column=phase_col,
            )

        for key in ("package", "version"):
            if not self.meta.get(key):
                raise self.error(
                    ParseErrorKind.MISSING_REQUIRED_FIELD,
                    f"missing required directive '{key}:'",
                    line=1,
                    field=key,
                )

        script = Script(
            path=self.path,
            package=self.meta["package"],
            version=self.meta["version"],
            description=self.meta.get("description"),
            author=self.meta.get("author"),
            dependencies=tuple(self.dependencies),
            phases=tuple(self.phases),
        )
        logger.debug(
            "Parsed %s: package=%s version=%s phases=%d commands=%d",
            self.path,
            script.package,
            script.version,
            len(script.phases),
            script.command_count,
        )
        return script

    def parse_phase_header(self, tokens: List[Token], line_no: int) -> Tuple[str, bool]:
        rest = tokens[1:]
        if not rest or rest[0].kind == "option" or (rest[0].kind == "word" and rest[0].value == "{"):
            raise self.error(ParseErrorKind.ARITY_MISMATCH, "phase needs a name", line=line_no, column=tokens[0].column)
        name = rest[0].value
        rest = rest[1:]
        if not rest:
            return name, True
        if len(rest) == 1 and rest[0].kind == "word" and rest[0].value == "{":
            return name, False
        raise self.error(
            ParseErrorKind.ARITY_MISMATCH,
            "unexpected tokens after phase name",
            line=line_no,
            column=rest[0].column,
        )

    def parse_directive(self, tokens: List[Token], line_no: int) -> None:
        head = tokens[0]
        if head.kind != "word" or ":" not in head.value:
            raise self.error(
                ParseErrorKind.UNKNOWN_DIRECTIVE,
                f"expected a directive, got {head.value!r}",
                line=line_no,
                column=head.column,
            )

        key, _, remainder = head.value.partition(":")
        values = tokens[1:]
        if remainder:
            values = [Token(kind="word", value=remainder, column=head.column + len(key) + 1)] + values

        if key not in _SCALAR_DIRECTIVES and key != "depends":
            raise self.error(ParseErrorKind.UNKNOWN_DIRECTIVE, f"unknown directive {key!r}", line=line_no, column=head.column)

        for tok in values:
            if tok.kind == "option":
                raise self.error(
                    ParseErrorKind.TYPE_MISMATCH,
                    f"directive '{key}:' takes plain values",
                    line=line_no,
                    column=tok.column,
                )

        if key == "depends":
            for tok in values:
                for item in tok.value.split(","):
                    dep = item.strip()
                    if not dep:
                        continue
                    if dep in self.dependencies:
                        raise self.error(
                            ParseErrorKind.DUPLICATE_DEPENDENCY,
                            f"dependency {dep!r} listed twice",
                            line=line_no,
                            column=tok.column,
                        )
                    self.dependencies.append(dep)
            return

        if len(values) != 1:
            column = values[1].column if len(values) > 1 else head.column
            raise self.error(
                ParseErrorKind.ARITY_MISMATCH,
                f"directive '{key}:' takes exactly one value",
                line=line_no,
                column=column,
            )
        self.meta[key] = values[0].value

    def parse_command(self, tokens: List[Token], raw: str, line_no: int) -> Command:
        head = tokens[0]
        schema = lookup(head.value) if head.kind == "word" else None
        if schema is None:
            raise self.error(ParseErrorKind.UNKNOWN_COMMAND, f"unknown command {head.value!r}", line=line_no, column=head.column)

        positional = [t for t in tokens[1:] if t.kind != "option"]
        options = [t for t in tokens[1:] if t.kind == "option"]
        args: Dict[str, Any] = {}

        if len(positional) > len(schema.positional):
            extra = positional[len(schema.positional)]
            raise self.error(
                ParseErrorKind.ARITY_MISMATCH,
                f"{schema.name} takes {len(schema.positional)} positional argument(s), got {len(positional)}",
                line=line_no,
                column=extra.column,
            )
        for spec, tok in zip(schema.positional, positional):
            args[spec.name] = self.convert(spec, tok, schema, line_no)

        for tok in options:
            spec = schema.option(tok.name or "")
            if spec is None:
                raise self.error(
                    ParseErrorKind.ARITY_MISMATCH,
                    f"{schema.name} has no option {tok.name!r}",
                    line=line_no,
                    column=tok.column,
                )
            if spec.name in args:
                raise self.error(
                    ParseErrorKind.ARITY_MISMATCH,
                    f"option {spec.name!r} given twice",
                    line=line_no,
                    column=tok.column,
                )
            args[spec.name] = self.convert(spec, tok, schema, line_no)

        for spec in schema.slots:
            if spec.name in args:
                continue
            if spec.required:
                what = "argument" if spec in schema.positional else f"option '{spec.name}='"
                raise self.error(
                    ParseErrorKind.ARITY_MISMATCH,
                    f"{schema.name} is missing required {what} ({spec.name})",
                    line=line_no,
                    column=head.column,
                )
            args[spec.name] = spec.default

        return Command(name=schema.name, args=args, line=line_no, raw=raw)

    def convert(self, spec: ArgSpec, tok: Token, schema: CommandSchema, line_no: int) -> Any:
        if spec.type == QUOTED:
            if not tok.quoted:
                raise self.error(
                    ParseErrorKind.TYPE_MISMATCH,
                    f"{schema.name}: {spec.name} must be a quoted string",
                    line=line_no,
                    column=tok.column,
                )
            return tok.value

        if spec.type == INT:
            if not _INT_RE.fullmatch(tok.value):
                raise self.error(
                    ParseErrorKind.TYPE_MISMATCH,
                    f"{schema.name}: {spec.name} must be a non-negative integer, got {tok.value!r}",
                    line=line_no,
                    column=tok.column,
                )
            value = int(tok.value)
            if (spec.min_value is not None and value < spec.min_value) or (
                spec.max_value is not None and value > spec.max_value
            ):
                raise self.error(
                    ParseErrorKind.VALUE_OUT_OF_RANGE,
                    f"{schema.name}: {spec.name}={value} outside {spec.min_value}..{spec.max_value}",
                    line=line_no,
                    column=tok.column,
                )
            return value

        return tok.value


def parse(source_text: str, origin_path: str = "<string>") -> Script:
    """Parse `.instnoth` source into a Script. Raises ParseError on the first problem."""

    return _Parser(source_text, origin_path).parse()
