from __future__ import annotations

import pytest

from instnoth.errors import ParseError, ParseErrorKind
from instnoth.parser import parse, tokenize

from helpers import script_source


def _parse_error(text: str) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        parse(text, "test.instnoth")
    return excinfo.value


def test_tokenize_words_strings_and_options():
    tokens = tokenize('copy_file "a b.txt" to="/opt/x y"  # trailing', line=3)

    assert [t.kind for t in tokens] == ["word", "string", "option"]
    assert tokens[1].value == "a b.txt"
    assert tokens[1].column == 11
    assert tokens[2].name == "to"
    assert tokens[2].value == "/opt/x y"
    assert tokens[2].quoted


def test_tokenize_escapes():
    tokens = tokenize(r'message "say \"hi\"\n\tand \\ bye"')
    assert tokens[1].value == 'say "hi"\n\tand \\ bye'


def test_hash_inside_string_is_not_a_comment():
    tokens = tokenize('message "issue #42" # real comment')
    assert [t.value for t in tokens] == ["message", "issue #42"]


def test_parse_full_script():
    text = """
# header comment
package: "Demo"
version: "2.0"
description: "A demo package"
author: "Someone"
depends: "base.instnoth", "libs/tools.instnoth"

phase "Prepare" {
    message "Hello"
    progress 25
    download "https://example.com/demo.tgz" size=2048
}

phase "Install"
{
    copy_file "demo" to="/usr/bin/demo"
    set_permission "/usr/bin/demo"
}
"""
    script = parse(text, "demo.instnoth")

    assert script.path == "demo.instnoth"
    assert script.package == "Demo"
    assert script.version == "2.0"
    assert script.description == "A demo package"
    assert script.author == "Someone"
    assert script.dependencies == ("base.instnoth", "libs/tools.instnoth")
    assert [p.name for p in script.phases] == ["Prepare", "Install"]
    assert script.command_count == 5

    prepare = script.phases[0]
    assert [c.name for c in prepare.commands] == ["message", "progress", "download"]
    assert prepare.commands[1].args == {"value": 25}
    assert prepare.commands[2].args == {"url": "https://example.com/demo.tgz", "size": 2048}
    assert prepare.commands[2].line == 12

    install = script.phases[1]
    assert install.commands[0].args == {"source": "demo", "to": "/usr/bin/demo"}
    # default filled in
    assert install.commands[1].args == {"path": "/usr/bin/demo", "mode": "755"}


def test_defaults_for_optional_arguments():
    script = parse(script_source("X", body='download "u"\nextract "a.tgz"\ninstall_dep "pip"'))
    args = [c.args for c in script.phases[0].commands]
    assert args == [
        {"url": "u", "size": 1024},
        {"archive": "a.tgz", "to": ""},
        {"name": "pip", "version": "latest"},
    ]


def test_target_and_setting_options_default_to_empty():
    body = 'copy_file "a"\nsymlink "a"\nmount "/dev/sda1"\nconfigure key="a"\nconfigure'
    script = parse(script_source("X", body=body))
    args = [c.args for c in script.phases[0].commands]
    assert args == [
        {"source": "a", "to": ""},
        {"source": "a", "to": ""},
        {"device": "/dev/sda1", "to": ""},
        {"key": "a", "value": ""},
        {"key": "", "value": ""},
    ]


def test_script_without_phases_is_valid():
    script = parse('package: "Empty"\nversion: "0.1"\n')
    assert script.phases == ()
    assert script.dependencies == ()
    assert script.description is None


def test_depends_accepts_bare_and_comma_separated_values():
    script = parse('package: "a"\nversion: "1"\ndepends: b.instnoth,c.instnoth "d.instnoth"\n')
    assert script.dependencies == ("b.instnoth", "c.instnoth", "d.instnoth")


def test_integer_given_as_quoted_digits():
    script = parse(script_source("X", body='delay "250"'))
    assert script.phases[0].commands[0].args == {"ms": 250}


def test_progress_may_go_backwards():
    script = parse(script_source("X", body="progress 50\nprogress 10"))
    assert [c.args["value"] for c in script.phases[0].commands] == [50, 10]


def test_unterminated_string():
    err = _parse_error('package: "Demo\nversion: "1"\n')
    assert err.kind == ParseErrorKind.UNTERMINATED_STRING
    assert (err.line, err.column) == (1, 10)


def test_unknown_directive():
    err = _parse_error('package: "a"\nversion: "1"\nlicense: "MIT"\n')
    assert err.kind == ParseErrorKind.UNKNOWN_DIRECTIVE
    assert err.line == 3


def test_stray_word_at_top_level_is_unknown_directive():
    err = _parse_error('package: "a"\nversion: "1"\nmessage "hi"\n')
    assert err.kind == ParseErrorKind.UNKNOWN_DIRECTIVE


def test_unknown_command_reports_position():
    err = _parse_error(script_source("a", body="    frobnicate now"))
    assert err.kind == ParseErrorKind.UNKNOWN_COMMAND
    assert err.line == 4
    assert err.column == 5
    assert "test.instnoth:4:5" in str(err)


@pytest.mark.parametrize(
    "body",
    [
        "message",
        'message "a" "b"',
        'copy_file "a" to="b" to="c"',
        'download "u" speed=3',
        "mount",
    ],
)
def test_arity_mismatch(body):
    err = _parse_error(script_source("a", body=body))
    assert err.kind == ParseErrorKind.ARITY_MISMATCH


@pytest.mark.parametrize("body", ["message Hello", "delay fast", "progress -5", 'download "u" size=big'])
def test_type_mismatch(body):
    err = _parse_error(script_source("a", body=body))
    assert err.kind == ParseErrorKind.TYPE_MISMATCH


def test_progress_out_of_range():
    err = _parse_error(script_source("a", body="progress 101"))
    assert err.kind == ParseErrorKind.VALUE_OUT_OF_RANGE
    assert err.line == 4
    assert err.column == 14


@pytest.mark.parametrize("missing", ["package", "version"])
def test_missing_required_field(missing):
    lines = {"package": 'package: "a"', "version": 'version: "1"'}
    text = "\n".join(v for k, v in lines.items() if k != missing) + "\n"

    err = _parse_error(text)

    assert err.kind == ParseErrorKind.MISSING_REQUIRED_FIELD
    assert err.field == missing


def test_unclosed_phase_block():
    err = _parse_error('package: "a"\nversion: "1"\nphase "Main" {\n    message "hi"\n')
    assert err.kind == ParseErrorKind.UNCLOSED_PHASE_BLOCK
    assert err.line == 3


def test_phase_header_without_brace_followed_by_command():
    err = _parse_error('package: "a"\nversion: "1"\nphase "Main"\n    message "hi"\n}\n')
    assert err.kind == ParseErrorKind.UNCLOSED_PHASE_BLOCK
    assert err.line == 4


def test_duplicate_dependency():
    err = _parse_error('package: "a"\nversion: "1"\ndepends: "b.instnoth" "b.instnoth"\n')
    assert err.kind == ParseErrorKind.DUPLICATE_DEPENDENCY


def test_error_message_includes_kind():
    err = _parse_error(script_source("a", body="progress 500"))
    assert "ValueOutOfRange" in str(err)
