import dataclasses
import logging

import pytest
from result import Err, Ok

from typedflags import (
    InvalidFloatLiteralError,
    InvalidIntegerLiteralError,
    MissingValueError,
    ParseResult,
    TypedFlagParser,
    UnknownAliasError,
    UnknownArgumentError,
    UnsupportedAssignmentTypeError,
)


@pytest.fixture
def parser():
    """A parser with one argument of every kind."""
    parser = TypedFlagParser()
    parser.declare_string("host", "H", "localhost", "Host to connect to")
    parser.declare_int("port", "p", 8080, "Port to connect to", "Network")
    parser.declare_float("ratio", "r", 0.5, "Sampling ratio")
    parser.declare_flag("verbose", "v", "Enable verbose output", "Output")
    parser.declare_flag("all", "a", "Show everything", "Output")
    parser.declare_flag("bare", "b", "Bare output", "Output")
    return parser


class TestTypedFlagParser:
    """Test suite for TypedFlagParser.parse."""

    def test_long_string_option(self, parser):
        """Test that --name takes the next token verbatim."""
        result = parser.parse(["--host", "example.com"])

        assert isinstance(result, ParseResult)
        assert result.ok
        assert parser.get_string("host") == "example.com"
        assert result.values["host"] == "example.com"

    def test_short_integer_option(self, parser):
        """Test that -x resolves the alias and converts the value."""
        parser.parse(["-p", "9090"])

        value = parser.get_int("port")
        assert value == 9090
        assert isinstance(value, int)

    def test_invalid_integer_keeps_previous_value(self, parser):
        """Test that an invalid integer is reported and the default kept."""
        result = parser.parse(["-p", "abc"])

        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, InvalidIntegerLiteralError)
        assert error.name == "port"
        assert error.option == "-p"
        assert error.value == "abc"
        assert parser.get_int("port") == 8080

    def test_errors_do_not_stop_the_scan(self, parser):
        """Test that other options are still applied after an error."""
        result = parser.parse(["--port", "8o80", "--host", "example.com", "-v"])

        assert not result.ok
        assert [type(e) for e in result.errors] == [InvalidIntegerLiteralError]
        assert parser.get_string("host") == "example.com"
        assert parser.get_flag("verbose") is True

    @pytest.mark.parametrize("literal", ["1.5", " 7", "1_000", "0x10", ""])
    def test_integer_must_be_base_ten(self, parser, literal):
        """Test that only plain base-10 literals are accepted."""
        result = parser.parse(["--port", literal])
        assert isinstance(result.errors[0], InvalidIntegerLiteralError)

    def test_signed_integers(self, parser):
        """Test that signed integer literals are accepted."""
        parser.parse(["--port", "-5"])
        assert parser.get_int("port") == -5

    def test_float_option(self, parser):
        """Test that float options are assigned."""
        parser.parse(["-r", "2.25"])
        assert parser.get_float("ratio") == 2.25

    def test_invalid_float(self, parser):
        """Test that an invalid float is reported."""
        result = parser.parse(["--ratio", "half"])

        assert isinstance(result.errors[0], InvalidFloatLiteralError)
        assert parser.get_float("ratio") == 0.5

    def test_flag(self, parser):
        """Test that a flag becomes True."""
        parser.parse(["-v"])
        assert parser.get_flag("verbose") is True
        assert parser.get_flag("all") is False

    def test_flag_ignores_following_token(self, parser):
        """Test that a flag does not consume the next token."""
        parser.parse(["--verbose", "--host", "example.com"])

        assert parser.get_flag("verbose") is True
        assert parser.get_string("host") == "example.com"

    def test_flag_cluster(self, parser):
        """Test that every alias in a cluster is applied."""
        parser.parse(["-ab"])

        assert parser.get_flag("all") is True
        assert parser.get_flag("bare") is True
        assert parser.get_flag("verbose") is False

    def test_cluster_shares_the_next_token(self, parser):
        """Test that value options in a cluster read the same next token."""
        parser.parse(["-vp", "9090"])

        assert parser.get_flag("verbose") is True
        assert parser.get_int("port") == 9090

    def test_tokens_without_dash_are_skipped(self, parser):
        """Test that stray tokens are neither collected nor an error."""
        result = parser.parse(["stray", "--host", "example.com", "other", "-"])

        assert result.ok
        assert parser.get_string("host") == "example.com"
        assert set(result.values) == set(parser.values)

    def test_unknown_options_are_ignored(self, parser):
        """Test that unresolvable aliases and names are dropped silently."""
        result = parser.parse(["-x", "--nope", "1", "-vz"])

        assert result.ok
        assert result.warnings == []
        assert parser.get_flag("verbose") is True
        assert "nope" not in parser.values

    def test_missing_value(self, parser):
        """Test that a trailing value option reports a missing value."""
        result = parser.parse(["-v", "-p"])

        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, MissingValueError)
        assert error.name == "port"
        assert parser.get_int("port") == 8080
        assert parser.get_flag("verbose") is True

    def test_trailing_flag_needs_no_value(self, parser):
        """Test that a flag may be the last token."""
        result = parser.parse(["--host", "example.com", "-ab"])
        assert result.ok

    def test_parse_is_idempotent(self, parser):
        """Test that only the first parse is applied."""
        first = parser.parse(["--host", "first.example.com"])
        second = parser.parse(["--host", "second.example.com", "-v"])

        assert second is first
        assert parser.parsed
        assert parser.get_string("host") == "first.example.com"
        assert parser.get_flag("verbose") is False

    def test_parse_reads_sys_argv(self, parser, monkeypatch):
        """Test that sys.argv is used when no arguments are given."""
        monkeypatch.setattr("sys.argv", ["prog", "--port", "1234"])
        parser.parse()
        assert parser.get_int("port") == 1234

    def test_value_types_preserved(self, parser):
        """Test that every stored value keeps the type of its kind."""
        parser.parse(["-H", "h", "-p", "1", "-r", "2", "-v"])

        for descriptor in parser.arguments:
            assert isinstance(
                parser.get(descriptor.name), descriptor.kind.python_type
            )

    def test_to_result(self, parser):
        """Test converting a parse result into Ok or Err."""
        assert isinstance(parser.parse(["-p", "1"]).to_result(), Ok)

        other = TypedFlagParser()
        other.declare_int("port", "p", 1, "Port")
        outcome = other.parse(["-p"]).to_result()
        assert isinstance(outcome, Err)
        assert isinstance(outcome.unwrap_err()[0], MissingValueError)

    def test_unsupported_assignment_raises(self, parser):
        """Test that an argument of an unknown kind cannot be assigned."""
        descriptor = parser._descriptors["host"]
        parser._descriptors["host"] = dataclasses.replace(descriptor, kind="list")

        with pytest.raises(UnsupportedAssignmentTypeError) as exc:
            parser.parse(["--host", "example.com"])
        assert exc.value.name == "host"


class TestStrictAliases:
    """Test suite for reporting unknown options."""

    def test_unknown_options_reported(self, caplog):
        """Test that strict mode reports unknown aliases and names."""
        parser = TypedFlagParser(strict_aliases=True)
        parser.declare_flag("verbose", "v", "Enable verbose output")

        with caplog.at_level(logging.WARNING, logger="typedflags.parser"):
            result = parser.parse(["-x", "--nope", "-vz"])

        assert result.ok
        assert [type(w) for w in result.warnings] == [
            UnknownAliasError,
            UnknownArgumentError,
            UnknownAliasError,
        ]
        assert result.warnings[0].alias == "x"
        assert result.warnings[1].option == "--nope"
        assert result.warnings[2].option == "-vz"
        assert parser.get_flag("verbose") is True
        assert "unknown argument: --nope" in caplog.text


class TestHelpRequest:
    """Test suite for help handling in parse."""

    def test_help_flag_registered(self):
        """Test that help/h is declared when parsing starts."""
        parser = TypedFlagParser()
        parser.parse([])

        assert parser.resolve_short("h") == "help"
        assert parser.get_flag("help") is False

    def test_help_not_registered_when_alias_taken(self):
        """Test that an existing -h alias is left alone."""
        parser = TypedFlagParser()
        parser.declare_string("host", "h", "localhost", "Host")
        parser.parse(["-h"])

        assert "help" not in parser.values
        assert parser.resolve_short("h") == "host"

    def test_help_stops_parsing(self):
        """Test that a help token short-circuits every other token."""
        parser = TypedFlagParser()
        parser.declare_string("host", "H", "localhost", "Host")
        parser.declare_flag("verbose", "v", "Verbose")

        result = parser.parse(["--host", "example.com", "-v", "--help"])

        assert result.help_requested
        assert not result.ok
        assert parser.get_string("host") == "localhost"
        assert parser.get_flag("verbose") is False
        assert parser.get_flag("help") is False
        assert any("host" in line and "-H" in line for line in result.help_lines)
        assert any("verbose" in line and "-v" in line for line in result.help_lines)

    def test_help_token_anywhere(self):
        """Test that -h is recognised even after a value option."""
        parser = TypedFlagParser()
        parser.declare_int("port", "p", 1, "Port")

        assert parser.parse(["-p", "2", "-h"]).help_requested

    def test_help_is_not_a_completed_parse(self):
        """Test that parsing again after a help request applies the tokens."""
        parser = TypedFlagParser()
        parser.declare_int("port", "p", 1, "Port")

        assert parser.parse(["--help"]).help_requested
        assert not parser.parsed

        parser.parse(["-p", "2"])
        assert parser.get_int("port") == 2
