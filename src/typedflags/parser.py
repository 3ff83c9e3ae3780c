"""
TypedFlagParser - declare typed command-line options and parse them in one pass.

This module provides a small registry of named options (string, integer,
float and boolean flag), a single left-to-right scan over an argument list
that assigns typed values to them, and grouped help text. Help requests and
parse errors are returned to the caller; only the ``parse_args`` entry point
prints and exits.
"""

import dataclasses
import logging
import re
import sys
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, TextIO, Union, cast

from result import Err, Ok, Result

from .arguments import (
    ArgumentDescriptor,
    Kind,
    Value,
    determine_group,
)
from .errors import (
    DeclarationError,
    DuplicateNameError,
    DuplicateShortError,
    InvalidFloatLiteralError,
    InvalidIntegerLiteralError,
    MissingValueError,
    ParseError,
    UnknownAliasError,
    UnknownArgumentError,
    UnsupportedAssignmentTypeError,
    UnsupportedKindError,
)
from .help import format_argument, render_help

logger = logging.getLogger(__name__)

HELP_NAME = "help"
HELP_SHORT = "h"
HELP_TEXT = "Displays this help text"
HELP_TOKENS = ("--help", "-h")

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")

_DECLARATION_KEYS = ("name", "short", "default", "help", "group")


@dataclasses.dataclass
class ParseResult:
    """
    Outcome of a single parse.

    Attributes:
        values: Snapshot of the value store after the scan.
        errors: One entry per token that could not be applied.
        warnings: Unknown options, only reported in strict mode.
        help_requested: True if ``--help`` or ``-h`` was given; no other
            token was applied in that case.
        help_lines: Rendered help text when help was requested.
    """

    values: dict[str, Value]
    errors: list[ParseError] = dataclasses.field(default_factory=list)
    warnings: list[UnknownArgumentError] = dataclasses.field(default_factory=list)
    help_requested: bool = False
    help_lines: list[str] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and not self.help_requested

    def to_result(self) -> Result[dict[str, Value], list[ParseError]]:
        """Return ``Ok(values)`` if every token applied, else ``Err(errors)``."""
        if self.errors:
            return Err(list(self.errors))
        return Ok(dict(self.values))


class TypedFlagParser:
    """
    A command-line parser for named, typed options.

    Options are declared with one of the ``declare_*`` methods (or
    ``add_argument``, which infers the kind from the default value). Each
    declaration returns ``Ok(descriptor)`` or ``Err(DeclarationError)``.

    Example:
        parser = TypedFlagParser(about="Example tool")
        parser.declare_string("host", "H", "localhost", "Host to connect to")
        parser.declare_int("port", "p", 8080, "Port to connect to")
        parser.declare_flag("verbose", "v", "Enable verbose output", "Output")

        result = parser.parse(["--host", "example.com", "-vp", "9090"])
        if result.help_requested:
            print("\\n".join(result.help_lines))
        port = parser.get_int("port")

        # Or let the parser print help and exit, reading sys.argv:
        # values = parser.parse_args()
    """

    def __init__(
        self,
        arguments: Optional[list] = None,
        about: str = "",
        strict_aliases: bool = False,
    ) -> None:
        """
        Initialize the TypedFlagParser.

        Args:
            arguments: Optional declarations to add up front. Each item is a
                ``(name, short, default, help[, group])`` tuple or a dict
                with those keys; the kind is inferred from the default.
            about: Program description printed above the help listing.
            strict_aliases: Report unknown options as warnings on the parse
                result instead of ignoring them silently.
        """
        self._about = about
        self.strict_aliases = strict_aliases

        self._descriptors: dict[str, ArgumentDescriptor] = {}
        self._values: dict[str, Value] = {}
        self._short_to_name: dict[str, str] = {}
        self._help_text: dict[str, list[str]] = {}
        self._parsed: Optional[ParseResult] = None

        if arguments:
            for item in arguments:
                self._add_declared(item)

    @staticmethod
    def _normalize_declaration(item: Any) -> dict[str, Any]:
        if isinstance(item, dict):
            missing = [key for key in ("name", "default") if key not in item]
            unknown = [key for key in item if key not in _DECLARATION_KEYS]
            if missing or unknown:
                raise ValueError(
                    f"Invalid argument declaration {item!r}: "
                    f"missing keys {missing}, unknown keys {unknown}"
                )
            return dict(item)
        if isinstance(item, (list, tuple)) and 4 <= len(item) <= 5:
            return dict(zip(_DECLARATION_KEYS, item))
        raise ValueError(
            "Each argument must be a (name, short, default, help[, group]) tuple "
            "or a dict with those keys"
        )

    def _add_declared(self, item: Any) -> None:
        declaration = self._normalize_declaration(item)
        declaration.setdefault("short", "")
        declaration.setdefault("help", "")
        outcome = self.add_argument(**declaration)
        if outcome.is_err():
            raise outcome.unwrap_err()

    # Declaration

    @property
    def about(self) -> str:
        return self._about

    @about.setter
    def about(self, message: str) -> None:
        self._about = message

    def declare(
        self,
        kind: Kind,
        name: str,
        short: Optional[str],
        help: str,
        default: Optional[Value] = None,
        group: Optional[str] = None,
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        """
        Declare a new argument.

        Args:
            kind: Kind of value the argument holds.
            name: Full name, used on the command line as ``--name``.
            short: Short alias used as ``-x``; empty or None for no alias.
            help: Description shown in the help listing.
            default: Value before parsing. Flags default to False when None.
            group: Help group; "Usage" when None or empty.

        Returns:
            Result[ArgumentDescriptor, DeclarationError]:
                - Ok with the stored descriptor,
                - Err with DuplicateNameError, DuplicateShortError or
                  UnsupportedKindError. Nothing is stored on error.

        Raises:
            ValueError: If ``name`` is empty.
        """
        if not name:
            raise ValueError("Argument name must be non-empty")
        short = short or ""

        if name in self._descriptors:
            return Err(DuplicateNameError(name))

        if short and short in self._short_to_name:
            return Err(DuplicateShortError(name, short, self._short_to_name[short]))

        if kind is Kind.FLAG and default is None:
            default = False
        if not isinstance(kind, Kind) or not kind.accepts(default):
            return Err(UnsupportedKindError(name, kind, default))

        descriptor = ArgumentDescriptor(
            name=name,
            short=short,
            help=help,
            group=determine_group(group),
            kind=kind,
            default=kind.coerce(default),
        )
        self._descriptors[name] = descriptor
        self._values[name] = descriptor.default
        if short:
            self._short_to_name[short] = name
        self._help_text.setdefault(descriptor.group, []).append(
            format_argument(descriptor)
        )

        logger.debug(
            "Declared %s argument %s (group %s)",
            kind.value,
            "/".join(descriptor.option_strings),
            descriptor.group,
        )
        return Ok(descriptor)

    def declare_flag(
        self, name: str, short: Optional[str], help: str, group: Optional[str] = None
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        """Declare a boolean flag; it is False until given on the command line."""
        return self.declare(Kind.FLAG, name, short, help, False, group)

    def declare_string(
        self,
        name: str,
        short: Optional[str],
        default: str,
        help: str,
        group: Optional[str] = None,
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        return self.declare(Kind.STRING, name, short, help, default, group)

    def declare_int(
        self,
        name: str,
        short: Optional[str],
        default: int,
        help: str,
        group: Optional[str] = None,
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        return self.declare(Kind.INTEGER, name, short, help, default, group)

    def declare_float(
        self,
        name: str,
        short: Optional[str],
        default: float,
        help: str,
        group: Optional[str] = None,
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        return self.declare(Kind.FLOAT, name, short, help, default, group)

    def add_argument(
        self,
        name: str,
        short: Optional[str],
        default: Any,
        help: str,
        group: Optional[str] = None,
    ) -> Result[ArgumentDescriptor, DeclarationError]:
        """
        Declare an argument whose kind is inferred from its default value.

        ``bool`` defaults declare a flag, ``int`` an integer, ``float`` a float
        and ``str`` a string. Any other default is rejected with
        UnsupportedKindError.
        """
        # An unsupported default leaves kind as None, which declare rejects
        # after the name and alias checks.
        kind = cast(Kind, Kind.from_value(default))
        return self.declare(kind, name, short, help, default, group)

    # Lookup

    def resolve_short(self, short: str) -> Optional[str]:
        """Return the full name owning ``short``, or None."""
        return self._short_to_name.get(short)

    @property
    def arguments(self) -> tuple[ArgumentDescriptor, ...]:
        """Declared arguments, in declaration order."""
        return tuple(self._descriptors.values())

    @property
    def values(self) -> Mapping[str, Value]:
        """Read-only view of the current value of every argument."""
        return MappingProxyType(self._values)

    @property
    def parsed(self) -> bool:
        return self._parsed is not None

    def get(self, name: str) -> Value:
        return self._values[name]

    def _get_typed(self, name: str, kind: Kind) -> Any:
        descriptor = self._descriptors[name]
        if descriptor.kind is not kind:
            raise TypeError(
                f"Argument '{name}' is a {descriptor.kind.value} argument, not {kind.value}"
            )
        return self._values[name]

    def get_string(self, name: str) -> str:
        return self._get_typed(name, Kind.STRING)

    def get_int(self, name: str) -> int:
        return self._get_typed(name, Kind.INTEGER)

    def get_float(self, name: str) -> float:
        return self._get_typed(name, Kind.FLOAT)

    def get_flag(self, name: str) -> bool:
        return self._get_typed(name, Kind.FLAG)

    # Help

    def format_help(self) -> list[str]:
        """Render the grouped help listing as a list of lines."""
        return render_help(self._help_text, self._about)

    def print_help(self, file: Optional[TextIO] = None) -> None:
        if file is None:
            file = sys.stdout
        for line in self.format_help():
            print(line, file=file)

    def _ensure_help_argument(self) -> None:
        if HELP_NAME in self._descriptors or HELP_SHORT in self._short_to_name:
            return
        self.declare_flag(HELP_NAME, HELP_SHORT, HELP_TEXT)
        logger.debug("Registered default --%s/-%s flag", HELP_NAME, HELP_SHORT)

    # Parsing

    def parse(self, args: Optional[Sequence[str]] = None) -> ParseResult:
        """
        Parse command-line arguments into the value store.

        Tokens that do not start with ``-`` are skipped. ``--name`` and ``-x``
        take the following token as their value unless they are flags. In a
        cluster such as ``-abc`` every alias is applied against the same
        following token, so clusters are meant for flags.

        Parsing happens once: after a completed scan, later calls return the
        first result and leave the store untouched.

        Args:
            args (Optional[Sequence[str]]): Arguments to parse, without the
                program name. If None, uses sys.argv[1:].

        Returns:
            ParseResult: Values, per-token errors and the help request.

        Raises:
            UnsupportedAssignmentTypeError: If an argument's kind cannot be
                assigned from a token.
        """
        if self._parsed is not None:
            logger.debug("Arguments already parsed, ignoring new arguments")
            return self._parsed

        tokens = list(sys.argv[1:] if args is None else args)

        self._ensure_help_argument()

        if any(token in HELP_TOKENS for token in tokens):
            return ParseResult(
                values=dict(self._values),
                help_requested=True,
                help_lines=self.format_help(),
            )

        result = ParseResult(values={})
        for index, token in enumerate(tokens):
            # Disregard anything without a - or --
            if not token.startswith("-"):
                continue

            if token.startswith("--"):
                self._apply(token[2:], token, tokens, index + 1, result)
            elif len(token) == 2:
                self._apply_short(token[1], token, tokens, index + 1, result)
            elif len(token) > 2:
                for short in token[1:]:
                    self._apply_short(short, token, tokens, index + 1, result)

        result.values = dict(self._values)
        self._parsed = result
        return result

    def _apply_short(
        self,
        short: str,
        token: str,
        tokens: list[str],
        value_index: int,
        result: ParseResult,
    ) -> None:
        name = self.resolve_short(short)
        if name is None:
            if self.strict_aliases:
                self._warn(result, UnknownAliasError(short, token))
            return
        self._apply(name, token, tokens, value_index, result)

    def _apply(
        self,
        name: str,
        token: str,
        tokens: list[str],
        value_index: int,
        result: ParseResult,
    ) -> None:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            if self.strict_aliases:
                self._warn(result, UnknownArgumentError(token))
            return

        error = self._set_value(descriptor, token, tokens, value_index)
        if error is not None:
            result.errors.append(error)

    def _warn(self, result: ParseResult, warning: UnknownArgumentError) -> None:
        logger.warning("%s", warning)
        result.warnings.append(warning)

    def _set_value(
        self,
        descriptor: ArgumentDescriptor,
        option: str,
        tokens: list[str],
        value_index: int,
    ) -> Optional[ParseError]:
        """
        Assign a value to ``descriptor`` from ``tokens[value_index]``.

        Returns:
            Optional[ParseError]: The error for this token, or None on success.
        """
        name = descriptor.name
        kind = descriptor.kind

        if kind is Kind.FLAG:
            self._values[name] = True
            return None

        if kind not in (Kind.STRING, Kind.INTEGER, Kind.FLOAT):
            raise UnsupportedAssignmentTypeError(name, kind)

        if value_index >= len(tokens):
            return MissingValueError(name, option)
        raw = tokens[value_index]

        value: Union[str, int, float]
        if kind is Kind.STRING:
            value = raw
        elif kind is Kind.INTEGER:
            if not _INTEGER_LITERAL.fullmatch(raw):
                return InvalidIntegerLiteralError(name, option, raw)
            value = int(raw)
        else:
            try:
                value = float(raw)
            except ValueError:
                return InvalidFloatLiteralError(name, option, raw)

        self._values[name] = value
        return None

    def parse_args(self, args: Optional[Sequence[str]] = None) -> dict[str, Value]:
        """
        Parse arguments as a program entry point.

        Prints the help listing and exits with status 0 if help is requested.
        Parse errors are logged as warnings and the remaining values are
        still applied.

        Args:
            args (Optional[Sequence[str]]): Arguments to parse. If None, uses
                sys.argv[1:].

        Returns:
            dict[str, Value]: The value of every declared argument.

        Raises:
            SystemExit: After printing help.
        """
        result = self.parse(args)
        if result.help_requested:
            self.print_help()
            sys.exit(0)

        for error in result.errors:
            logger.warning("%s", error)
        return dict(result.values)
