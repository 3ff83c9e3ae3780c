"""
Error types raised or returned by TypedFlagParser.

Declaration errors are returned wrapped in ``result.Err`` so the caller can
decide whether to continue. Parse errors are collected per offending token
and reported on the ``ParseResult``. Only contract violations are raised.
"""

import enum
from typing import Optional


class ErrorCode(str, enum.Enum):
    """Short machine-readable codes attached to every error."""

    OK = ""
    UNKNOWN_TYPE = "UNKNOWN TYPE"
    SHORT_IN_USE = "SHORT ALREADY USED"
    ARG_IN_USE = "ARG ALREADY USED"
    INVALID_INTEGER = "INVALID INTEGER"
    INVALID_FLOAT = "INVALID FLOAT"
    MISSING_VALUE = "MISSING VALUE"
    UNKNOWN_ARGUMENT = "UNKNOWN ARGUMENT"
    UNSUPPORTED_ASSIGNMENT = "UNSUPPORTED ASSIGNMENT"


class ArgumentError(Exception):
    """Base class for all errors concerning a single argument."""

    code: ErrorCode = ErrorCode.OK

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


# Declaration errors


class DeclarationError(ArgumentError):
    """An argument could not be declared."""


class DuplicateNameError(DeclarationError):
    code = ErrorCode.ARG_IN_USE

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Argument {name} already exists")


class DuplicateShortError(DeclarationError):
    code = ErrorCode.SHORT_IN_USE

    def __init__(self, name: str, short: str, owner: str) -> None:
        super().__init__(name, f"Short {short} already in use in {owner}")
        self.short = short
        self.owner = owner


class UnsupportedKindError(DeclarationError):
    code = ErrorCode.UNKNOWN_TYPE

    def __init__(self, name: str, kind: object, default: object) -> None:
        super().__init__(
            name,
            f"Unsupported type for argument {name}: kind {kind!r} "
            f"with default {default!r} ({type(default).__name__})",
        )
        self.kind = kind
        self.default = default


# Parse errors


class ParseError(ArgumentError):
    """A single token could not be applied to its argument."""

    def __init__(self, name: str, option: str, message: str) -> None:
        super().__init__(name, message)
        self.option = option


class InvalidIntegerLiteralError(ParseError):
    code = ErrorCode.INVALID_INTEGER

    def __init__(self, name: str, option: str, value: str) -> None:
        super().__init__(
            name, option, f"invalid integer value for argument {name}: {value!r}"
        )
        self.value = value


class InvalidFloatLiteralError(ParseError):
    code = ErrorCode.INVALID_FLOAT

    def __init__(self, name: str, option: str, value: str) -> None:
        super().__init__(
            name, option, f"invalid float value for argument {name}: {value!r}"
        )
        self.value = value


class MissingValueError(ParseError):
    code = ErrorCode.MISSING_VALUE

    def __init__(self, name: str, option: str) -> None:
        super().__init__(
            name, option, f"argument {name} ({option}) expects a value but none was given"
        )


class UnknownArgumentError(ParseError):
    """An option on the command line matches no declared argument."""

    code = ErrorCode.UNKNOWN_ARGUMENT

    def __init__(self, option: str, message: Optional[str] = None) -> None:
        super().__init__("", option, message or f"unknown argument: {option}")


class UnknownAliasError(UnknownArgumentError):
    def __init__(self, alias: str, option: str) -> None:
        super().__init__(option, f"unknown short alias {alias!r} in {option}")
        self.alias = alias


class UnsupportedAssignmentTypeError(ArgumentError):
    """The stored kind of an argument cannot be assigned from a token."""

    code = ErrorCode.UNSUPPORTED_ASSIGNMENT

    def __init__(self, name: str, kind: object) -> None:
        super().__init__(
            name, f"Unsupported argument type for argument {name}: {kind!r}"
        )
        self.kind = kind
