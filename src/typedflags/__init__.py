"""
TypedFlagParser - a minimal parser for named, typed command-line options.

This package provides a registry of string, integer, float and flag options,
a single-pass parser that assigns typed values from an argument list
(``--name value``, ``-n value`` and flag clusters such as ``-abc``), and
grouped help text triggered by ``--help`` or ``-h``.
"""

from .arguments import ArgumentDescriptor, Kind
from .errors import (
    ArgumentError,
    DeclarationError,
    DuplicateNameError,
    DuplicateShortError,
    ErrorCode,
    InvalidFloatLiteralError,
    InvalidIntegerLiteralError,
    MissingValueError,
    ParseError,
    UnknownAliasError,
    UnknownArgumentError,
    UnsupportedAssignmentTypeError,
    UnsupportedKindError,
)
from .parser import ParseResult, TypedFlagParser

__version__ = "1.0.0"
__all__ = [
    "ArgumentDescriptor",
    "ArgumentError",
    "DeclarationError",
    "DuplicateNameError",
    "DuplicateShortError",
    "ErrorCode",
    "InvalidFloatLiteralError",
    "InvalidIntegerLiteralError",
    "Kind",
    "MissingValueError",
    "ParseError",
    "ParseResult",
    "TypedFlagParser",
    "UnknownAliasError",
    "UnknownArgumentError",
    "UnsupportedAssignmentTypeError",
    "UnsupportedKindError",
]
