"""
Argument descriptors and the kinds of value they hold.
"""

import dataclasses
import enum
from typing import Any, Optional, Union

Value = Union[str, int, float, bool]

DEFAULT_GROUP = "Usage"


class Kind(enum.Enum):
    """The four kinds of value an argument can hold."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    FLAG = "flag"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    @property
    def takes_value(self) -> bool:
        """Whether the option consumes the token following it."""
        return self is not Kind.FLAG

    def accepts(self, value: Any) -> bool:
        """
        Check whether ``value`` can be stored for an argument of this kind.

        ``bool`` is a subclass of ``int`` in Python, so it is rejected
        explicitly for the numeric kinds. Float arguments also accept plain
        integers, which are widened when stored.
        """
        if self is Kind.FLAG:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is Kind.INTEGER:
            return isinstance(value, int)
        if self is Kind.FLOAT:
            return isinstance(value, (int, float))
        return isinstance(value, str)

    def coerce(self, value: Value) -> Value:
        if self is Kind.FLOAT:
            return float(value)
        return value

    @classmethod
    def from_value(cls, value: Any) -> Optional["Kind"]:
        """Infer the kind from a default value, or None if unsupported."""
        if isinstance(value, bool):
            return cls.FLAG
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        return None


_PYTHON_TYPES = {
    Kind.STRING: str,
    Kind.INTEGER: int,
    Kind.FLOAT: float,
    Kind.FLAG: bool,
}


@dataclasses.dataclass(frozen=True)
class ArgumentDescriptor:
    """
    Declared metadata for one command-line option.

    Attributes:
        name: Full name, used as ``--name``.
        short: Short alias used as ``-x``; empty when the option has none.
        help: Description shown in the help listing.
        group: Help category the option is listed under.
        kind: Kind of value the option holds.
        default: Value stored before parsing.
    """

    name: str
    short: str
    help: str
    group: str
    kind: Kind
    default: Value

    @property
    def option_strings(self) -> tuple[str, ...]:
        if self.short:
            return (f"--{self.name}", f"-{self.short}")
        return (f"--{self.name}",)


def determine_group(group: Optional[str]) -> str:
    return group or DEFAULT_GROUP
