"""
Help text rendering for TypedFlagParser.

Each declared argument becomes one fixed-width line under its group heading.
The "Usage" group is always rendered first; other groups follow in the order
their first argument was declared.
"""

from typing import Mapping, Sequence

from .arguments import DEFAULT_GROUP, ArgumentDescriptor

INDENT = "    "
NAME_WIDTH = 25
SHORT_WIDTH = 4


def format_argument(descriptor: ArgumentDescriptor) -> str:
    """
    Format the help line for a single argument.

    The line holds the full name padded to 25 characters, the short alias
    (with its leading dash) padded to 4 characters, then the help text.
    """
    short = f"-{descriptor.short}" if descriptor.short else ""
    return (
        f"{INDENT}{descriptor.name:<{NAME_WIDTH}} "
        f"{short:<{SHORT_WIDTH}} {descriptor.help}"
    )


def render_help(groups: Mapping[str, Sequence[str]], about: str = "") -> list[str]:
    """
    Render the grouped help listing as a list of lines.

    Args:
        groups: Mapping from group name to its formatted argument lines.
        about: Optional program description printed before everything else.

    Returns:
        list[str]: The help text, one entry per output line.
    """
    lines: list[str] = []
    if about:
        lines.extend([about, ""])

    lines.append(DEFAULT_GROUP)
    lines.extend(groups.get(DEFAULT_GROUP, ()))
    lines.append("")

    for group, entries in groups.items():
        if group == DEFAULT_GROUP:
            continue
        lines.append(group)
        lines.extend(entries)
        lines.append("")

    return lines
