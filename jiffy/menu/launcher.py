"""
Formats menu records as input for the external fuzzy finder.

Each entry is a block of lines the finder's preview and bind commands
pick apart by position:

    icon
    description
    command
    category
    #
    name : keywords

Only the part after the '#' line is shown in the list itself. The name is
printed in green and the keywords in gray, so the finder needs --ansi
unless color is turned off.
"""

from typing import Sequence
from jiffy.menu.models import ApplicationRecord

ENTRY_TERMINATOR = "\0"
DISPLAY_MARKER = "#"

GREEN = "\x1b[32m"
GRAY = "\x1b[90m"
RESET = "\x1b[0m"


def launch_command(record: ApplicationRecord, terminal: str) -> str:
    """The detached shell command that starts the application."""
    prefix = f"{terminal} " if record.terminal else ""
    return f"setsid {prefix}{record.exec_command}"


def format_entry(
    record: ApplicationRecord,
    terminal: str,
    name_width: int,
    width: int,
    color: bool = True,
) -> str:
    name, keywords_style, reset = record.name, "", ""
    if color:
        name = f"{GREEN}{record.name}{RESET}"
        keywords_style, reset = GRAY, RESET
    # padding follows the visible name, not the escape codes
    label = name + " " * (name_width - len(record.name))
    keywords = record.keywords or ""
    if keywords:
        if width - name_width - 10 < len(keywords):
            keywords = keywords[: max(width - name_width - 13, 0)] + "..."
        label = f"{label} : {keywords_style}{keywords}{reset}"
    return "\n".join(
        [
            record.icon or "",
            record.description or "",
            launch_command(record, terminal),
            record.category or "",
            DISPLAY_MARKER,
            label,
        ]
    )


def format_menu(
    records: Sequence[ApplicationRecord],
    terminal: str,
    width: int = 80,
    color: bool = True,
) -> str:
    """All entries, each NUL-terminated, with names padded to one column."""
    name_width = max((len(record.name) for record in records), default=0)
    return "".join(
        format_entry(record, terminal, name_width, width, color=color)
        + ENTRY_TERMINATOR
        for record in records
    )
