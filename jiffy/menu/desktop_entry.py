import re
import structlog
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional
from jiffy.menu.icon_resolver import IconResolver
from jiffy.menu.models import ApplicationRecord

DESKTOP_ENTRY_SECTION = "[Desktop Entry]"
NAME_BULLET = "• "
CATEGORY_SEPARATOR = " │ "
KEYWORD_SEPARATOR = ", "

_EXEC_TOKEN_RE = re.compile(r'("[^"]+"|\S+)')
_FIELD_CODE_RE = re.compile(r"^%[a-zA-Z]")


class DesktopField(Enum):
    """The [Desktop Entry] keys the menu understands."""

    NAME = "Name"
    COMMENT = "Comment"
    EXEC = "Exec"
    ICON = "Icon"
    TERMINAL = "Terminal"
    NO_DISPLAY = "NoDisplay"
    CATEGORIES = "Categories"
    KEYWORDS = "Keywords"
    UNKNOWN = None

    @classmethod
    def from_key(cls, key: str) -> "DesktopField":
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one descriptor file.

    `ok` with a record: the application belongs in the menu.
    `ok` without a record: a valid file that is hidden or has no command.
    Not `ok`: the file could not be read or processed; `error` says why.
    """

    path: str
    record: Optional[ApplicationRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_exec(value: str) -> str:
    """Drops %f, %U and friends; keeps quoted spans as single tokens."""
    tokens = _EXEC_TOKEN_RE.findall(value)
    return " ".join(token for token in tokens if not _FIELD_CODE_RE.match(token))


def parse_categories(value: str) -> str:
    return CATEGORY_SEPARATOR.join(part for part in value.split(";") if part).strip()


def is_ascii_printable(entry: str) -> bool:
    """Only the first character is checked."""
    return bool(entry) and 32 <= ord(entry[0]) <= 126


def parse_keywords(value: str) -> str:
    return KEYWORD_SEPARATOR.join(
        part for part in value.split(";") if is_ascii_printable(part)
    ).strip()


def parse_bool(value: str) -> bool:
    return value.lower() == "true"


class DesktopEntryParser:
    """
    Turns the [Desktop Entry] section of a .desktop file into an
    ApplicationRecord.

    Icons are resolved while parsing, so the record written to the
    cache already carries a file path when one exists.
    """

    def __init__(self, icon_resolver: IconResolver, logger: Any = None):
        self.icon_resolver = icon_resolver
        self.logger = logger or structlog.get_logger(__name__)

    def parse(
        self, lines: Iterable[str], source_path: str = ""
    ) -> Optional[ApplicationRecord]:
        """
        Parses descriptor lines.

        Returns:
            The record, or None when the entry is hidden, lacks a name
            or a usable command, or has no recognised field at all.
        """
        fields = self._read_section(lines)
        if not fields:
            return None
        record = ApplicationRecord(
            name=fields.get("name", ""),
            exec_command=fields.get("exec_command", ""),
            source_path=source_path,
            icon=fields.get("icon"),
            description=fields.get("description"),
            category=fields.get("category"),
            keywords=fields.get("keywords"),
            terminal=fields.get("terminal", False),
            hidden=fields.get("hidden", False),
        )
        if not record.is_displayable():
            return None
        return record

    def parse_file(self, path: str) -> ParseResult:
        """Reads and parses one descriptor file without ever raising."""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                record = self.parse(f, source_path=path)
        except OSError as e:
            self.logger.warning(f"Failed to read: {path}: {e}")
            return ParseResult(path=path, error=str(e))
        except Exception as e:
            self.logger.warning(f"Failed to parse: {path}.", exc_info=True)
            return ParseResult(path=path, error=f"{type(e).__name__}: {e}")
        return ParseResult(path=path, record=record)

    def _read_section(self, lines: Iterable[str]) -> Dict[str, Any]:
        """
        Collects the known fields of the first [Desktop Entry] section.

        The whole section is read, up to the next section header. When a
        key repeats, the first occurrence wins and later ones are ignored,
        so a duplicated Icon= line is resolved only once.
        """
        fields: Dict[str, Any] = {}
        seen = set()
        in_desktop_entry = False
        for raw_line in lines:
            line = raw_line.rstrip("\r\n")
            if line.startswith(DESKTOP_ENTRY_SECTION):
                in_desktop_entry = True
                continue
            if not in_desktop_entry:
                continue
            if line.startswith("["):
                break
            key, separator, value = line.partition("=")
            if not separator:
                continue
            field = DesktopField.from_key(key)
            # first occurrence wins
            if field is DesktopField.UNKNOWN or field in seen:
                continue
            seen.add(field)
            self._apply(field, value, fields)
        return fields

    def _apply(self, field: DesktopField, value: str, fields: Dict[str, Any]) -> None:
        if field is DesktopField.NAME:
            fields["name"] = NAME_BULLET + value
        elif field is DesktopField.COMMENT:
            fields["description"] = value
        elif field is DesktopField.EXEC:
            fields["exec_command"] = parse_exec(value)
        elif field is DesktopField.ICON:
            fields["icon"] = self.icon_resolver.resolve(value)
        elif field is DesktopField.TERMINAL:
            fields["terminal"] = parse_bool(value)
        elif field is DesktopField.NO_DISPLAY:
            fields["hidden"] = parse_bool(value)
        elif field is DesktopField.CATEGORIES:
            fields["category"] = parse_categories(value)
        elif field is DesktopField.KEYWORDS:
            fields["keywords"] = parse_keywords(value)
