"""
Stat Entry Text Format

Reads and writes the Stats/Generated/Data text format:

    new entry "E6_Shout_Alert_Shared"
    type "SpellData"
    using "Shout_Base"
    data "SpellType" "Shout"
    data "RequirementConditions" "a and b"

Values of a key are joined with ';' except for keys registered in
JOIN_SEPARATORS.
"""

import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


DEFAULT_SEPARATOR = ";"

# Keys joined with something other than DEFAULT_SEPARATOR
JOIN_SEPARATORS: Dict[str, str] = {
    "RequirementConditions": " and ",
}

ENTRY_RE = re.compile(r'^new\s+entry\s+"(?P<name>[^"]+)"\s*$')
DATA_RE = re.compile(r'data\s+"(?P<key>[^"]+)"\s+"(?P<values>[^"]+)"\s*$')
USING_RE = re.compile(r'using\s+"(?P<name>[^"]+)"\s*$')
TYPE_RE = re.compile(r'type\s+"(?P<type>[^"]+)"\s*$')


class StatEntry:
    """
    A single stat entry.

    Data keys keep insertion order. A key only exists once at least one
    non-empty value has been added to it.
    """

    def __init__(self, name: str, entry_type: str = "", using: Optional[str] = None):
        self.name = name
        self.entry_type = entry_type
        self.using = using
        self._data: Dict[str, List[str]] = {}

    def __repr__(self):
        return f"StatEntry({self.name!r}, {self.entry_type!r}, {len(self._data)} keys)"

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def keys(self) -> List[str]:
        return list(self._data.keys())

    def get(self, key: str) -> Optional[List[str]]:
        """Values stored under key, or None if the key was never populated."""
        values = self._data.get(key)
        return list(values) if values is not None else None

    def add_data(self, key: str, *values: Optional[str]) -> None:
        """Append values to key, skipping None and empty strings."""
        self.extend_data(key, values)

    def extend_data(self, key: str, values: Iterable[Optional[str]]) -> None:
        """Append every non-empty value from an iterable to key."""
        for value in values:
            if not value:
                continue
            self._data.setdefault(key, []).append(value)

    def to_stat_text(self) -> str:
        """Serialize to the stat file format (trailing newline included)."""
        lines = [f'new entry "{self.name}"', f'type "{self.entry_type}"']
        if self.using:
            lines.append(f'using "{self.using}"')
        for key, values in self._data.items():
            separator = JOIN_SEPARATORS.get(key, DEFAULT_SEPARATOR)
            lines.append(f'data "{key}" "{separator.join(values)}"')
        return "\n".join(lines) + "\n"


def parse_stat_entries(content: str, filename: str = "<unknown>") -> Iterator[StatEntry]:
    """
    Parse stat entries from stat file text.

    Lines that appear before the first `new entry` are ignored.
    """
    current: Optional[StatEntry] = None

    for line_num, line in enumerate(content.splitlines(), 1):
        if not line.strip():
            continue

        m = ENTRY_RE.match(line)
        if m:
            if current is not None:
                yield current
            current = StatEntry(m.group("name"))
            continue

        if current is None:
            logger.debug("%s:%d: stat line outside an entry: %s", filename, line_num, line.strip())
            continue

        m = USING_RE.search(line)
        if m:
            current.using = m.group("name")
            continue

        m = TYPE_RE.search(line)
        if m:
            current.entry_type = m.group("type")
            continue

        m = DATA_RE.search(line)
        if m:
            current.extend_data(m.group("key"), m.group("values").split(DEFAULT_SEPARATOR))

    if current is not None and current.name:
        yield current
