"""
Localized String References

Feat descriptions point at localization handles rather than carrying text:

    h6c83537fg6358g41e0g8a18g32cc8316ced2_1;1

The part before ';' is the handle, the optional number after it is the
string version.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LocalizedString:
    """A handle into the localization tables, optionally versioned."""
    handle: str
    version: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "LocalizedString":
        """Parse `handle` or `handle;version`."""
        handle, sep, version = text.partition(";")
        if not sep:
            return cls(handle=handle)
        return cls(handle=handle, version=int(version))

    def __str__(self) -> str:
        if self.version is None:
            return self.handle
        return f"{self.handle};{self.version}"
