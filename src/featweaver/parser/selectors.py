"""
Feat Selector Parser

Parses the selector mini-language embedded in feat definitions:

    SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,2,2,FeatASI)
    SelectSkills(f974ebd6-3725-4b90-bb5c-2b647d41615d,3,SkilledSkills)
    SelectSkillsExpertise(f974ebd6-3725-4b90-bb5c-2b647d41615d,2,true)
    SelectPassives(f8ebba38-932a-4c64-ae55-3df23e2f60fa,1,FightingStyle)
    SelectSpells(8c32c900-a8ea-4f2f-9f6f-eccd0d361a9d,2,0,,,,AlwaysPrepared)

Each function is matched by a cheap case-insensitive prefix check followed
by a strict grammar match. Parsing never raises: text that no grammar
accepts becomes an UnknownSelector.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, ClassVar, List, Optional, Tuple
from uuid import UUID

logger = logging.getLogger(__name__)


class SelectorType(Enum):
    """Kinds of selector a feat can carry."""
    UNKNOWN = auto()     # Unrecognized text
    ABILITY = auto()     # Strength, Dexterity, ... score increases
    SKILL = auto()       # Skill proficiency
    EXPERTISE = auto()   # Skill expertise
    PASSIVE = auto()     # Passive from a passive list
    SPELL = auto()       # Spell from a spell list


# 32 hex digits, hyphens between groups optional
GUID_PATTERN = r"[0-9A-F]{8}-?(?:[0-9A-F]{4}-?){3}[0-9A-F]{12}"
IDENTIFIER_PATTERN = r"[a-zA-Z0-9_]+"


@dataclass(frozen=True)
class Selector:
    """Base class for parsed selectors."""
    selector_type: ClassVar[SelectorType] = SelectorType.UNKNOWN

    @property
    def list_id(self) -> Optional[UUID]:
        return None


@dataclass(frozen=True)
class AbilitySelector(Selector):
    """
    SelectAbilities(id, count, max, label)

    Pick `count` abilities from the ability list `list_id`, raising no
    ability above `max` increments. `label` is shown by the game UI.
    """
    selector_type: ClassVar[SelectorType] = SelectorType.ABILITY

    id: UUID = None
    count: int = 0
    max: int = 0
    label: str = ""

    @property
    def list_id(self) -> Optional[UUID]:
        return self.id


@dataclass(frozen=True)
class SkillSelector(Selector):
    """SelectSkills(id, count[, label])"""
    selector_type: ClassVar[SelectorType] = SelectorType.SKILL

    id: UUID = None
    count: int = 0
    label: Optional[str] = None

    @property
    def list_id(self) -> Optional[UUID]:
        return self.id


@dataclass(frozen=True)
class ExpertiseSelector(Selector):
    """SelectSkillsExpertise(id, count[, true|false])"""
    selector_type: ClassVar[SelectorType] = SelectorType.EXPERTISE

    id: UUID = None
    count: int = 0
    flag: Optional[bool] = None

    @property
    def list_id(self) -> Optional[UUID]:
        return self.id


@dataclass(frozen=True)
class PassiveSelector(Selector):
    """SelectPassives(id, count[, category])"""
    selector_type: ClassVar[SelectorType] = SelectorType.PASSIVE

    id: UUID = None
    count: int = 0
    category: Optional[str] = None

    @property
    def list_id(self) -> Optional[UUID]:
        return self.id


@dataclass(frozen=True)
class SpellSelector(Selector):
    """
    SelectSpells(...)

    The grammar is recognized by name only. No argument layout has been
    settled, so the parser never produces this value and spell selections
    surface as UnknownSelector.
    """
    selector_type: ClassVar[SelectorType] = SelectorType.SPELL


@dataclass(frozen=True)
class UnknownSelector(Selector):
    """Selector text that no grammar accepted."""
    selector_type: ClassVar[SelectorType] = SelectorType.UNKNOWN

    text: str = ""


# =============================================================================
# GRAMMARS
# =============================================================================

_ABILITY_RE = re.compile(
    rf"^SelectAbilities\s*\(\s*(?P<id>{GUID_PATTERN})\s*,\s*(?P<count>\d+)\s*,"
    rf"\s*(?P<max>\d+)\s*,\s*(?P<label>{IDENTIFIER_PATTERN})\s*\)$",
    re.IGNORECASE,
)

_SKILL_RE = re.compile(
    rf"^SelectSkills\s*\(\s*(?P<id>{GUID_PATTERN})\s*,\s*(?P<count>\d+)\s*"
    rf"(?:,\s*(?P<label>{IDENTIFIER_PATTERN})\s*)?\)$",
    re.IGNORECASE,
)

_EXPERTISE_RE = re.compile(
    rf"^SelectSkillsExpertise\s*\(\s*(?P<id>{GUID_PATTERN})\s*,\s*(?P<count>\d+)\s*"
    rf"(?:,\s*(?P<flag>true|false)\s*)?\)$",
    re.IGNORECASE,
)

_PASSIVE_RE = re.compile(
    rf"^SelectPassives\s*\(\s*(?P<id>{GUID_PATTERN})\s*,\s*(?P<count>\d+)\s*"
    rf"(?:,\s*(?P<category>{IDENTIFIER_PATTERN})\s*)?\)$",
    re.IGNORECASE,
)


def _parse_ability(text: str) -> Optional[Selector]:
    m = _ABILITY_RE.match(text)
    if not m:
        return None
    return AbilitySelector(
        id=UUID(m.group("id")),
        count=int(m.group("count")),
        max=int(m.group("max")),
        label=m.group("label"),
    )


def _parse_skill(text: str) -> Optional[Selector]:
    m = _SKILL_RE.match(text)
    if not m:
        return None
    return SkillSelector(
        id=UUID(m.group("id")),
        count=int(m.group("count")),
        label=m.group("label"),
    )


def _parse_expertise(text: str) -> Optional[Selector]:
    m = _EXPERTISE_RE.match(text)
    if not m:
        return None
    flag = m.group("flag")
    return ExpertiseSelector(
        id=UUID(m.group("id")),
        count=int(m.group("count")),
        flag=None if flag is None else flag.lower() == "true",
    )


def _parse_passive(text: str) -> Optional[Selector]:
    m = _PASSIVE_RE.match(text)
    if not m:
        return None
    return PassiveSelector(
        id=UUID(m.group("id")),
        count=int(m.group("count")),
        category=m.group("category"),
    )


def _parse_spell(text: str) -> Optional[Selector]:
    # TODO: decide the SelectSpells argument layout (list id, count, ability, class id) with content authors
    return None


# (lowercase function name, grammar matcher) in priority order
SELECTOR_PARSERS: List[Tuple[str, Callable[[str], Optional[Selector]]]] = [
    ("selectabilities", _parse_ability),
    ("selectskills", _parse_skill),
    ("selectskillsexpertise", _parse_expertise),
    ("selectpassives", _parse_passive),
    ("selectspells", _parse_spell),
]


def parse_selector(text: str) -> Selector:
    """
    Parse a single selector expression.

    Args:
        text: Raw selector text, surrounding whitespace allowed

    Returns:
        The parsed selector, or UnknownSelector if nothing matched
    """
    text = text.strip()
    lowered = text.lower()

    for function_name, matcher in SELECTOR_PARSERS:
        if not lowered.startswith(function_name):
            continue
        result = matcher(text)
        if result is not None:
            return result

    logger.warning("Failed to parse selector: %s", text)
    return UnknownSelector(text=text)


def split_list(value: Optional[str], separator: str = ";") -> List[str]:
    """Split a delimited attribute value into trimmed, non-empty items."""
    if value is None:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]


def parse_selector_list(value: Optional[str]) -> List[Selector]:
    """Parse a semicolon-separated selector chain, in order."""
    return [parse_selector(item) for item in split_list(value)]
