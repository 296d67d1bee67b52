"""
featweaver.parser - Content Text Formats

Parsers for the formats mod content is authored in:
- selectors: the feat selector mini-language
- stats: Stats/Generated/Data stat entries
- lsx: LSX resource trees
- localization: localized string references
"""

from featweaver.parser.selectors import (
    SelectorType,
    Selector,
    AbilitySelector,
    SkillSelector,
    ExpertiseSelector,
    PassiveSelector,
    SpellSelector,
    UnknownSelector,
    parse_selector,
    parse_selector_list,
    split_list,
)
from featweaver.parser.stats import StatEntry, parse_stat_entries
from featweaver.parser.lsx import (
    LsxAttribute,
    LsxNode,
    LsxResource,
    MissingAttributeError,
    read_lsx,
)
from featweaver.parser.localization import LocalizedString

__all__ = [
    # Selectors
    "SelectorType",
    "Selector",
    "AbilitySelector",
    "SkillSelector",
    "ExpertiseSelector",
    "PassiveSelector",
    "SpellSelector",
    "UnknownSelector",
    "parse_selector",
    "parse_selector_list",
    "split_list",
    # Stats
    "StatEntry",
    "parse_stat_entries",
    # LSX
    "LsxAttribute",
    "LsxNode",
    "LsxResource",
    "MissingAttributeError",
    "read_lsx",
    # Localization
    "LocalizedString",
]
