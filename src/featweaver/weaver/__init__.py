"""
featweaver.weaver - Feat Expansion

Expands each feat's selector chain into generated content:
1. Walking every legal choice path depth-first
2. Emitting a spell per choice and a boost per fully resolved path
3. Recording which module contributes which spell under which parent
"""

from featweaver.weaver.state import ExpansionState
from featweaver.weaver.selection import (
    ABILITY_SCORE_CAP,
    UnimplementedSelectorError,
    is_complete,
    expand,
    boosts,
    requirements,
)
from featweaver.weaver.wiring import TierWiring, SpellWiring, BuildContext
from featweaver.weaver.weaver import (
    BASE_SPELL_CONTAINER,
    DEFAULT_ICON,
    DEFAULT_MAX_LEAVES,
    ABILITY_DESCRIPTIONS,
    EntryDescription,
    ExpansionLimitError,
    UnknownCandidateError,
    FeatWeaver,
    describe_candidate,
)
from featweaver.weaver.exporter import ExportOptions, ExportResult, GeneratedFilesExporter

__all__ = [
    # State
    "ExpansionState",
    # Selection
    "ABILITY_SCORE_CAP",
    "UnimplementedSelectorError",
    "is_complete",
    "expand",
    "boosts",
    "requirements",
    # Wiring
    "TierWiring",
    "SpellWiring",
    "BuildContext",
    # Weaver
    "BASE_SPELL_CONTAINER",
    "DEFAULT_ICON",
    "DEFAULT_MAX_LEAVES",
    "ABILITY_DESCRIPTIONS",
    "EntryDescription",
    "ExpansionLimitError",
    "UnknownCandidateError",
    "FeatWeaver",
    "describe_candidate",
    # Exporter
    "ExportOptions",
    "ExportResult",
    "GeneratedFilesExporter",
]
