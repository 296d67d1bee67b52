"""
Spell Wiring and Build Context

Bookkeeping for generated output:

- TierWiring: module name -> child spell names, for one parent spell
- SpellWiring: parent spell name -> tiers registered under it
- BuildContext: wiring plus the generated boost and spell entries per
  module, owned by one weaving run and passed down the recursion

The wiring is only an output artifact; nothing reads it during weaving.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from featweaver.parser.stats import StatEntry


class TierWiring(dict):
    """Module name -> child spell names for one parent spell."""

    def add(self, module_name: str, spell_name: Optional[str] = None) -> None:
        """Register module_name, appending spell_name when given."""
        spells = self.setdefault(module_name, [])
        if spell_name:
            spells.append(spell_name)

    @property
    def has_entries(self) -> bool:
        return any(len(spells) > 0 for spells in self.values())


class SpellWiring(dict):
    """Parent spell name -> list of TierWiring."""

    def add(self, parent_spell: str, tier: TierWiring) -> None:
        self.setdefault(parent_spell, []).append(tier)

    def clean(self) -> None:
        """Drop empty tiers, then parent spells left with no tiers."""
        for parent in list(self.keys()):
            tiers = [tier for tier in self[parent] if tier.has_entries]
            if tiers:
                self[parent] = tiers
            else:
                del self[parent]

    def to_dict(self) -> Dict[str, List[Dict[str, List[str]]]]:
        return {
            parent: [dict(tier) for tier in tiers]
            for parent, tiers in self.items()
        }


@dataclass
class BuildContext:
    """Everything one weaving run generates."""
    wiring: SpellWiring = field(default_factory=SpellWiring)
    boosts: Dict[str, List[StatEntry]] = field(default_factory=dict)
    spells: Dict[str, List[StatEntry]] = field(default_factory=dict)
    leaf_count: int = 0
    dead_end_count: int = 0              # Unresolved entries no pick could extend

    @property
    def terminal_count(self) -> int:
        """Entries with no children, resolved or not."""
        return self.leaf_count + self.dead_end_count

    def add_tier(self, parent_spell: str, tier: TierWiring) -> None:
        self.wiring.add(parent_spell, tier)

    def add_boost(self, module_name: str, entry: StatEntry) -> None:
        self.boosts.setdefault(module_name, []).append(entry)

    def add_spell(self, module_name: str, entry: StatEntry) -> None:
        self.spells.setdefault(module_name, []).append(entry)

    @property
    def spell_count(self) -> int:
        return sum(len(entries) for entries in self.spells.values())

    @property
    def boost_count(self) -> int:
        return sum(len(entries) for entries in self.boosts.values())
