"""
Feat Weaver

Turns every feat of every module into generated spells and boosts.

For each distinct feat id, a tier under the base spell container records,
per module defining the feat, the spells generated for it. A feat with
selectors becomes a spell container; each legal pick of its head selector
becomes a child spell under a new tier, recursively, until every selector
is resolved. Fully resolved paths get a terminal spell plus a boost that
carries the feat's passives and the accumulated ability increments.

Modules are visited in the order given. "Later" modules in that order are
the fallback for descriptions, icons and candidate lists.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple
from uuid import UUID

from featweaver.content.models import Feat, Module, SelectorListType, list_type_for
from featweaver.parser.localization import LocalizedString
from featweaver.parser.stats import StatEntry
from featweaver.weaver.entries import make_boost, make_spell, make_spell_container
from featweaver.weaver.selection import boosts, expand, is_complete, requirements
from featweaver.weaver.state import ExpansionState
from featweaver.weaver.wiring import BuildContext, TierWiring

logger = logging.getLogger(__name__)


BASE_SPELL_CONTAINER = "E6_Shout_EpicFeats"
DEFAULT_ICON = "PassiveFeature_Generic_Magical"
DEFAULT_MAX_LEAVES = 100_000

SPELL_PREFIX = "E6_Shout_"
BOOST_PREFIX = "E6_FEAT_"


class UnknownCandidateError(NotImplementedError):
    """No description is known for a selection candidate."""
    def __init__(self, list_type: SelectorListType, candidate: str):
        self.list_type = list_type
        self.candidate = candidate
        super().__init__(f"No description for {list_type.name} candidate {candidate!r}")


class ExpansionLimitError(RuntimeError):
    """
    The run generated more terminal entries than the configured limit.

    The count covers the whole run; feat is the one being woven when the
    limit was crossed, not necessarily the largest contributor.
    """
    def __init__(self, limit: int, feat: Feat):
        self.limit = limit
        self.feat = feat
        super().__init__(
            f"More than {limit} generated leaves in this run "
            f"(limit crossed while weaving feat {feat.name})"
        )


@dataclass(frozen=True)
class EntryDescription:
    """Display name, description and icon attached to a generated spell."""
    display_name: Optional[LocalizedString] = None
    description: Optional[LocalizedString] = None
    icon: str = ""


def _ability(display_name: str, description: str) -> EntryDescription:
    return EntryDescription(
        display_name=LocalizedString.parse(display_name),
        description=LocalizedString.parse(description),
        icon=DEFAULT_ICON,
    )


ABILITY_DESCRIPTIONS: Dict[str, EntryDescription] = {
    "Strength": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_1;1", "haaf3959ag320eg4f68ga9c9gc143d7f64a8c;1"),
    "Dexterity": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_2;1", "hbf128ebdgdfffg4ea9gbf4bg1659ccefd287;1"),
    "Constitution": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_3;1", "h7a02f64dg4593g408fgbf93gb0dbabc182c9;1"),
    "Intelligence": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_4;1", "h411a732ag4b4cg4094g9a5egd325fecf4645;1"),
    "Wisdom": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_5;1", "h35233e68gf68ag461cgac5fgc15806be3dc7;1"),
    "Charisma": _ability("h6c83537fg6358g41e0g8a18g32cc8316ced2_6;1", "h441085efge3a5g4004gba8dgf2378e8986c8;1"),
}


def describe_candidate(list_type: SelectorListType, candidate: str) -> EntryDescription:
    """
    Description of a selection candidate.

    Raises:
        UnknownCandidateError: For anything but one of the six abilities
    """
    if list_type != SelectorListType.ABILITY or candidate not in ABILITY_DESCRIPTIONS:
        raise UnknownCandidateError(list_type, candidate)
    return ABILITY_DESCRIPTIONS[candidate]


class FeatWeaver:
    """
    Generates spells, boosts and wiring for all feats of a module list.

    Usage:
        weaver = FeatWeaver(modules)
        context = weaver.generate()
    """

    def __init__(
        self,
        modules: Sequence[Module],
        context: Optional[BuildContext] = None,
        base_container: str = BASE_SPELL_CONTAINER,
        max_leaves: int = DEFAULT_MAX_LEAVES,
    ):
        self.modules = list(modules)
        self.context = context if context is not None else BuildContext()
        self.base_container = base_container
        self.max_leaves = max_leaves

    def feat_ids(self) -> List[UUID]:
        """Distinct feat ids across all modules, in discovery order."""
        seen = {}
        for module in self.modules:
            for feat in module.feats:
                seen.setdefault(feat.id, None)
        return list(seen)

    def generate(self) -> BuildContext:
        """Weave every feat; returns the build context."""
        for feat_id in self.feat_ids():
            tier = TierWiring()
            self.context.add_tier(self.base_container, tier)

            for index, module in enumerate(self.modules):
                feat = module.get_feat(feat_id)
                if feat is None:
                    continue
                if not feat.is_supported:
                    # Register with no spells so a later override still masks earlier modules
                    logger.debug("Unsupported selectors on feat %s in %s", feat.name, module.name)
                    tier.add(module.normalized_name)
                    continue

                self._generate(
                    f"{feat.name}_{module.normalized_name}",
                    index,
                    feat,
                    self.describe_feat(index, feat),
                    self.base_container,
                    tier,
                    ExpansionState.for_feat(feat),
                )

        logger.info("Generated %d spells and %d boosts",
                    self.context.spell_count, self.context.boost_count)
        return self.context

    def _generate(
        self,
        prefix: str,
        module_index: int,
        feat: Feat,
        description: EntryDescription,
        container_id: str,
        tier: TierWiring,
        state: ExpansionState,
    ) -> None:
        module = self.modules[module_index]
        complete = is_complete(state)

        spell = self._make_spell(complete, f"{SPELL_PREFIX}{prefix}", container_id,
                                 feat, description, requirements(state))
        self.context.add_spell(module.normalized_name, spell)
        tier.add(module.normalized_name, spell.name)

        if complete:
            self.context.leaf_count += 1
            self._check_limit(feat)

            boost_name = f"{BOOST_PREFIX}{prefix}"
            boost = make_boost(boost_name)
            boost.add_data("Passives", *feat.passives)
            boost.add_data("Boosts", *boosts(state))
            self.context.add_boost(module.normalized_name, boost)

            spell.add_data("SpellProperties", f"ApplyStatus({boost_name},-1,-1)")
            return

        selector = state.current
        list_type = list_type_for(selector.selector_type)
        selector_tier = TierWiring()
        self.context.add_tier(spell.name, selector_tier)

        found = self.find_candidates(module_index, list_type, selector.list_id)
        if found is None:
            logger.warning("No %s list %s for feat %s in %s",
                           list_type.name, selector.list_id, feat.name, module.name)
            self.context.dead_end_count += 1
            self._check_limit(feat)
            return

        # Only the first module defining the list is used; later definitions are not merged in
        source_index, candidates = found
        source = self.modules[source_index]
        extended = False
        for candidate, child in expand(state, candidates):
            extended = True
            self._generate(
                f"{prefix}_{candidate}_{source.normalized_name}",
                source_index,
                feat,
                describe_candidate(list_type, candidate),
                spell.name,
                selector_tier,
                child,
            )
        if not extended:
            self.context.dead_end_count += 1
            self._check_limit(feat)

    def _check_limit(self, feat: Feat) -> None:
        if self.context.terminal_count > self.max_leaves:
            raise ExpansionLimitError(self.max_leaves, feat)

    def _make_spell(
        self,
        complete: bool,
        name: str,
        container_id: str,
        feat: Feat,
        description: EntryDescription,
        selector_requirements: List[str],
    ) -> StatEntry:
        spell = make_spell(name) if complete else make_spell_container(name)
        spell.add_data("SpellContainerID", container_id)
        spell.add_data("RequirementConditions", feat.requirements)
        spell.add_data("RequirementConditions", *selector_requirements)
        if not feat.repeatable:
            spell.add_data("RequirementConditions",
                           *(f"not HasPassive('{passive}', context.Source)" for passive in feat.passives))

        if description.display_name is not None:
            spell.add_data("DisplayName", str(description.display_name))
        if description.description is not None:
            spell.add_data("Description", str(description.description))
        spell.add_data("Icon", description.icon)
        return spell

    # =========================================================================
    # LOOKUPS (scan from a module index toward the end of the list)
    # =========================================================================

    def find_candidates(
        self,
        module_index: int,
        list_type: SelectorListType,
        list_id: UUID,
    ) -> Optional[Tuple[int, Tuple[str, ...]]]:
        """First (module index, candidates) defining the list, from module_index on."""
        for index in range(module_index, len(self.modules)):
            candidates = self.modules[index].get_candidates(list_type, list_id)
            if candidates is not None:
                return index, candidates
        return None

    def describe_feat(self, module_index: int, feat: Feat) -> EntryDescription:
        """Display name and description from the nearest module that has them; icon from the passives."""
        display_name = None
        description = None
        for module in self.modules[module_index:]:
            feat_description = module.descriptions.get(feat.id)
            if feat_description is not None:
                display_name = feat_description.display_name
                description = feat_description.description
                break

        icon = DEFAULT_ICON
        for passive in feat.passives:
            values = self.get_stat_field(module_index, passive, "Icon")
            if values and values[0]:
                icon = values[0]
                break

        return EntryDescription(display_name=display_name, description=description, icon=icon)

    def get_stat(self, module_index: int, name: str) -> Optional[StatEntry]:
        for module in self.modules[module_index:]:
            stat = module.stats.get(name)
            if stat is not None:
                return stat
        return None

    def get_stat_field(self, module_index: int, name: str, key: str) -> Optional[List[str]]:
        """Values of key on stat name, following `using` parents."""
        visited: Set[str] = set()
        while name and name not in visited:
            visited.add(name)
            stat = self.get_stat(module_index, name)
            if stat is None:
                return None
            values = stat.get(key)
            if values is not None:
                return values
            name = stat.using
        return None
