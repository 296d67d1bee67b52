"""
Generated Stat Entry Templates

Base data every generated spell, spell container and boost carries.
"""

from featweaver.parser.stats import StatEntry

SPELL_TYPE = "SpellData"
STATUS_TYPE = "StatusData"

SPELL_ANIMATION = (
    "b3b2d16b-61c7-4082-8394-0c04fb9ffdec,,;81c58c55-625d-46c3-bbb7-179b23ef725e,,;"
    "3c35a4e1-4441-4603-9c71-82179057d452,,;18c8ab7a-cfef-45b9-851d-e2bc52c9ebc3,,;"
    "e601e8fd-4017-4d26-a63a-e1d7362c99b3,,;,,;0b07883a-08b8-43b6-ac18-84dc9e84ff50,,;,,;,,"
)
PREPARE_EFFECT = "c520a0bf-adc6-44f6-abcd-94bc0925b881"

BOOST_PROPERTY_FLAGS = (
    "IgnoreResting",
    "DisableCombatlog",
    "ApplyToDead",
    "DisableOverhead",
    "ExcludeFromPortraitRendering",
    "DisablePortraitIndicator",
)


def make_spell(name: str) -> StatEntry:
    """Terminal shout that applies a feat's boost."""
    spell = StatEntry(name, SPELL_TYPE)
    spell.add_data("SpellType", "Shout")
    spell.add_data("AIFlags", "CanNotUse")
    spell.add_data("TargetConditions", "Self()")
    spell.add_data("CastTextEvent", "Cast")
    spell.add_data("SpellAnimation", SPELL_ANIMATION)
    spell.add_data("SpellFlags", "IgnoreSilence")
    spell.add_data("DamageType", "None")
    spell.add_data("PrepareEffect", PREPARE_EFFECT)
    spell.add_data("VerbalIntent", "Utility")
    spell.add_data("UseCosts", "FeatPoint:1")
    spell.add_data("Requirements", "!Combat")
    return spell


def make_spell_container(name: str) -> StatEntry:
    """Shout that opens a further selection."""
    spell = StatEntry(name, SPELL_TYPE)
    spell.add_data("SpellType", "Shout")
    spell.add_data("AIFlags", "CanNotUse")
    spell.add_data("TargetConditions", "Self()")
    spell.add_data("CastTextEvent", "Cast")
    spell.add_data("UseCosts", "FeatPoint:1")
    spell.add_data("Requirements", "!Combat")
    spell.add_data("SpellFlags", "IsLinkedSpellContainer")
    return spell


def make_boost(name: str) -> StatEntry:
    """Boost status that holds a feat's passives and ability increments."""
    boost = StatEntry(name, STATUS_TYPE)
    boost.add_data("StatusType", "BOOST")
    boost.add_data("StatusPropertyFlags", *BOOST_PROPERTY_FLAGS)
    boost.add_data("StatusGroups", "SG_RemoveOnRespec")
    boost.add_data("HideOverheadUI", "1")
    boost.add_data("IsUnique", "1")
    boost.add_data("Boosts", "ActionResource(UsedFeatPoints,1,0)")
    return boost
