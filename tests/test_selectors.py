"""
Tests for the feat selector parser.
"""

from uuid import UUID

import pytest
from featweaver.parser.selectors import (
    AbilitySelector,
    ExpertiseSelector,
    PassiveSelector,
    SelectorType,
    SkillSelector,
    UnknownSelector,
    parse_selector,
    parse_selector_list,
    split_list,
)

LIST_ID = UUID("b9149c8e-52c8-46e5-9cb6-fc39301c05fe")


class TestAbilitySelector:
    """Test SelectAbilities parsing."""

    def test_documented_example(self):
        selector = parse_selector("SelectAbilities(499230af-5946-4680-a7ee-4d76d421f2ef,1,1,LightlyArmoredASI)")
        assert selector == AbilitySelector(
            id=UUID("499230af-5946-4680-a7ee-4d76d421f2ef"), count=1, max=1, label="LightlyArmoredASI")

    def test_basic(self):
        """All four arguments are captured."""
        selector = parse_selector("SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,2,1,FeatASI)")
        assert selector == AbilitySelector(id=LIST_ID, count=2, max=1, label="FeatASI")
        assert selector.selector_type == SelectorType.ABILITY
        assert selector.list_id == LIST_ID

    def test_case_and_whitespace(self):
        """Function name is case-insensitive and whitespace is tolerated."""
        selector = parse_selector("  selectabilities ( B9149C8E-52C8-46E5-9CB6-FC39301C05FE , 2 , 2 , FeatASI )  ")
        assert isinstance(selector, AbilitySelector)
        assert selector.id == LIST_ID
        assert selector.count == 2
        assert selector.max == 2

    def test_hyphenless_guid(self):
        """GUID hyphens are optional."""
        selector = parse_selector("SelectAbilities(b9149c8e52c846e59cb6fc39301c05fe,1,1,FeatASI)")
        assert isinstance(selector, AbilitySelector)
        assert selector.id == LIST_ID

    def test_missing_label_is_unknown(self):
        """The label argument is required."""
        selector = parse_selector("SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,2,1)")
        assert isinstance(selector, UnknownSelector)


class TestOtherSelectors:
    """Test skill, expertise and passive selectors."""

    def test_skills_with_label(self):
        selector = parse_selector("SelectSkills(f974ebd6-3725-4b90-bb5c-2b647d41615d,3,SkilledSkills)")
        assert isinstance(selector, SkillSelector)
        assert selector.count == 3
        assert selector.label == "SkilledSkills"

    def test_skills_without_label(self):
        selector = parse_selector("SelectSkills(f974ebd6-3725-4b90-bb5c-2b647d41615d,1)")
        assert isinstance(selector, SkillSelector)
        assert selector.label is None

    def test_expertise_is_not_taken_as_skills(self):
        """SelectSkillsExpertise shares a prefix with SelectSkills."""
        selector = parse_selector("SelectSkillsExpertise(f974ebd6-3725-4b90-bb5c-2b647d41615d,2,true)")
        assert isinstance(selector, ExpertiseSelector)
        assert selector.count == 2
        assert selector.flag is True
        assert selector.selector_type == SelectorType.EXPERTISE

    def test_expertise_flag_optional(self):
        selector = parse_selector("SelectSkillsExpertise(f974ebd6-3725-4b90-bb5c-2b647d41615d,1)")
        assert isinstance(selector, ExpertiseSelector)
        assert selector.flag is None

    def test_passives(self):
        selector = parse_selector("SelectPassives(f8ebba38-932a-4c64-ae55-3df23e2f60fa,1,FightingStyle)")
        assert isinstance(selector, PassiveSelector)
        assert selector.category == "FightingStyle"
        assert selector.list_id == UUID("f8ebba38-932a-4c64-ae55-3df23e2f60fa")


class TestUnknownSelector:
    """Unrecognized text never raises."""

    @pytest.mark.parametrize("text", [
        "",
        "garbage",
        "SelectAbilities(not-a-guid,2,1,FeatASI)",
        "SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,two,1,FeatASI)",
        "AddSpells(b9149c8e-52c8-46e5-9cb6-fc39301c05fe)",
    ])
    def test_unknown(self, text):
        selector = parse_selector(text)
        assert isinstance(selector, UnknownSelector)
        assert selector.selector_type == SelectorType.UNKNOWN
        assert selector.text == text.strip()

    def test_spells_are_not_parsed(self):
        """SelectSpells is recognized by name but produces no selector."""
        selector = parse_selector("SelectSpells(8c32c900-a8ea-4f2f-9f6f-eccd0d361a9d,2,0,,,,AlwaysPrepared)")
        assert isinstance(selector, UnknownSelector)

    def test_unknown_is_logged(self, caplog):
        """A parse failure logs the raw text."""
        parse_selector("nonsense(1)")
        assert "nonsense(1)" in caplog.text


class TestSelectorLists:
    """Test semicolon-separated selector chains."""

    def test_split_list_trims_and_drops_empties(self):
        assert split_list(" a ; ;b;") == ["a", "b"]
        assert split_list(None) == []
        assert split_list("a,b", ",") == ["a", "b"]

    def test_chain_keeps_order(self):
        selectors = parse_selector_list(
            "SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,1,1,FeatASI);"
            "SelectSkills(f974ebd6-3725-4b90-bb5c-2b647d41615d,1)"
        )
        assert [s.selector_type for s in selectors] == [SelectorType.ABILITY, SelectorType.SKILL]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
