"""
Expansion State

The per-branch state of a feat's selector walk. Every child branch gets
its own copy, so siblings never share mutable data.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from featweaver.content.models import Feat
from featweaver.parser.selectors import AbilitySelector, Selector


@dataclass
class ExpansionState:
    """
    Pending selectors, accumulated ability increments, and the choices
    made so far for the selector at the head of the queue.
    """
    selectors: Tuple[Selector, ...] = ()
    abilities: Dict[str, int] = field(default_factory=dict)
    choices: Tuple[str, ...] = ()

    @classmethod
    def for_feat(cls, feat: Feat) -> "ExpansionState":
        """Initial state for a feat. Ability selectors asking for zero picks are dropped."""
        selectors = tuple(
            s for s in feat.selectors
            if not (isinstance(s, AbilitySelector) and s.count == 0)
        )
        return cls(selectors=selectors)

    @property
    def current(self) -> Optional[Selector]:
        return self.selectors[0] if self.selectors else None

    def clone(self, advance: bool = False) -> "ExpansionState":
        """
        Independent copy of this state.

        With advance=True the head selector is popped and the choice
        history starts over for the next selector.
        """
        if advance:
            return ExpansionState(selectors=self.selectors[1:], abilities=dict(self.abilities))
        return ExpansionState(
            selectors=self.selectors,
            abilities=dict(self.abilities),
            choices=self.choices,
        )
