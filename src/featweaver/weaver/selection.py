"""
Selection Expander

Produces the next layer of choices for an ExpansionState. Only ability
selectors can be expanded; any other kind raises UnimplementedSelectorError.
"""

from typing import Iterable, Iterator, List, Tuple

from featweaver.parser.selectors import AbilitySelector, SelectorType
from featweaver.weaver.state import ExpansionState

# Highest ability score a character can reach
ABILITY_SCORE_CAP = 20


class UnimplementedSelectorError(NotImplementedError):
    """Expansion reached a selector kind that cannot be expanded yet."""
    def __init__(self, selector_type: SelectorType):
        self.selector_type = selector_type
        super().__init__(f"Expansion of {selector_type.name} selectors is not implemented")


def is_complete(state: ExpansionState) -> bool:
    """True once no selectors are pending."""
    return not state.selectors


def expand(state: ExpansionState, candidates: Iterable[str]) -> Iterator[Tuple[str, ExpansionState]]:
    """
    Yield (candidate, child state) for each legal pick of the head selector.

    A candidate already raised to the selector's max yields no child. The
    pick that completes the selector's count pops it from the child's queue.

    Raises:
        UnimplementedSelectorError: If the head selector is not an ability selector
    """
    selector = state.current
    if selector is None:
        return

    if not isinstance(selector, AbilitySelector):
        raise UnimplementedSelectorError(selector.selector_type)

    # +1 for the pick being made now
    done = len(state.choices) + 1 >= selector.count

    for candidate in candidates:
        if state.abilities.get(candidate, 0) >= selector.max:
            continue
        child = state.clone(advance=done)
        if not done:
            child.choices = child.choices + (candidate,)
        child.abilities[candidate] = child.abilities.get(candidate, 0) + 1
        yield candidate, child


def boosts(state: ExpansionState) -> List[str]:
    """One Ability(name,increment) boost per accumulated ability."""
    return [f"Ability({name},{amount})" for name, amount in state.abilities.items()]


def requirements(state: ExpansionState) -> List[str]:
    """Keep each boosted ability from going past the score cap."""
    return [
        f"not AbilityGreaterThan('{name}',{ABILITY_SCORE_CAP - amount})"
        for name, amount in state.abilities.items()
    ]
