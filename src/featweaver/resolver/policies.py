"""
Merge Policies for Module Snapshots

Defines how each field of a module is folded when a later (higher
version) snapshot of the same module is merged over an earlier one.
"""

from copy import copy
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from uuid import UUID

from featweaver.content.models import NIL_UUID


class MergePolicy(Enum):
    """Field-level merge policies."""

    # Scalar replaced when the incoming value is set (non-nil id, non-zero version)
    OVERRIDE_IF_SET = auto()

    # Collection replaced wholesale, but never by an empty one (feats, descriptions, dependencies)
    REPLACE_IF_NONEMPTY = auto()

    # Each key independent, later value per key wins (stat entries)
    PER_KEY_OVERRIDE = auto()

    # Two-level per-key override: category -> list id -> candidates
    NESTED_PER_KEY_OVERRIDE = auto()


@dataclass(frozen=True)
class FieldMergeConfig:
    """How one module field merges."""
    field_name: str
    policy: MergePolicy
    description: str = ""


MODULE_FIELD_POLICIES: List[FieldMergeConfig] = [
    FieldMergeConfig("id", MergePolicy.OVERRIDE_IF_SET,
                     "Module id - latest non-nil id wins"),
    FieldMergeConfig("version", MergePolicy.OVERRIDE_IF_SET,
                     "Packed version - latest non-zero version wins"),
    FieldMergeConfig("descriptions", MergePolicy.REPLACE_IF_NONEMPTY,
                     "Feat descriptions - latest non-empty set wins"),
    FieldMergeConfig("feats", MergePolicy.REPLACE_IF_NONEMPTY,
                     "Feats - latest non-empty list wins"),
    FieldMergeConfig("dependencies", MergePolicy.REPLACE_IF_NONEMPTY,
                     "Dependencies - latest non-empty list wins"),
    FieldMergeConfig("stats", MergePolicy.PER_KEY_OVERRIDE,
                     "Stat entries - per-name override"),
    FieldMergeConfig("lists", MergePolicy.NESTED_PER_KEY_OVERRIDE,
                     "Candidate lists - per-category, per-list-id override"),
]


def get_field_policy(field_name: str) -> Optional[MergePolicy]:
    """Get the merge policy for a module field."""
    for config in MODULE_FIELD_POLICIES:
        if config.field_name == field_name:
            return config.policy
    return None


def _is_set(value: Any) -> bool:
    if isinstance(value, UUID):
        return value != NIL_UUID
    return bool(value)


def apply_policy(policy: MergePolicy, current: Any, incoming: Any) -> Any:
    """
    Merge incoming over current according to policy.

    Returns the merged value. Containers are copied, so neither input is
    mutated and the result shares no top-level container with them.
    """
    if policy == MergePolicy.OVERRIDE_IF_SET:
        return incoming if _is_set(incoming) else current

    if policy == MergePolicy.REPLACE_IF_NONEMPTY:
        return copy(incoming) if incoming else current

    if policy == MergePolicy.PER_KEY_OVERRIDE:
        merged = dict(current)
        merged.update(incoming)
        return merged

    if policy == MergePolicy.NESTED_PER_KEY_OVERRIDE:
        merged: Dict[Any, Dict[Any, Any]] = {key: dict(inner) for key, inner in current.items()}
        for key, inner in incoming.items():
            merged.setdefault(key, {}).update(inner)
        return merged

    raise ValueError(f"Unhandled merge policy: {policy}")
