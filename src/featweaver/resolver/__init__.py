"""
featweaver.resolver - Module Merge and Load Order

Folds versioned snapshots of each module into one record and orders the
merged modules so dependencies load first.
"""

from featweaver.resolver.policies import (
    MergePolicy,
    FieldMergeConfig,
    MODULE_FIELD_POLICIES,
    apply_policy,
    get_field_policy,
)
from featweaver.resolver.merger import (
    ANCHOR_MODULES,
    LoadOrderError,
    merge_into,
    merge_snapshots,
    trim_dependencies,
    merge_modules,
    compute_load_order,
    merge,
)

__all__ = [
    # Policies
    "MergePolicy",
    "FieldMergeConfig",
    "MODULE_FIELD_POLICIES",
    "apply_policy",
    "get_field_policy",
    # Merger
    "ANCHOR_MODULES",
    "LoadOrderError",
    "merge_into",
    "merge_snapshots",
    "trim_dependencies",
    "merge_modules",
    "compute_load_order",
    "merge",
]
