"""
Module Merger

Folds the snapshots of each module into one authoritative Module and
computes a load order that respects declared dependencies:

1. Per module name, merge snapshots in ascending version order
2. Drop dependencies on modules that were not discovered
3. Place the anchor modules first, then repeatedly place any module whose
   dependencies are all placed

A pass that places nothing means a dependency cycle; that is reported
as LoadOrderError instead of being retried.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from featweaver.content.models import Module
from featweaver.resolver.policies import MODULE_FIELD_POLICIES, apply_policy

logger = logging.getLogger(__name__)

# Base game modules, always loaded first
ANCHOR_MODULES = ("Shared", "SharedDev")


class LoadOrderError(Exception):
    """Some modules could not be placed in the load order."""
    def __init__(self, unresolved: Mapping[str, List[str]], placed: Sequence[str]):
        self.unresolved = dict(unresolved)
        self.placed = list(placed)
        details = ", ".join(
            f"{name} (waiting on {', '.join(deps) or 'nothing'})"
            for name, deps in self.unresolved.items()
        )
        super().__init__(f"Cannot order modules: {details}")


def merge_into(target: Module, snapshot: Module) -> None:
    """Merge one snapshot over target, field by field."""
    for config in MODULE_FIELD_POLICIES:
        current = getattr(target, config.field_name)
        incoming = getattr(snapshot, config.field_name)
        setattr(target, config.field_name, apply_policy(config.policy, current, incoming))


def merge_snapshots(name: str, snapshots: Iterable[Module]) -> Module:
    """
    Fold all snapshots of one module, lowest version first.

    Snapshots with equal versions keep their discovery order.
    """
    target = Module(name=name)
    for snapshot in sorted(snapshots, key=lambda m: m.version):
        merge_into(target, snapshot)
    return target


def trim_dependencies(module: Module, known: Iterable[str]) -> None:
    """Keep only dependencies on modules in known."""
    known = set(known)
    module.dependencies = [dep for dep in module.dependencies if dep.name and dep.name in known]


def merge_modules(snapshots_by_name: Mapping[str, Sequence[Module]]) -> Dict[str, Module]:
    """Merge every module's snapshots and trim dependencies to the merged set."""
    merged: Dict[str, Module] = {}
    for name, snapshots in snapshots_by_name.items():
        if not snapshots:
            continue
        merged[name] = merge_snapshots(name, snapshots)
        logger.debug("Merged %d snapshot(s) of %s -> v%s",
                     len(snapshots), name, merged[name].version_string)

    for module in merged.values():
        trim_dependencies(module, merged.keys())

    return merged


def compute_load_order(
    modules: Mapping[str, Module],
    anchors: Sequence[str] = ANCHOR_MODULES,
) -> List[Module]:
    """
    Order modules so every module comes after its dependencies.

    Anchors go first unconditionally, in the given order. Missing anchors
    are skipped.

    Raises:
        LoadOrderError: If a pass over the remaining modules places nothing
    """
    remaining: Dict[str, Module] = dict(modules)
    ordered: List[Module] = []
    placed = set()

    for anchor in anchors:
        module = remaining.pop(anchor, None)
        if module is None:
            logger.warning("Anchor module %s was not found", anchor)
            continue
        ordered.append(module)
        placed.add(anchor)

    while remaining:
        ready: Optional[Module] = None
        for module in remaining.values():
            if all(name in placed for name in module.dependency_names):
                ready = module
                break

        if ready is None:
            unresolved = {
                name: [dep for dep in module.dependency_names if dep not in placed]
                for name, module in remaining.items()
            }
            raise LoadOrderError(unresolved, [m.name for m in ordered])

        ordered.append(ready)
        placed.add(ready.name)
        del remaining[ready.name]

    return ordered


def merge(
    snapshots_by_name: Mapping[str, Sequence[Module]],
    anchors: Sequence[str] = ANCHOR_MODULES,
) -> List[Module]:
    """Merge snapshots and return the modules in load order."""
    merged = merge_modules(snapshots_by_name)
    ordered = compute_load_order(merged, anchors)
    logger.info("Load order: %s", ", ".join(m.name for m in ordered))
    return ordered
