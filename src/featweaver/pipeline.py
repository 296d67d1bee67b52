"""
Build Pipeline

One weaving run, end to end:

1. Gather module snapshots from every package under the install paths
2. Merge snapshots and compute the load order
3. Weave feats over the reversed load order (overriding modules first)
4. Export the generated stat files and wiring
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from featweaver.config import FeatWeaverConfig
from featweaver.content.discovery import gather_modules
from featweaver.content.models import Module
from featweaver.resolver.merger import merge
from featweaver.weaver.exporter import ExportOptions, GeneratedFilesExporter
from featweaver.weaver.weaver import FeatWeaver
from featweaver.weaver.wiring import BuildContext

logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Outcome of a weaving run."""
    load_order: List[str] = field(default_factory=list)
    feat_count: int = 0
    spell_count: int = 0
    boost_count: int = 0
    written: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)


def load_modules(config: FeatWeaverConfig) -> List[Module]:
    """Gather and merge modules; returns them in load order."""
    snapshots = gather_modules(config.game_install_paths, config.package_patterns)
    logger.info("Discovered %d interesting module(s)", len(snapshots))
    return merge(snapshots, config.anchor_modules)


def weave(modules: List[Module], config: FeatWeaverConfig) -> FeatWeaver:
    """Run the weaver over modules given in load order."""
    weaver = FeatWeaver(
        list(reversed(modules)),
        base_container=config.base_spell_container,
        max_leaves=config.max_generated_leaves,
    )
    weaver.generate()
    return weaver


def run_build(config: FeatWeaverConfig, output_dir: Optional[Path] = None) -> BuildSummary:
    """
    Gather, merge, weave and export.

    Args:
        config: Run configuration
        output_dir: Overrides config.output_path

    Raises:
        LoadOrderError: Dependency cycle among the discovered modules
        UnimplementedSelectorError: Expansion reached a non-ability selector
        ExpansionLimitError: Too many generated leaves
    """
    modules = load_modules(config)
    weaver = weave(modules, config)
    context: BuildContext = weaver.context

    options = ExportOptions(
        output_dir=Path(output_dir) if output_dir is not None else config.output_path,
        file_prefix=config.file_prefix,
    )
    result = GeneratedFilesExporter(context, options).export_all()

    summary = BuildSummary(
        load_order=[m.name for m in modules],
        feat_count=len(weaver.feat_ids()),
        spell_count=context.spell_count,
        boost_count=context.boost_count,
        written=result.written,
        removed=result.removed,
    )
    logger.info("Build complete: %d feats, %d spells, %d boosts",
                summary.feat_count, summary.spell_count, summary.boost_count)
    return summary
