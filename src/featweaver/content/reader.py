"""
Package Reader

Routes the files of one package to the modules they belong to and parses
them. The module name is the second path component:

    Mods/<module>/meta.lsx                         identity and dependencies
    Public/<module>/Feats/Feats.lsx                feats
    Public/<module>/FeatDescriptions/...lsx        feat descriptions
    Public/<module>/Stats/Generated/Data/*.txt     stat entries
    Public/<module>/Lists/*.lsx                    candidate lists

A file that fails to parse is logged and skipped; the rest of the
package is still read.
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Dict, List, Optional

from featweaver.content.models import (
    Feat, FeatDescription, Module, ModuleId, SelectorListType,
)
from featweaver.content.sources import Package, PackageFile
from featweaver.parser.lsx import LsxNode, LsxResource, MissingAttributeError, read_lsx
from featweaver.parser.selectors import split_list
from featweaver.parser.stats import parse_stat_entries

logger = logging.getLogger(__name__)

_MODULE_FROM_PATH = re.compile(r"^[^/]+/(?P<mod>[^/]+)/.*$")

STATS_DIR_MARKER = "/stats/generated/data/"


@dataclass(frozen=True)
class ListLayout:
    """Where a candidate list category lives inside a Lists/*.lsx file."""
    region: str
    node: str
    attribute: str
    separator: str = ","


LIST_LAYOUTS: Dict[SelectorListType, ListLayout] = {
    SelectorListType.PASSIVE: ListLayout("PassiveLists", "PassiveList", "Passives"),
    SelectorListType.ABILITY: ListLayout("AbilityLists", "AbilityList", "Abilities"),
    SelectorListType.SKILL: ListLayout("SkillLists", "SkillList", "Skills"),
    SelectorListType.SPELL: ListLayout("SpellLists", "SpellList", "Spells"),
}


def module_name_from_path(path: str) -> Optional[str]:
    """Second path component of a package file name, or None."""
    m = _MODULE_FROM_PATH.match(path)
    return m.group("mod") if m else None


# =============================================================================
# FILE PROCESSORS
# =============================================================================

def read_module_info(module: Module, resource: LsxResource) -> None:
    """Fill identity and dependencies from meta.lsx."""
    config = resource.regions["Config"]
    module.read_attributes(config.get_children("ModuleInfo")[0])

    if not module.is_valid:
        return

    logger.info("Parsed mod: %s, version: %s", module.name, module.version_string)

    for dependencies in config.get_children("Dependencies")[:1]:
        for node in dependencies.get_children("ModuleShortDesc"):
            dep = ModuleId.from_node(node)
            if dep.is_valid:
                logger.debug("  Parsed dependency mod: %s, version: %s", dep.name, dep.version_string)
                module.dependencies.append(dep)


def read_feats(module: Module, resource: LsxResource) -> None:
    region = resource.get_region("Feats")
    if region is None:
        return
    module.feats.extend(Feat.from_node(node) for node in region.get_children("Feat"))


def read_feat_descriptions(module: Module, resource: LsxResource) -> None:
    region = resource.get_region("FeatDescriptions")
    if region is None:
        return
    for node in region.get_children("FeatDescription"):
        description = FeatDescription.from_node(node)
        module.descriptions[description.feat_id] = description


def read_lists(module: Module, resource: LsxResource) -> None:
    for list_type, layout in LIST_LAYOUTS.items():
        region = resource.get_region(layout.region)
        if region is None:
            continue
        container = module.lists.setdefault(list_type, {})
        for node in region.get_children(layout.node):
            items = split_list(node.get_string(layout.attribute), layout.separator)
            # Ordered, de-duplicated
            container[node.get_guid("UUID")] = tuple(dict.fromkeys(items))


LSX_PROCESSORS: Dict[str, Callable[[Module, LsxResource], None]] = {
    "meta.lsx": read_module_info,
    "feats.lsx": read_feats,
    "featdescriptions.lsx": read_feat_descriptions,
}


# =============================================================================
# PACKAGE READING
# =============================================================================

class PackageReader:
    """
    Reads every module snapshot found in one package.

    Usage:
        reader = PackageReader(str(path))
        modules = reader.read(package)
    """

    def __init__(self, package_name: str):
        self.package_name = package_name
        self.modules: Dict[str, Module] = {}
        self.skipped_files: List[str] = []

    def _get_module(self, name: str) -> Module:
        module = self.modules.get(name)
        if module is None:
            module = Module(name=name, package=self.package_name)
            self.modules[name] = module
        return module

    def read(self, package: Package) -> Dict[str, Module]:
        """Read all files of the package; returns module name -> snapshot."""
        for package_file in package.iter_files():
            mod_name = module_name_from_path(package_file.name)
            if not mod_name:
                logger.debug("  Skipping: %s", package_file.name)
                continue
            module = self._get_module(mod_name)
            try:
                self.process_file(module, package_file)
            except (MissingAttributeError, ET.ParseError, KeyError, IndexError, ValueError) as e:
                logger.warning("  Skipping %s in %s: %s", package_file.name, self.package_name, e)
                self.skipped_files.append(package_file.name)
        return self.modules

    def process_file(self, module: Module, package_file: PackageFile) -> None:
        """Dispatch one file to its processor, if any applies."""
        path = PurePosixPath(package_file.name)
        lookup = path.name.lower()
        lower_path = package_file.name.lower()
        extension = path.suffix.lower()

        processor = LSX_PROCESSORS.get(lookup)
        if processor is not None:
            processor(module, read_lsx(package_file.read_bytes()))
            return

        if extension == ".txt" and STATS_DIR_MARKER in lower_path:
            for stat in parse_stat_entries(package_file.read_text(), package_file.name):
                module.stats[stat.name] = stat
            return

        folder = module_name_from_path(package_file.name) or module.name or ""
        if extension == ".lsx" and f"public/{folder.lower()}/lists/" in lower_path:
            read_lists(module, read_lsx(package_file.read_bytes()))
