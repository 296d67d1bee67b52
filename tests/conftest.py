"""
Pytest configuration and shared fixtures.
"""

import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple
from uuid import NAMESPACE_URL, UUID, uuid5

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from featweaver.content.models import Feat, Module, ModuleId, SelectorListType, pack_version
from featweaver.parser.selectors import parse_selector_list


SHARED_ID = UUID("ed539163-bb70-431b-96a7-f5b2eda5376b")
ABILITY_LIST_ID = UUID("b9149c8e-52c8-46e5-9cb6-fc39301c05fe")
SKILL_LIST_ID = UUID("f974ebd6-3725-4b90-bb5c-2b647d41615d")
FEAT_ID = UUID("d215b9ad-9753-4d74-b2f7-96d2ed8e4101")

ABILITIES = ("Strength", "Dexterity", "Constitution", "Intelligence", "Wisdom", "Charisma")


# =============================================================================
# LSX DOCUMENTS
# =============================================================================

# A node spec is (node id, attributes, child node specs). Attribute values
# are strings, or (handle, version) tuples for translated strings.
def _add_node(parent: ET.Element, spec) -> None:
    node_id, attrs, children = spec
    element = ET.SubElement(parent, "node", id=node_id)
    for attr_id, value in attrs.items():
        if isinstance(value, tuple):
            handle, version = value
            ET.SubElement(element, "attribute", id=attr_id, type="TranslatedString",
                          handle=handle, version=str(version))
        else:
            ET.SubElement(element, "attribute", id=attr_id, type="LSString", value=str(value))
    if children:
        container = ET.SubElement(element, "children")
        for child in children:
            _add_node(container, child)


def build_lsx(regions: Dict[str, Sequence]) -> bytes:
    """Serialize region id -> node specs under each region's root node."""
    save = ET.Element("save")
    ET.SubElement(save, "version", major="4", minor="0", revision="9", build="331")
    for region_id, nodes in regions.items():
        region = ET.SubElement(save, "region", id=region_id)
        _add_node(region, ("root", {}, list(nodes)))
    return ET.tostring(save, encoding="utf-8", xml_declaration=True)


def node(node_id: str, children: Iterable = (), **attrs) -> tuple:
    return (node_id, attrs, list(children))


def module_info(name: str, module_id: UUID, version: int) -> tuple:
    return node("ModuleInfo", UUID=str(module_id), Name=name, Version64=str(version), Folder=name)


def feat_node(
    name: str,
    feat_id: UUID = FEAT_ID,
    selectors: str = "",
    passives: str = "",
    requirements: str = "",
    repeatable: bool = False,
) -> tuple:
    attrs = {"UUID": str(feat_id), "Name": name,
             "CanBeTakenMultipleTimes": "true" if repeatable else "false"}
    if selectors:
        attrs["Selectors"] = selectors
    if passives:
        attrs["PassivesAdded"] = passives
    if requirements:
        attrs["Requirements"] = requirements
    return node("Feat", **attrs)


# =============================================================================
# PACKAGES ON DISK
# =============================================================================

class PackageBuilder:
    """Writes an unpacked package (Mods/ + Public/) under a directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def write(self, relative: str, data) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            data = data.encode("utf-8")
        path.write_bytes(data)
        return path

    def meta(self, folder: str, module_id: UUID, version: int = pack_version(1),
             dependencies: Sequence[Tuple[str, UUID]] = (), name: Optional[str] = None) -> Path:
        deps = [
            node("ModuleShortDesc", UUID=str(dep_id), Name=dep_name, Version64=str(pack_version(1)))
            for dep_name, dep_id in dependencies
        ]
        config = [node("Dependencies", deps), module_info(name or folder, module_id, version)]
        return self.write(f"Mods/{folder}/meta.lsx", build_lsx({"Config": config}))

    def feats(self, folder: str, feats: Sequence[tuple]) -> Path:
        return self.write(f"Public/{folder}/Feats/Feats.lsx", build_lsx({"Feats": feats}))

    def descriptions(self, folder: str, feat_id: UUID, display_name: str, description: str) -> Path:
        desc = node("FeatDescription", FeatId=str(feat_id),
                    DisplayName=(display_name, 1), Description=(description, 1))
        return self.write(f"Public/{folder}/FeatDescriptions/FeatDescriptions.lsx",
                          build_lsx({"FeatDescriptions": [desc]}))

    def ability_list(self, folder: str, list_id: UUID, abilities: Sequence[str]) -> Path:
        entry = node("AbilityList", UUID=str(list_id), Abilities=",".join(abilities), Name="ASI")
        return self.write(f"Public/{folder}/Lists/AbilityLists.lsx",
                          build_lsx({"AbilityLists": [entry]}))

    def stats(self, folder: str, filename: str, text: str) -> Path:
        return self.write(f"Public/{folder}/Stats/Generated/Data/{filename}", text)


@pytest.fixture
def package_builder(tmp_path):
    """Factory for PackageBuilder instances rooted under tmp_path/game."""
    def _make(package_name: str) -> PackageBuilder:
        return PackageBuilder(tmp_path / "game" / package_name)
    return _make


# =============================================================================
# IN-MEMORY MODULES
# =============================================================================

def make_feat(
    name: str = "AbilityImprovements",
    selectors: str = "",
    feat_id: UUID = FEAT_ID,
    passives: Sequence[str] = (),
    requirements: Optional[str] = None,
    repeatable: bool = False,
) -> Feat:
    return Feat(
        id=feat_id,
        name=name,
        repeatable=repeatable,
        passives=tuple(passives),
        requirements=requirements,
        selectors=tuple(parse_selector_list(selectors)),
    )


def make_module(
    name: str,
    module_id: Optional[UUID] = None,
    version: int = pack_version(1),
    feats: Sequence[Feat] = (),
    dependencies: Sequence[str] = (),
    ability_lists: Optional[Dict[UUID, Sequence[str]]] = None,
) -> Module:
    module = Module(name=name, id=module_id or uuid5(NAMESPACE_URL, name), version=version)
    module.feats = list(feats)
    module.dependencies = [ModuleId(name=dep, id=uuid5(NAMESPACE_URL, dep), version=0)
                           for dep in dependencies]
    if ability_lists:
        module.lists[SelectorListType.ABILITY] = {
            list_id: tuple(items) for list_id, items in ability_lists.items()
        }
    return module


def ability_selector(count: int, max_: int, list_id: UUID = ABILITY_LIST_ID) -> str:
    return f"SelectAbilities({list_id},{count},{max_},FeatASI)"
