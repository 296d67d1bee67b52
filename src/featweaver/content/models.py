"""
Content Models

Modules, feats and feat descriptions as read from mod packages.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from featweaver.parser.localization import LocalizedString
from featweaver.parser.lsx import LsxNode
from featweaver.parser.selectors import Selector, SelectorType, parse_selector_list, split_list
from featweaver.parser.stats import StatEntry


NIL_UUID = UUID(int=0)

# Bit layout of the packed 64-bit module version
VERSION_MAJOR_SHIFT = 55
VERSION_MINOR_SHIFT = 47
VERSION_REVISION_SHIFT = 31
VERSION_MAJOR_MASK = 0x1FF
VERSION_MINOR_MASK = 0xFF
VERSION_REVISION_MASK = 0xFFFF
VERSION_BUILD_MASK = 0x7FFFFFFF

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9]")


def normalize_name(name: str) -> str:
    """Replace everything but ASCII letters and digits with '_'."""
    return _UNSAFE_NAME_CHARS.sub("_", name)


def pack_version(major: int, minor: int = 0, revision: int = 0, build: int = 0) -> int:
    """Pack version components into the 64-bit module version."""
    return (
        ((major & VERSION_MAJOR_MASK) << VERSION_MAJOR_SHIFT)
        | ((minor & VERSION_MINOR_MASK) << VERSION_MINOR_SHIFT)
        | ((revision & VERSION_REVISION_MASK) << VERSION_REVISION_SHIFT)
        | (build & VERSION_BUILD_MASK)
    )


class SelectorListType(Enum):
    """Candidate list categories a module can define."""
    PASSIVE = auto()
    ABILITY = auto()
    SKILL = auto()
    SPELL = auto()


# Expertise draws from the skill lists
_LIST_TYPE_BY_SELECTOR: Dict[SelectorType, SelectorListType] = {
    SelectorType.PASSIVE: SelectorListType.PASSIVE,
    SelectorType.ABILITY: SelectorListType.ABILITY,
    SelectorType.SKILL: SelectorListType.SKILL,
    SelectorType.EXPERTISE: SelectorListType.SKILL,
    SelectorType.SPELL: SelectorListType.SPELL,
}


def list_type_for(selector_type: SelectorType) -> SelectorListType:
    """
    Candidate list category a selector type draws from.

    Raises:
        KeyError: For SelectorType.UNKNOWN
    """
    return _LIST_TYPE_BY_SELECTOR[selector_type]


@dataclass
class ModuleId:
    """Identity of a module: id, name and packed version."""
    name: Optional[str] = None
    id: UUID = NIL_UUID
    version: int = 0

    @property
    def version_major(self) -> int:
        return self.version >> VERSION_MAJOR_SHIFT

    @property
    def version_minor(self) -> int:
        return (self.version >> VERSION_MINOR_SHIFT) & VERSION_MINOR_MASK

    @property
    def version_revision(self) -> int:
        return (self.version >> VERSION_REVISION_SHIFT) & VERSION_REVISION_MASK

    @property
    def version_build(self) -> int:
        return self.version & VERSION_BUILD_MASK

    @property
    def version_string(self) -> str:
        return (f"{self.version_major}.{self.version_minor}."
                f"{self.version_revision}.{self.version_build}")

    @property
    def is_valid(self) -> bool:
        """True if the id is not nil and the name is not empty."""
        return self.id != NIL_UUID and bool(self.name)

    def read_attributes(self, node: LsxNode) -> None:
        """Read UUID, Name and Version64 from a ModuleInfo/ModuleShortDesc node."""
        self.id = node.get_guid("UUID")
        self.name = node.get_string("Name")
        self.version = node.get_int("Version64")

    @classmethod
    def from_node(cls, node: LsxNode) -> "ModuleId":
        module_id = cls()
        module_id.read_attributes(node)
        return module_id


@dataclass(frozen=True)
class Feat:
    """
    A feat from Feats.lsx.

    Selectors are kept in declaration order; the weaver resolves them
    front to back.
    """
    id: UUID
    name: str
    repeatable: bool = False
    passives: Tuple[str, ...] = ()
    requirements: Optional[str] = None
    selectors: Tuple[Selector, ...] = ()

    @property
    def is_supported(self) -> bool:
        """Only feats whose selectors are all ability selectors can be woven."""
        return all(s.selector_type == SelectorType.ABILITY for s in self.selectors)

    @classmethod
    def from_node(cls, node: LsxNode) -> "Feat":
        return cls(
            id=node.get_guid("UUID"),
            name=node.get_string("Name"),
            repeatable=node.get_bool("CanBeTakenMultipleTimes"),
            passives=tuple(split_list(node.get_string("PassivesAdded", None))),
            requirements=node.get_string("Requirements", None) or None,
            selectors=tuple(parse_selector_list(node.get_string("Selectors", None))),
        )


@dataclass(frozen=True)
class FeatDescription:
    """Display name and description of a feat, possibly from another module."""
    feat_id: UUID
    display_name: LocalizedString
    description: LocalizedString

    @classmethod
    def from_node(cls, node: LsxNode) -> "FeatDescription":
        return cls(
            feat_id=node.get_guid("FeatId"),
            display_name=LocalizedString.parse(node.get_string("DisplayName")),
            description=LocalizedString.parse(node.get_string("Description")),
        )


@dataclass
class Module(ModuleId):
    """
    Everything one module contributes.

    A raw module is one snapshot read from one package; the merger folds
    snapshots of the same name into a single Module.
    """
    package: Optional[str] = None
    descriptions: Dict[UUID, FeatDescription] = field(default_factory=dict)
    feats: List[Feat] = field(default_factory=list)
    dependencies: List[ModuleId] = field(default_factory=list)
    stats: Dict[str, StatEntry] = field(default_factory=dict)
    lists: Dict[SelectorListType, Dict[UUID, Tuple[str, ...]]] = field(default_factory=dict)

    def __repr__(self):
        return (f"Module({self.name} v{self.version_string}: {len(self.feats)} feats, "
                f"{len(self.descriptions)} descriptions, {len(self.dependencies)} deps)")

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name or "")

    @property
    def is_interesting(self) -> bool:
        """Valid and contributes descriptions, feats or candidate lists."""
        return self.is_valid and bool(self.descriptions or self.feats or self.lists)

    @property
    def dependency_names(self) -> List[str]:
        return [dep.name for dep in self.dependencies if dep.name]

    def get_feat(self, feat_id: UUID) -> Optional[Feat]:
        for feat in self.feats:
            if feat.id == feat_id:
                return feat
        return None

    def get_candidates(self, list_type: SelectorListType, list_id: UUID) -> Optional[Tuple[str, ...]]:
        """Candidate names of a list, or None if this module does not define it."""
        return self.lists.get(list_type, {}).get(list_id)
