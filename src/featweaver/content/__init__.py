"""
featweaver.content - Mod Content Loading

Reads modules (feats, descriptions, stat entries, candidate lists) out of
mod packages:
1. Finding packages under the game install paths
2. Routing each package file to the module it belongs to
3. Keeping only modules that contribute something
"""

from featweaver.content.models import (
    NIL_UUID,
    ModuleId,
    Module,
    Feat,
    FeatDescription,
    SelectorListType,
    list_type_for,
    normalize_name,
    pack_version,
)
from featweaver.content.sources import (
    PackageFile,
    DirectoryPackage,
    ZipPackage,
    open_package,
    find_packages,
)
from featweaver.content.reader import PackageReader, module_name_from_path
from featweaver.content.discovery import gather_modules, read_package

__all__ = [
    # Models
    "NIL_UUID",
    "ModuleId",
    "Module",
    "Feat",
    "FeatDescription",
    "SelectorListType",
    "list_type_for",
    "normalize_name",
    "pack_version",
    # Sources
    "PackageFile",
    "DirectoryPackage",
    "ZipPackage",
    "open_package",
    "find_packages",
    # Reading
    "PackageReader",
    "module_name_from_path",
    "gather_modules",
    "read_package",
]
