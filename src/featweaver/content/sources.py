"""
Package Sources

A package is anything that yields named files: an unpacked package
directory (one that holds a Mods/ folder) or a zip archive. Names are
POSIX-style paths relative to the package root, e.g.

    Mods/MyMod/meta.lsx
    Public/MyMod/Feats/Feats.lsx

Raw .pak archives must be extracted with an external tool first.
"""

import fnmatch
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# A directory holding this folder is an unpacked package
PACKAGE_MARKER_DIR = "Mods"


@dataclass
class PackageFile:
    """A named byte stream inside a package."""
    name: str
    loader: Callable[[], bytes]

    def read_bytes(self) -> bytes:
        return self.loader()

    def read_text(self) -> str:
        return self.read_bytes().decode("utf-8-sig", errors="replace")


class DirectoryPackage:
    """An unpacked package on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self):
        return f"DirectoryPackage({self.path})"

    def iter_files(self) -> Iterator[PackageFile]:
        for file_path in sorted(self.path.rglob("*")):
            if not file_path.is_file():
                continue
            name = file_path.relative_to(self.path).as_posix()
            yield PackageFile(name=name, loader=file_path.read_bytes)


class ZipPackage:
    """A zip archive laid out like an unpacked package."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self):
        return f"ZipPackage({self.path})"

    def iter_files(self) -> Iterator[PackageFile]:
        with zipfile.ZipFile(self.path) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                data = archive.read(info)
                yield PackageFile(name=info.filename, loader=lambda data=data: data)


Package = Union[DirectoryPackage, ZipPackage]


def open_package(path: Path) -> Optional[Package]:
    """Open a package path, or return None for unsupported formats."""
    path = Path(path)
    if path.is_dir():
        return DirectoryPackage(path)
    if zipfile.is_zipfile(path):
        return ZipPackage(path)
    logger.info("Skipping unsupported package format: %s", path)
    return None


def find_packages(install_path: Path, patterns: Sequence[str]) -> List[Path]:
    """
    Find packages under an install path.

    Returns unpacked package directories (containing a Mods/ folder) and
    files matching any of the glob patterns, sorted by path.
    """
    install_path = Path(install_path)
    if not install_path.exists():
        logger.warning("Install path does not exist: %s", install_path)
        return []

    found = set()
    if (install_path / PACKAGE_MARKER_DIR).is_dir():
        found.add(install_path)

    for candidate in install_path.rglob("*"):
        if candidate.is_dir():
            if (candidate / PACKAGE_MARKER_DIR).is_dir():
                found.add(candidate)
        elif any(fnmatch.fnmatch(candidate.name.lower(), p.lower()) for p in patterns):
            found.add(candidate)

    return sorted(found)
