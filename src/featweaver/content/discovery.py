"""
Module Discovery

Walks game install paths, reads every package found, and collects the
interesting module snapshots by module name. The same module name usually
shows up several times (base package plus patches); folding those
snapshots is the merger's job.
"""

import logging
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from featweaver.content.models import Module
from featweaver.content.reader import PackageReader
from featweaver.content.sources import find_packages, open_package

logger = logging.getLogger(__name__)


def read_package(path: Path) -> Dict[str, Module]:
    """
    Read one package; returns module name -> snapshot.

    An unreadable package is logged and yields no modules.
    """
    package = open_package(path)
    if package is None:
        return {}

    reader = PackageReader(str(path))
    try:
        return reader.read(package)
    except (OSError, zipfile.BadZipFile) as e:
        logger.warning("  Skipping package %s due to: %s", path, e)
        return {}


def gather_modules(
    install_paths: Iterable[Path],
    patterns: Sequence[str],
) -> Dict[str, List[Module]]:
    """
    Collect interesting module snapshots from every package under the paths.

    Args:
        install_paths: Directories to search
        patterns: Glob patterns selecting package archives

    Returns:
        Module name -> snapshots, in discovery order
    """
    snapshots: Dict[str, List[Module]] = {}

    for install_path in install_paths:
        for package_path in find_packages(Path(install_path), patterns):
            logger.info("%s: Reading: %s", install_path, package_path)
            for name, module in read_package(package_path).items():
                if not module.is_interesting:
                    continue
                snapshots.setdefault(name, []).append(module)
                logger.info("  Found Module: %s", name)
                for dep in module.dependencies:
                    logger.debug("    Depends on: %s", dep.name)

    return snapshots
