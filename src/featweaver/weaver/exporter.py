"""
Generated Files Exporter

Writes a weaving run to disk.

Outputs:
1. <prefix><module>_Boosts.txt - boost stat entries per module
2. <prefix><module>_Shouts.txt - spell stat entries per module
3. <prefix>Wiring.json - parent spell -> per-module child spell lists

Previous <prefix>* files in the output directory are removed first.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from featweaver.parser.stats import StatEntry
from featweaver.weaver.wiring import BuildContext

logger = logging.getLogger(__name__)


DEFAULT_FILE_PREFIX = "E6_Gen_"


@dataclass
class ExportOptions:
    """Options for export."""
    output_dir: Optional[Path] = None
    file_prefix: str = DEFAULT_FILE_PREFIX
    clean_previous: bool = True          # Remove earlier <prefix>* files
    json_indent: int = 2


@dataclass
class ExportResult:
    """Files written by an export."""
    written: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)


class GeneratedFilesExporter:
    """Export a BuildContext."""

    def __init__(self, context: BuildContext, options: Optional[ExportOptions] = None):
        self.context = context
        self.options = options or ExportOptions()
        if self.options.output_dir is None:
            self.options.output_dir = Path("./generated")

    def export_all(self) -> ExportResult:
        """Prune the wiring and write every artifact."""
        result = ExportResult()
        out_dir = Path(self.options.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        if self.options.clean_previous:
            result.removed = self._remove_previous(out_dir)

        self.context.wiring.clean()

        prefix = self.options.file_prefix
        for module_name, entries in self.context.boosts.items():
            path = out_dir / f"{prefix}{module_name}_Boosts.txt"
            self._write_entries(path, entries)
            result.written.append(path)

        for module_name, entries in self.context.spells.items():
            path = out_dir / f"{prefix}{module_name}_Shouts.txt"
            self._write_entries(path, entries)
            result.written.append(path)

        wiring_path = out_dir / f"{prefix}Wiring.json"
        with open(wiring_path, "w", encoding="utf-8") as f:
            json.dump(self.context.wiring.to_dict(), f, indent=self.options.json_indent)
        result.written.append(wiring_path)

        logger.info("Wrote %d files to %s", len(result.written), out_dir)
        return result

    def _remove_previous(self, out_dir: Path) -> List[Path]:
        removed = []
        for path in sorted(out_dir.glob(f"{self.options.file_prefix}*")):
            if path.is_file():
                path.unlink()
                removed.append(path)
        if removed:
            logger.debug("Removed %d previously generated files", len(removed))
        return removed

    @staticmethod
    def _write_entries(path: Path, entries: Sequence[StatEntry]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            for entry in entries:
                f.write(entry.to_stat_text())
                f.write("\n")
