# seqdb/runners/makeblastdb.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from seqdb.models.records import MoleculeType
from seqdb.runners.commands import CommandRunner

__all__ = ["MakeblastdbOptions", "run_makeblastdb"]


@dataclass(slots=True)
class MakeblastdbOptions:
    # Required
    fasta: str
    molecule_type: MoleculeType
    title: str

    # 0 means "no taxid": the option is left out altogether
    taxid: int = 0

    # SequenceServer needs both of these
    parse_seqids: bool = True
    hash_index: bool = True

    # Anything else to pass straight through
    extra_args: Sequence[str] = field(default_factory=tuple)

    # Executable name (override if needed)
    exe: str = "makeblastdb"

    def build_cmd(self) -> List[str]:
        cmd: List[str] = [self.exe]

        def _add(flag: str, val: Optional[object] = None, *, boolflag: bool = False):
            if boolflag:
                if val:
                    cmd.append(flag)
            elif val is not None:
                cmd.extend([flag, str(val)])

        _add("-parse_seqids", self.parse_seqids, boolflag=True)
        _add("-hash_index", self.hash_index, boolflag=True)
        _add("-in", self.fasta)
        _add("-dbtype", self.molecule_type.dbtype)
        _add("-title", self.title)
        _add("-taxid", self.taxid or None)

        if self.extra_args:
            cmd.extend(list(self.extra_args))

        return cmd


def run_makeblastdb(opts: MakeblastdbOptions, runner: CommandRunner, *,
                    path: Optional[str] = None) -> Tuple[str, str]:
    """Build the database; returns (stdout, stderr), raises CommandFailed."""
    return runner.run(opts.build_cmd(), path=path)
