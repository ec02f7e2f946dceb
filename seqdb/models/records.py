# seqdb/models/records.py
from __future__ import annotations

import glob
import os
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Dict, FrozenSet, Optional, Tuple

__all__ = [
    "MoleculeType",
    "CandidateFile",
    "IndexedRecord",
    "REQUIRED_EXTENSIONS",
    "on_disk_extensions",
]


class MoleculeType(str, Enum):
    NUCLEOTIDE = "nucleotide"
    PROTEIN = "protein"

    @property
    def dbtype(self) -> str:
        """Value for `makeblastdb -dbtype` ('nucl' or 'prot')."""
        return self.value[:4]

    @classmethod
    def parse(cls, text: str) -> "MoleculeType":
        return cls(text.strip().lower())


# Databases built with -parse_seqids (BLAST v5) consist of at least these
# nine files.  -hash_index adds nhd/nhi (phd/phi) and multipart databases
# add an nal/pal alias file; neither is required for completeness.
REQUIRED_EXTENSIONS: Dict[MoleculeType, FrozenSet[str]] = {
    MoleculeType.NUCLEOTIDE: frozenset(
        ("ndb", "nhr", "nin", "nog", "nos", "not", "nsq", "ntf", "nto")),
    MoleculeType.PROTEIN: frozenset(
        ("pdb", "phr", "pin", "pog", "pos", "pot", "psq", "ptf", "pto")),
}


def on_disk_extensions(path: str) -> FrozenSet[str]:
    """Suffixes of all files named `<path>.*` (last dot component only)."""
    return frozenset(p.rsplit(".", 1)[-1] for p in glob.glob(glob.escape(path) + ".*"))


@dataclass(frozen=True)
class CandidateFile:
    """
    A FASTA file that needs (or may need) a BLAST database.

      path          : absolute path to the FASTA file (identity)
      title         : display title passed to makeblastdb -title
      molecule_type : MoleculeType, or None when it could not be determined
    """
    path: str
    title: str
    molecule_type: Optional[MoleculeType]

    @cached_property
    def extensions(self) -> FrozenSet[str]:
        return on_disk_extensions(self.path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def astuple(self) -> Tuple[str, str, Optional[MoleculeType]]:
        return (self.path, self.title, self.molecule_type)


@dataclass(frozen=True)
class IndexedRecord(CandidateFile):
    """A database reported by `blastdbcmd -list` as already formatted."""

    def is_complete(self, required: Dict[MoleculeType, FrozenSet[str]] = REQUIRED_EXTENSIONS) -> bool:
        need = required[self.molecule_type]
        return (self.extensions & need) == need
