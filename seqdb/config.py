# seqdb/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional

from seqdb.models.records import REQUIRED_EXTENSIONS, MoleculeType
from seqdb.sequences.sniff import SAMPLE_SIZE

__all__ = ["Config", "check_extension_policy"]


def check_extension_policy(policy: Mapping[MoleculeType, FrozenSet[str]]) -> Dict[MoleculeType, FrozenSet[str]]:
    """
    Validate a required-extensions policy: exactly one non-empty set of plain
    suffixes (no dots, no blanks) for each molecule type.
    """
    missing = [t.value for t in MoleculeType if t not in policy]
    if missing:
        raise ValueError(f"no required extensions for: {', '.join(missing)}")
    out: Dict[MoleculeType, FrozenSet[str]] = {}
    for t in MoleculeType:
        exts = frozenset(policy[t])
        if not exts:
            raise ValueError(f"empty required extension set for {t.value}")
        bad = sorted(e for e in exts if not e or "." in e or e != e.strip())
        if bad:
            raise ValueError(f"invalid extensions for {t.value}: {bad!r}")
        out[t] = exts
    return out


@dataclass
class Config:
    # Required
    database_dir: str

    # Directory holding the BLAST+ binaries (prepended to PATH when running them)
    bin: Optional[str] = None

    # What a complete database looks like on disk
    required_extensions: Mapping[MoleculeType, FrozenSet[str]] = field(
        default_factory=lambda: dict(REQUIRED_EXTENSIONS))

    # Bytes read from each FASTA file to guess its sequence type
    sample_size: int = SAMPLE_SIZE

    # Executable names (override if needed)
    blastdbcmd: str = "blastdbcmd"
    makeblastdb: str = "makeblastdb"

    def __post_init__(self):
        self.database_dir = os.path.abspath(os.path.expanduser(self.database_dir))
        if not os.path.isdir(self.database_dir):
            raise FileNotFoundError(f"Database directory not found: {self.database_dir!r}")
        if self.bin:
            self.bin = os.path.abspath(os.path.expanduser(self.bin))
            if not os.path.isdir(self.bin):
                raise FileNotFoundError(f"BLAST+ bin directory not found: {self.bin!r}")
        if self.sample_size <= 0:
            raise ValueError("sample_size must be positive")
        self.required_extensions = check_extension_policy(self.required_extensions)
