# seqdb/sequences/sniff.py
from __future__ import annotations

import re
from typing import List, Optional

from seqdb.models.records import MoleculeType

__all__ = [
    "SAMPLE_SIZE",
    "looks_like_fasta",
    "sample_sequences",
    "guess_type",
    "guess_sequence_type",
]

# Only this many bytes of a file are read when guessing its sequence type.
SAMPLE_SIZE = 1_048_576

_DEFLINE_RE = re.compile(r"^>.+$", re.MULTILINE)
_NOT_RESIDUE_RE = re.compile(r"[^A-Z]|[NX]", re.IGNORECASE)
_NA_RE = re.compile(r"[ACGTU]", re.IGNORECASE)

# guess_type() settings
_MIN_RESIDUES = 10
_GUESS_LENGTH = 10_000
_NA_THRESHOLD = 0.9


def looks_like_fasta(path: str) -> bool:
    """True if the first byte of the file is '>'."""
    with open(path, "rb") as f:
        return f.read(1) == b">"


def sample_sequences(path: str, size: int = SAMPLE_SIZE) -> List[str]:
    """
    Read the first `size` bytes of the file and split the text on FASTA
    definition lines.

    Returns the sequence bodies found in the portion read (possibly truncated
    for the last one).  For a file that is not FASTA the whole portion read is
    returned as a single fragment.  Blank fragments are dropped, so a file
    made only of definition lines yields an empty list.
    """
    with open(path, "rb") as f:
        text = f.read(size).decode("utf-8", errors="replace")
    return [frag for frag in _DEFLINE_RE.split(text) if frag.strip()]


def guess_type(seq: str) -> Optional[MoleculeType]:
    """
    Classify a single sequence body by residue composition.

    Non-letters and the ambiguity codes N and X are ignored.  Returns None if
    fewer than 10 residues remain; otherwise nucleotide when more than 90% of
    the first 10,000 residues are A, C, G, T or U, protein when not.
    """
    cleaned = _NOT_RESIDUE_RE.sub("", seq)
    if len(cleaned) < _MIN_RESIDUES:
        return None
    window = cleaned[:_GUESS_LENGTH]
    bases = len(_NA_RE.findall(window))
    if bases / len(window) > _NA_THRESHOLD:
        return MoleculeType.NUCLEOTIDE
    return MoleculeType.PROTEIN


def guess_sequence_type(path: str, size: int = SAMPLE_SIZE) -> Optional[MoleculeType]:
    """
    Guess whether a FASTA file holds nucleotide or protein sequences.

    Every sampled sequence is classified on its own.  The file's type is
    returned only when all classifiable sequences agree; mixed files and files
    with nothing classifiable give None.
    """
    types = {guess_type(seq) for seq in sample_sequences(path, size)}
    types.discard(None)
    if len(types) == 1:
        return types.pop()
    return None
