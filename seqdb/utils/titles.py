# seqdb/utils/titles.py
from __future__ import annotations

import re

__all__ = ["title_from_filename"]

# A trailing '.fasta'-like suffix.  It must start with a letter so that the
# tail of a version number ('1.4') is never mistaken for an extension, and a
# leading dot ('.hidden') is part of the name.
_EXT_RE = re.compile(r"(?<=.)\.[A-Za-z]\w*$")
# '.' between two non-digits, or between a version number and a word
_WORD_DOT_RE = re.compile(r"(?<=\D)\.(?=\D)|(?<=\d)\.(?=[A-Za-z])")
_VERSION_RE = re.compile(r"\W*(\d+(?:[.-]\d+)+)\W*")


def title_from_filename(name: str) -> str:
    """
    Suggest a database title from a FASTA file name, for readability in the
    web interface.

      Cobs1.4.proteins.fasta          -> Cobs 1.4 proteins
      S_invicta.xx.2.5.small.nucl.fa  -> S invicta xx 2.5 small nucl

    Applying it to its own output returns the output unchanged.
    """
    title = name.replace('"', "'")
    title = _EXT_RE.sub("", title)
    title = title.replace("_", " ")
    title = _WORD_DOT_RE.sub(" ", title)
    # keep version numbers intact but set them apart
    title = _VERSION_RE.sub(r" \1 ", title)
    return title.strip()
