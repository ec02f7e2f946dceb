# seqdb/runners/blastdbcmd.py
from __future__ import annotations

import re
from typing import Callable, List, Optional

from seqdb.models.records import IndexedRecord, MoleculeType
from seqdb.runners.commands import CommandFailed, CommandRunner

__all__ = [
    "ListingUnavailable",
    "multipart_database_name",
    "list_command",
    "list_formatted",
    "parse_listing",
    "extract_command",
    "extract_fasta",
]

BLASTDBCMD = "blastdbcmd"

# path, title, molecule type
LIST_OUTFMT = "%f\t%t\t%p"

# Shards of a multipart database are named <name>.00, <name>.01, ...
_MULTIPART_RE = re.compile(r".+/\S+\.\d{2,3}$")


class ListingUnavailable(RuntimeError):
    """`blastdbcmd -list` could not be run, failed, or produced unusable output."""


def multipart_database_name(db_name: str) -> bool:
    """True if the name looks like one shard of a multipart database."""
    return _MULTIPART_RE.match(db_name) is not None


def list_command(database_dir: str, exe: str = BLASTDBCMD) -> List[str]:
    return [exe, "-recursive", "-list", database_dir, "-list_outfmt", LIST_OUTFMT]


def parse_listing(text: str,
                  is_multipart: Callable[[str], bool] = multipart_database_name) -> List[IndexedRecord]:
    """
    Parse `blastdbcmd -list` output (path<TAB>title<TAB>type per line).

    Multipart databases are left out: their files do not map one to one onto
    the required extensions of a single database.
    """
    records: List[IndexedRecord] = []
    for ln in text.splitlines():
        if not ln.strip():
            continue
        parts = ln.split("\t")
        if len(parts) < 3:
            raise ListingUnavailable(f"unexpected blastdbcmd output line: {ln!r}")
        path, title, type_ = parts[0], parts[1], parts[2]
        if is_multipart(path):
            continue
        try:
            molecule_type = MoleculeType.parse(type_)
        except ValueError:
            raise ListingUnavailable(f"unknown molecule type {type_.strip()!r} for {path}") from None
        records.append(IndexedRecord(path=path, title=title, molecule_type=molecule_type))
    return records


def list_formatted(database_dir: str, runner: CommandRunner, *,
                   path: Optional[str] = None,
                   exe: str = BLASTDBCMD,
                   is_multipart: Callable[[str], bool] = multipart_database_name) -> List[IndexedRecord]:
    """
    Ask blastdbcmd which FASTA files under `database_dir` are already
    formatted.  `path` is the directory holding the BLAST+ binaries, if they
    are not on PATH.
    """
    cmd = list_command(database_dir, exe)
    try:
        out, _ = runner.run(cmd, path=path)
    except CommandFailed as e:
        raise ListingUnavailable(
            f"Could not list BLAST databases in {database_dir}.\n"
            f"Tried: {e.command_line}\n"
            f"stdout: {e.stdout}\n"
            f"stderr: {e.stderr}"
        ) from e
    return parse_listing(out, is_multipart)


def extract_command(db: str, exe: str = BLASTDBCMD) -> List[str]:
    return [exe, "-entry", "all", "-db", db]


def extract_fasta(db: str, runner: CommandRunner, *,
                  path: Optional[str] = None, exe: str = BLASTDBCMD) -> List[str]:
    """
    Recreate the FASTA file `db` from the BLAST database of the same name.

    Returns the command that was run; raises CommandFailed.
    """
    cmd = extract_command(db, exe)
    runner.run(cmd, path=path, stdout=db)
    return cmd
