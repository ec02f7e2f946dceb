#!/usr/bin/env python3
"""
Format (or re-format) every FASTA file in a database directory with
makeblastdb, asking for confirmation, title and taxid for each one.

Example:
  ./make_blast_databases.py \
      --database-dir ~/.sequenceserver/db \
      --bin ~/ncbi-blast-2.15.0+/bin

  # see what would be done
  ./make_blast_databases.py -d db --dry-run

  # list what is formatted already
  ./make_blast_databases.py -d db --list
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from seqdb.config import Config
from seqdb.prompts import ConsolePrompter, DefaultsPrompter
from seqdb.runners.blastdbcmd import ListingUnavailable
from seqdb.runners.commands import CommandRunner, SubprocessRunner
from seqdb.scan import DatabaseScanner


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Find FASTA files that are not yet (or not completely) formatted as BLAST databases and run makeblastdb on them."
    )
    p.add_argument("-d", "--database-dir", required=True, help="Directory tree of FASTA files / BLAST databases.")
    p.add_argument("-b", "--bin", default=None, help="Directory with the BLAST+ binaries, if not on PATH.")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--list", action="store_true", help="Print formatted databases (path, title, type) and exit.")
    mode.add_argument("--dry-run", action="store_true", help="Print the files that would be (re)formatted and exit.")
    p.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not prompt: format everything with the suggested title and no taxid.",
    )
    return p.parse_args(argv)


def _warn_ambiguous(path: str) -> None:
    print(f"[warn] Could not determine sequence type of {path}; skipping.", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None, runner: Optional[CommandRunner] = None) -> int:
    args = parse_args(argv)

    try:
        config = Config(database_dir=args.database_dir, bin=args.bin)
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    prompter = DefaultsPrompter() if args.non_interactive else ConsolePrompter()
    scanner = DatabaseScanner(config, runner or SubprocessRunner(), prompter,
                              on_ambiguous=_warn_ambiguous)

    try:
        if args.list:
            for r in scanner.list_formatted():
                print(f"{r.path}\t{r.title}\t{r.molecule_type.value}")
            return 0
        has_work = scanner.scan()
    except ListingUnavailable as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if not has_work:
        print(f"All FASTA files in {config.database_dir} are formatted.")
        return 0

    if args.dry_run:
        for entry in scanner.worklist:
            tag = "stale" if scanner.is_stale(entry) else "new"
            print(f"{tag}\t{entry.path}\t{entry.title}\t{entry.molecule_type.value}")
        return 0

    report = scanner.run()
    if not report.ok:
        return 1
    print(f"\n[done] {len(report.built)} database(s) created, {len(report.skipped)} skipped.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
