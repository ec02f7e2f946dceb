# seqdb/scan.py
"""
Decide which FASTA files in a database directory need makeblastdb.

A file needs formatting when blastdbcmd does not report it as a database
(unformatted), and reformatting when it is reported but some of the files a
complete database consists of are missing (stale).

    scanner = DatabaseScanner(Config("db/"), SubprocessRunner(), ConsolePrompter())
    if scanner.scan():
        report = scanner.run()
"""
from __future__ import annotations

import os
from typing import Callable, FrozenSet, Iterator, List, Mapping, Optional, Sequence, TextIO

from seqdb.config import Config
from seqdb.driver import BuildDriver, RunReport
from seqdb.models.records import REQUIRED_EXTENSIONS, CandidateFile, IndexedRecord, MoleculeType
from seqdb.prompts import Prompter
from seqdb.runners.blastdbcmd import list_formatted
from seqdb.runners.commands import CommandRunner
from seqdb.sequences.sniff import SAMPLE_SIZE, guess_sequence_type, looks_like_fasta
from seqdb.utils.titles import title_from_filename

__all__ = [
    "iter_files",
    "find_unformatted",
    "find_stale",
    "reconcile",
    "DatabaseScanner",
]


def iter_files(root: str) -> Iterator[str]:
    """Regular files under `root`, depth-first, in sorted order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                yield path


def find_unformatted(records: Sequence[IndexedRecord], database_dir: str, *,
                     sample_size: int = SAMPLE_SIZE,
                     on_ambiguous: Optional[Callable[[str], None]] = None) -> List[CandidateFile]:
    """
    FASTA files under `database_dir` that blastdbcmd does not know about.

    Files whose sequence type cannot be told are left out (and passed to
    `on_ambiguous`, if given).
    """
    formatted = {r.path for r in records}
    found: List[CandidateFile] = []
    for path in iter_files(database_dir):
        if not looks_like_fasta(path):
            continue
        if path in formatted:
            continue
        molecule_type = guess_sequence_type(path, sample_size)
        if molecule_type is None:
            if on_ambiguous is not None:
                on_ambiguous(path)
            continue
        found.append(CandidateFile(path, title_from_filename(os.path.basename(path)), molecule_type))
    return found


def find_stale(records: Sequence[IndexedRecord],
               required_extensions: Mapping[MoleculeType, FrozenSet[str]] = REQUIRED_EXTENSIONS) -> List[IndexedRecord]:
    """Formatted databases missing one or more of the required files."""
    return [r for r in records if not r.is_complete(required_extensions)]


def reconcile(records: Sequence[IndexedRecord], database_dir: str, *,
              required_extensions: Mapping[MoleculeType, FrozenSet[str]] = REQUIRED_EXTENSIONS,
              sample_size: int = SAMPLE_SIZE,
              on_ambiguous: Optional[Callable[[str], None]] = None) -> List[CandidateFile]:
    """
    Worklist of files to (re)format: unformatted files in discovery order,
    then stale databases in listing order.  Empty when everything is
    formatted.
    """
    worklist: List[CandidateFile] = find_unformatted(
        records, database_dir, sample_size=sample_size, on_ambiguous=on_ambiguous)
    worklist.extend(find_stale(records, required_extensions))
    return worklist


class DatabaseScanner:
    """
    Smart makeblastdb wrapper: scan() works out which files need formatting,
    run() formats them one by one with operator confirmation.
    """

    def __init__(self, config: Config, runner: CommandRunner, prompter: Prompter,
                 out: Optional[TextIO] = None,
                 on_ambiguous: Optional[Callable[[str], None]] = None):
        self.config = config
        self.runner = runner
        self.prompter = prompter
        self.out = out
        self.on_ambiguous = on_ambiguous
        self.formatted: List[IndexedRecord] = []
        self.worklist: List[CandidateFile] = []

    def list_formatted(self) -> List[IndexedRecord]:
        return list_formatted(self.config.database_dir, self.runner,
                              path=self.config.bin, exe=self.config.blastdbcmd)

    def scan(self) -> bool:
        """Returns True if there are files to (re)format; raises ListingUnavailable."""
        self.formatted = self.list_formatted()
        self.worklist = reconcile(
            self.formatted,
            self.config.database_dir,
            required_extensions=self.config.required_extensions,
            sample_size=self.config.sample_size,
            on_ambiguous=self.on_ambiguous,
        )
        return bool(self.worklist)

    def is_stale(self, entry: CandidateFile) -> bool:
        return isinstance(entry, IndexedRecord)

    def run(self) -> RunReport:
        """(Re)format everything found by the last scan(); does nothing before it."""
        if not self.worklist:
            return RunReport()
        driver = BuildDriver(self.config, self.runner, self.prompter, out=self.out)
        return driver.run(self.worklist)
