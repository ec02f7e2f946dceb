# seqdb/driver.py
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, TextIO

from seqdb.config import Config
from seqdb.models.records import CandidateFile
from seqdb.prompts import Prompter
from seqdb.runners.blastdbcmd import extract_fasta
from seqdb.runners.commands import CommandFailed, CommandRunner
from seqdb.runners.makeblastdb import MakeblastdbOptions, run_makeblastdb

__all__ = ["BuildState", "BuildOutcome", "RunReport", "BuildDriver"]


class BuildState(Enum):
    """
    Steps an entry goes through in BuildDriver.build().  Only SKIPPED, DONE
    and FATAL are ever seen in a RunReport; the others are passed through
    while the entry is being worked on.
    """
    PENDING_CONFIRM = "pending_confirm"
    SKIPPED = "skipped"
    PENDING_TITLE = "pending_title"
    PENDING_TAXID = "pending_taxid"
    BUILDING = "building"
    DONE = "done"
    FATAL = "fatal"


@dataclass
class BuildOutcome:
    entry: CandidateFile
    state: BuildState = BuildState.PENDING_CONFIRM
    title: Optional[str] = None
    taxid: int = 0
    error: Optional[CommandFailed] = None


@dataclass
class RunReport:
    outcomes: List[BuildOutcome] = field(default_factory=list)

    @property
    def failed(self) -> Optional[BuildOutcome]:
        for o in self.outcomes:
            if o.state is BuildState.FATAL:
                return o
        return None

    @property
    def built(self) -> List[BuildOutcome]:
        return [o for o in self.outcomes if o.state is BuildState.DONE]

    @property
    def skipped(self) -> List[BuildOutcome]:
        return [o for o in self.outcomes if o.state is BuildState.SKIPPED]

    @property
    def ok(self) -> bool:
        return self.failed is None


class BuildDriver:
    """
    Confirm and build one worklist entry at a time.

    Each entry goes through confirm -> title -> taxid -> build.  The first
    entry whose extraction or makeblastdb run fails ends the run: later
    entries are not looked at, and the returned RunReport carries the failure.
    """

    def __init__(self, config: Config, runner: CommandRunner, prompter: Prompter,
                 out: Optional[TextIO] = None):
        self.config = config
        self.runner = runner
        self.prompter = prompter
        self.out = out

    def _print(self, *args) -> None:
        print(*args, file=self.out or sys.stdout)

    def run(self, worklist: Iterable[CandidateFile]) -> RunReport:
        report = RunReport()
        for entry in worklist:
            outcome = self.build(entry)
            report.outcomes.append(outcome)
            if outcome.state is BuildState.FATAL:
                break
        return report

    def build(self, entry: CandidateFile) -> BuildOutcome:
        outcome = BuildOutcome(entry)
        if not self.confirm(entry):
            outcome.state = BuildState.SKIPPED
            return outcome

        outcome.state = BuildState.PENDING_TITLE
        outcome.title = self.confirm_title(entry.title)

        outcome.state = BuildState.PENDING_TAXID
        outcome.taxid = self.fetch_taxid()

        outcome.state = BuildState.BUILDING
        if not os.path.exists(entry.path):
            outcome.error = self.extract(entry.path)
            if outcome.error is not None:
                outcome.state = BuildState.FATAL
                return outcome

        outcome.error = self.make_blast_database(entry, outcome.title, outcome.taxid)
        outcome.state = BuildState.FATAL if outcome.error else BuildState.DONE
        return outcome

    # ---------------------------
    # Prompts
    # ---------------------------

    def confirm(self, entry: CandidateFile) -> bool:
        """Show path and sequence type; anything but an answer with 'n' in it is a yes."""
        self._print()
        self._print()
        self._print(f"FASTA file to format/reformat: {entry.path}")
        self._print(f"FASTA type: {entry.molecule_type.value}")
        response = self.prompter.ask("Proceed? [y/n] (Default: y): ")
        return "n" not in response.lower()

    def confirm_title(self, default: str) -> str:
        from_user = self.prompter.ask(f"Enter a database title or will use '{default}': ")
        return from_user or default

    def fetch_taxid(self) -> int:
        """
        Ask for a taxid until the answer is empty or an integer.

        0 (the answer to an empty response) is the same as not setting a taxid.
        """
        while True:
            response = self.prompter.ask("Enter taxid (optional): ")
            if not response:
                return 0
            try:
                return int(response)
            except ValueError:
                self._print("taxid should be a number")

    # ---------------------------
    # External commands
    # ---------------------------

    def extract(self, db: str) -> Optional[CommandFailed]:
        """Recreate a missing FASTA file from its existing (partial) database."""
        self._print()
        self._print("Extracting sequences ...")
        try:
            extract_fasta(db, self.runner, path=self.config.bin, exe=self.config.blastdbcmd)
        except CommandFailed as e:
            self._report_failure("Could not extract sequences from", db, e)
            return e
        return None

    def make_blast_database(self, entry: CandidateFile, title: str, taxid: int) -> Optional[CommandFailed]:
        opts = MakeblastdbOptions(
            fasta=entry.path,
            molecule_type=entry.molecule_type,
            title=title,
            taxid=taxid,
            exe=self.config.makeblastdb,
        )
        try:
            out, err = run_makeblastdb(opts, self.runner, path=self.config.bin)
        except CommandFailed as e:
            self._report_failure("Could not create BLAST database for", entry.path, e)
            return e
        self._print(out.strip())
        self._print(err.strip())
        return None

    def _report_failure(self, what: str, path: str, e: CommandFailed) -> None:
        self._print(
            f"{what}: {path}\n"
            f"Tried: {e.command_line}\n"
            f"stdout: {e.stdout}\n"
            f"stderr: {e.stderr}"
        )
