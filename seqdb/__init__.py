# seqdb/__init__.py
from .models.records import MoleculeType, CandidateFile, IndexedRecord, REQUIRED_EXTENSIONS
from .config import Config

# Convenience re-exports for direct functional use (optional)
from .sequences.sniff import looks_like_fasta, guess_sequence_type
from .utils.titles import title_from_filename
from .runners.commands import CommandFailed, SubprocessRunner
from .runners.blastdbcmd import ListingUnavailable, list_formatted
from .scan import DatabaseScanner, reconcile
from .driver import BuildDriver, RunReport
