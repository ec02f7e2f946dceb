import os
from pathlib import Path
import pytest

from seqdb.models.records import REQUIRED_EXTENSIONS, MoleculeType


class FakeRunner:
    """
    Stands in for SubprocessRunner.  `responses` maps an executable name to a
    list of results handed out in order: a (stdout, stderr) pair, or an
    exception to raise.  Unscripted calls succeed with empty output.  When
    stdout is redirected to a file the scripted stdout is written there.
    """

    def __init__(self, responses=None):
        self.responses = {k: list(v) for k, v in (responses or {}).items()}
        self.calls = []

    def run(self, cmd, *, path=None, stdout=None):
        cmd = [str(c) for c in cmd]
        self.calls.append((cmd, path, stdout))
        queue = self.responses.get(os.path.basename(cmd[0]), [])
        result = queue.pop(0) if queue else ("", "")
        if isinstance(result, Exception):
            raise result
        out, err = result
        if stdout is not None:
            with open(stdout, "wt") as f:
                f.write(out)
            out = ""
        return out, err

    def commands(self, exe):
        return [c for c, _, _ in self.calls if os.path.basename(c[0]) == exe]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# Fixture to create a database directory for a test.  E.g.
#
#   def test_something(db_dir, write_fasta):
#       path = write_fasta("x/seqs.fa", {"s1": NUCL_SEQ})
#
@pytest.fixture
def db_dir(tmp_path) -> Path:
    d = tmp_path / "db"
    d.mkdir()
    return d


@pytest.fixture
def write_fasta(db_dir):
    def _write(name, records):
        path = db_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wt") as f:
            for rid, seq in records.items():
                f.write(f">{rid} some description\n")
                for i in range(0, len(seq), 60):
                    f.write(seq[i:i + 60] + "\n")
        return str(path)
    return _write


@pytest.fixture
def touch_db():
    """Create the database files `<path>.<ext>` for the given extensions."""
    def _touch(path, exts=None, molecule_type=MoleculeType.NUCLEOTIDE):
        if exts is None:
            exts = REQUIRED_EXTENSIONS[molecule_type]
        for ext in exts:
            with open(f"{path}.{ext}", "wb") as f:
                f.write(b"\x00\x01")
    return _touch
