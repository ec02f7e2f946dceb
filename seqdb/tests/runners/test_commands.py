import os
import sys
import pytest
from seqdb.runners.commands import CommandFailed, SubprocessRunner, build_env

PY = sys.executable

def test_run_captures_both_streams():
    out, err = SubprocessRunner().run(
        [PY, "-c", "import sys; print('hello'); sys.stderr.write('note')"])
    assert out.strip() == "hello"
    assert err == "note"

def test_run_nonzero_exit_raises():
    with pytest.raises(CommandFailed) as ei:
        SubprocessRunner().run(
            [PY, "-c", "import sys; print('partial'); sys.stderr.write('boom'); sys.exit(3)"])
    e = ei.value
    assert e.returncode == 3
    assert e.stdout.strip() == "partial"
    assert e.stderr == "boom"
    assert e.cmd[0] == PY
    assert "exited with code 3" in str(e)
    assert e.command_line in str(e)

def test_run_missing_executable_raises():
    with pytest.raises(CommandFailed) as ei:
        SubprocessRunner().run(["no-such-blast-tool-xyz", "-version"])
    assert ei.value.returncode is None
    assert "could not be started" in str(ei.value)

def test_run_redirects_stdout_to_file(tmp_path):
    target = tmp_path / "out.fa"
    out, err = SubprocessRunner().run([PY, "-c", "print('>s1'); print('ACGT')"], stdout=str(target))
    assert out == ""
    assert target.read_text().split() == [">s1", "ACGT"]

def test_build_env_prepends_search_path(tmp_path):
    env = build_env(str(tmp_path))
    assert env["PATH"].split(os.pathsep)[0] == str(tmp_path)
    assert build_env(None) == dict(os.environ)

def test_command_line_is_shell_quoted():
    e = CommandFailed(["makeblastdb", "-title", "my db"], 1)
    assert e.command_line == "makeblastdb -title 'my db'"

def test_failed_redirect_leaves_no_file(tmp_path):
    target = tmp_path / "genome.fa"
    with pytest.raises(CommandFailed):
        SubprocessRunner().run(
            [PY, "-c", "import sys; print('>s1'); print('ACGT'); sys.exit(2)"], stdout=str(target))
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []

def test_missing_executable_redirect_leaves_no_file(tmp_path):
    target = tmp_path / "genome.fa"
    with pytest.raises(CommandFailed) as ei:
        SubprocessRunner().run(["no-such-blast-tool-xyz", "-entry", "all"], stdout=str(target))
    assert ei.value.returncode is None
    assert list(tmp_path.iterdir()) == []

def test_failed_redirect_keeps_existing_file(tmp_path):
    target = tmp_path / "genome.fa"
    target.write_text(">old\nACGT\n")
    with pytest.raises(CommandFailed):
        SubprocessRunner().run([PY, "-c", "import sys; print('>new'); sys.exit(1)"], stdout=str(target))
    assert target.read_text() == ">old\nACGT\n"
