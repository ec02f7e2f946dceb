# seqdb/runners/commands.py
from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from typing import List, Optional, Protocol, Sequence, Tuple

__all__ = ["CommandFailed", "CommandRunner", "SubprocessRunner", "build_env"]


class CommandFailed(RuntimeError):
    """
    An external command could not be run or exited non-zero.

    `returncode` is None when the executable could not be started at all.
    """

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], stdout: str = "", stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if returncode is None:
            what = "could not be started"
        else:
            what = f"exited with code {returncode}"
        super().__init__(f"{self.cmd[0]} {what}.\nCommand: {self.command_line}")

    @property
    def command_line(self) -> str:
        return shlex.join(self.cmd)


class CommandRunner(Protocol):
    def run(self, cmd: Sequence[str], *, path: Optional[str] = None,
            stdout: Optional[str] = None) -> Tuple[str, str]: ...


def build_env(path: Optional[str] = None) -> dict:
    """Copy of os.environ with `path` (if given) placed first on PATH."""
    env = os.environ.copy()
    if path:
        env["PATH"] = os.pathsep.join(p for p in (path, env.get("PATH")) if p)
    return env


class SubprocessRunner:
    """
    Run commands with subprocess and capture their output.

    run() returns (stdout, stderr).  When `stdout` names a file, the command's
    standard output is written there instead and the returned stdout is '';
    the file only appears (or is replaced) once the command has succeeded.
    Raises CommandFailed on a non-zero exit or if the executable is missing.
    """

    def run(self, cmd: Sequence[str], *, path: Optional[str] = None,
            stdout: Optional[str] = None) -> Tuple[str, str]:
        cmd = [str(c) for c in cmd]
        env = build_env(path)
        if stdout is not None:
            return self._run_to_file(cmd, env, stdout)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, env=env)
        except OSError as e:
            # FileNotFoundError / PermissionError for the executable itself
            raise CommandFailed(cmd, None, "", str(e)) from e
        if proc.returncode != 0:
            raise CommandFailed(cmd, proc.returncode, proc.stdout, proc.stderr)
        return proc.stdout, proc.stderr

    def _run_to_file(self, cmd: List[str], env: dict, target: str) -> Tuple[str, str]:
        # Output goes to a temporary file next to `target` and is moved into
        # place only on success, so a failed run never leaves a partial file.
        try:
            fd, tmp = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(target)),
                                       prefix=os.path.basename(target) + ".", suffix=".part")
        except OSError as e:
            raise CommandFailed(cmd, None, "", str(e)) from e
        try:
            with os.fdopen(fd, "wt", encoding="utf-8") as sink:
                try:
                    proc = subprocess.run(cmd, stdout=sink, stderr=subprocess.PIPE,
                                          text=True, env=env)
                except OSError as e:
                    raise CommandFailed(cmd, None, "", str(e)) from e
            if proc.returncode != 0:
                raise CommandFailed(cmd, proc.returncode, "", proc.stderr)
            os.replace(tmp, target)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)
        return "", proc.stderr
