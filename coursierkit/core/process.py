"""
External process execution for coursierkit.

Every program coursierkit starts (``cs`` and the applications it installs)
goes through a :class:`ProcessRunner`. The runner owns the search path used
to find those programs, so the installer registers its binary directory on
the runner it was given instead of mutating ``os.environ``, and the
launcher and remover reuse the same runner afterwards.

Usage:
    from coursierkit.core.process import ProcessRunner

    runner = ProcessRunner()
    runner.add_to_search_path(Path.home() / "bin")

    version = runner.execute("cs", "version")
    code = runner.run("cs", ["launch", "scalafmt"], on_stdout=print)
"""

import io
import logging
import os
import shutil
import subprocess
import threading
from pathlib import Path
from typing import IO, Callable, Dict, List, Optional, Sequence, Union

from coursierkit.core.exceptions import ProcessExecutionError

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]

# Child output is decoded as UTF-8; undecodable bytes become U+FFFD
OUTPUT_ENCODING = "utf-8"


class _LinePump:
    """
    Reads a child's pipe to EOF, handing each line to a callback.

    Lines keep their original line endings. The pipe is always drained,
    even after the callback raised; the first such error is kept in
    :attr:`error` for the caller to re-raise.
    """

    def __init__(self, pipe: IO[bytes], callback: Optional[LineCallback]):
        self.stream = io.TextIOWrapper(
            pipe, encoding=OUTPUT_ENCODING, errors="replace", newline=""
        )
        self.callback = callback
        self.error: Optional[BaseException] = None

    def __call__(self) -> None:
        try:
            for line in iter(self.stream.readline, ""):
                if self.callback is None or self.error is not None:
                    continue
                try:
                    self.callback(line)
                except Exception as e:
                    self.error = e
        finally:
            self.stream.close()


def _strip_line_ending(callback: Optional[LineCallback]) -> Optional[LineCallback]:
    if callback is None:
        return None
    return lambda line: callback(line.rstrip("\r\n"))


class ProcessRunner:
    """
    Runs external programs with an explicit search path.

    Directories registered with :meth:`add_to_search_path` are prepended to
    the ``PATH`` of the base environment for every child process.

    Attributes:
        search_path: Directories searched before the inherited ``PATH``
    """

    def __init__(
        self,
        search_path: Optional[Sequence[Union[str, Path]]] = None,
        base_env: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize process runner.

        Args:
            search_path: Initial directories to search for programs
            base_env: Environment for child processes (default: os.environ)
        """
        self.search_path: List[Path] = [Path(p) for p in (search_path or [])]
        self.base_env = dict(base_env if base_env is not None else os.environ)

    def add_to_search_path(self, directory: Union[str, Path]) -> None:
        """Register ``directory`` ahead of every other search path entry."""
        directory = Path(directory)
        if directory in self.search_path:
            self.search_path.remove(directory)
        self.search_path.insert(0, directory)
        logger.debug(f"Added {directory} to search path")

    def environment(self) -> Dict[str, str]:
        """Build the environment passed to child processes."""
        env = dict(self.base_env)
        entries = [str(p) for p in self.search_path]
        inherited = env.get("PATH")
        if inherited:
            entries.append(inherited)
        env["PATH"] = os.pathsep.join(entries)
        return env

    def which(self, tool: str) -> Optional[Path]:
        """Resolve ``tool`` against the runner's search path."""
        found = shutil.which(tool, path=self.environment()["PATH"])
        return Path(found) if found else None

    def run(
        self,
        tool: str,
        args: Sequence[str] = (),
        on_stdout: Optional[LineCallback] = None,
        on_stderr: Optional[LineCallback] = None,
    ) -> int:
        """
        Run a program, streaming its output line by line.

        Stdout lines are delivered on the calling thread, stderr lines on a
        helper thread, each as soon as the child writes them and without
        its line ending. Output is decoded as UTF-8, invalid bytes are
        replaced rather than rejected.

        Both pipes are read until the child closes them. If a callback
        raises, the remaining output is still consumed and the callback's
        error is re-raised once the child has exited.

        Args:
            tool: Program name (resolved on the search path) or path
            args: Program arguments
            on_stdout: Callback for each stdout line
            on_stderr: Callback for each stderr line

        Returns:
            The program's exit code

        Raises:
            ProcessExecutionError: If the program cannot be started
        """
        return self._run(
            tool, args, _strip_line_ending(on_stdout), _strip_line_ending(on_stderr)
        )

    def _run(
        self,
        tool: str,
        args: Sequence[str],
        on_stdout: Optional[LineCallback],
        on_stderr: Optional[LineCallback],
    ) -> int:
        args = list(args)
        executable = self.which(tool) or tool
        logger.debug(f"Running: {tool} {' '.join(args)}")

        try:
            process = subprocess.Popen(
                [str(executable), *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                env=self.environment(),
            )
        except OSError as e:
            logger.debug(f"Unable to start {tool}: {e}")
            raise ProcessExecutionError(tool, args) from e

        stdout_pump = _LinePump(process.stdout, on_stdout)
        stderr_pump = _LinePump(process.stderr, on_stderr)
        stderr_thread = threading.Thread(target=stderr_pump, daemon=True)
        stderr_thread.start()

        try:
            stdout_pump()
            returncode = process.wait()
        except BaseException:
            process.kill()
            process.wait()
            raise
        finally:
            stderr_thread.join()

        logger.debug(f"{tool} exited with code {returncode}")

        for pump in (stdout_pump, stderr_pump):
            if pump.error is not None:
                raise pump.error

        return returncode

    def execute(self, tool: str, *args: str) -> str:
        """
        Run a program and return everything it wrote to stdout.

        The output is returned exactly as written, line endings included
        (decoded as UTF-8 with invalid bytes replaced). Stderr lines are
        forwarded to debug logging.

        Raises:
            ProcessExecutionError: If the program exits with a non-zero code
        """
        chunks: List[str] = []

        returncode = self._run(
            tool,
            args,
            on_stdout=chunks.append,
            on_stderr=_strip_line_ending(logger.debug),
        )

        if returncode != 0:
            raise ProcessExecutionError(tool, args, returncode)

        return "".join(chunks)
