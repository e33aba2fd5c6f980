# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Execution of the external engine and VCS tools.

Workflows never call ``subprocess`` directly; they receive a
``ProcessExecutor`` so tests can substitute a recording fake.
"""
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import click

from ..MODELS.results import CommandResult

# Shell conventions for "command not found" and "not executable".
NOT_FOUND = 127
NOT_EXECUTABLE = 126


class ProcessExecutor(ABC):
    """
    Capability to locate and run external commands.
    """

    @abstractmethod
    def which(self, executable: str) -> Optional[str]:
        """
        Resolves an executable on the search path.

        Returns:
            Optional[str]: Absolute path, or None if it cannot be found.
        """

    @abstractmethod
    def run(self, command: Sequence[str]) -> CommandResult:
        """
        Runs a command to completion with its output captured.

        Args:
            command (Sequence[str]): Command and arguments.

        Returns:
            CommandResult: Exit code and captured output.
        """

    @abstractmethod
    def stream(self, command: Sequence[str]) -> int:
        """
        Runs a command attached to the terminal and blocks until it exits.

        Args:
            command (Sequence[str]): Command and arguments.

        Returns:
            int: The command's exit code.
        """


class SubprocessExecutor(ProcessExecutor):
    """
    ProcessExecutor backed by ``subprocess``.
    """
    def __init__(self, stop_timeout: int = 10):
        """
        Args:
            stop_timeout (int): Seconds to wait after SIGTERM before killing a
                streamed command that was interrupted.
        """
        self.stop_timeout = stop_timeout

    def which(self, executable: str) -> Optional[str]:
        return shutil.which(executable)

    def run(self, command: Sequence[str]) -> CommandResult:
        argv = list(command)
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                # Avoid shell=True for security reasons (CWE-78)
                shell=False,
            )
        except OSError as e:
            return CommandResult(command=argv, returncode=_exec_status(e), stderr=str(e))
        return CommandResult(
            command=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def stream(self, command: Sequence[str]) -> int:
        argv = list(command)
        try:
            process = subprocess.Popen(argv, shell=False)
        except OSError as e:
            click.echo(f"{argv[0]}: {e}", err=True)
            return _exec_status(e)

        try:
            return process.wait()
        except KeyboardInterrupt:
            self._stop(process)
            raise

    def _stop(self, process: subprocess.Popen) -> None:
        """
        Stops the process by sending SIGTERM, followed by SIGKILL if it doesn't stop.
        """
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=self.stop_timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()


def _exec_status(error: OSError) -> int:
    """Exit status a shell would report for a command that could not be started."""
    return NOT_FOUND if isinstance(error, FileNotFoundError) else NOT_EXECUTABLE
