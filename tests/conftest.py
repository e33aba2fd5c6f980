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
Shared fixtures: a recording executor and a scripted probe.
"""
import socket
import threading

import pytest
from typing import List, Optional, Sequence, Tuple

from deploykit.MODELS.project_config import ProjectConfig
from deploykit.MODELS.results import CommandResult
from deploykit.MANAGERS.health_monitor import FixedDelayPolicy
from deploykit.RUNNERS.process_runner import ProcessExecutor


class FakeExecutor(ProcessExecutor):
    """
    Records every command and answers from scripted results.

    Scripts match on a command prefix; the most recently added match wins.
    Unscripted commands succeed with empty output.
    """

    def __init__(self, available: Sequence[str] = ("docker", "git")):
        self.available = set(available)
        self.calls: List[List[str]] = []
        self.streamed: List[List[str]] = []
        self._scripts: List[Tuple[Tuple[str, ...], CommandResult, Optional[BaseException]]] = []

    def script(self, *prefix, returncode=0, stdout="", stderr="", raises=None):
        result = CommandResult(command=list(prefix), returncode=returncode, stdout=stdout, stderr=stderr)
        self._scripts.append((tuple(prefix), result, raises))

    def _match(self, command):
        for prefix, result, raises in reversed(self._scripts):
            if tuple(command[:len(prefix)]) == prefix:
                if raises is not None:
                    raise raises
                return result.model_copy(update={"command": list(command)})
        return CommandResult(command=list(command))

    def which(self, executable):
        return f"/usr/bin/{executable}" if executable in self.available else None

    def run(self, command):
        self.calls.append(list(command))
        return self._match(command)

    def stream(self, command):
        self.calls.append(list(command))
        self.streamed.append(list(command))
        return self._match(command).returncode

    def called(self, *prefix) -> List[List[str]]:
        """Recorded commands starting with ``prefix``."""
        return [c for c in self.calls if tuple(c[:len(prefix)]) == prefix]


class FakeProbe:
    """Returns scripted verdicts, one per check."""

    def __init__(self, *verdicts: bool):
        self.verdicts = list(verdicts)
        self.checks = 0

    def check(self) -> bool:
        self.checks += 1
        return self.verdicts.pop(0) if self.verdicts else False


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def config():
    return ProjectConfig(settle_delay=0)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fixed_policy(sleeps):
    return FixedDelayPolicy(delay=10, sleep=sleeps.append)


@pytest.fixture
def make_executor():
    return FakeExecutor


@pytest.fixture
def make_probe():
    return FakeProbe


@pytest.fixture
def non_http_server():
    """
    TCP server on a free local port that answers every connection with a
    non-HTTP banner. Yields the URL to reach it.
    """
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    listener.settimeout(0.2)
    stop = threading.Event()

    def serve():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                conn.sendall(b"SSH-2.0-OpenSSH\r\n")

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{listener.getsockname()[1]}/"
    stop.set()
    thread.join(timeout=2)
    listener.close()


@pytest.fixture
def non_executable(tmp_path):
    """Path to an existing file without execute permission."""
    path = tmp_path / "docker"
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o644)
    return str(path)
