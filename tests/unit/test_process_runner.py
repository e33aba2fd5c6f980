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
Unit tests for the subprocess-backed executor.
"""
import sys
from deploykit.RUNNERS.process_runner import NOT_EXECUTABLE, NOT_FOUND, SubprocessExecutor


class TestSubprocessExecutor:
    """Tests for SubprocessExecutor."""

    def test_run_captures_output(self):
        result = SubprocessExecutor().run([sys.executable, "-c", "print('hello')"])
        assert result.ok
        assert result.lines() == ["hello"]

    def test_run_reports_exit_code(self):
        result = SubprocessExecutor().run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.returncode == 3
        assert not result.ok

    def test_missing_executable(self):
        executor = SubprocessExecutor()
        result = executor.run(["definitely-not-a-real-tool-d2k"])
        assert result.returncode == NOT_FOUND
        assert executor.stream(["definitely-not-a-real-tool-d2k"]) == NOT_FOUND

    def test_which(self):
        executor = SubprocessExecutor()
        assert executor.which("definitely-not-a-real-tool-d2k") is None

    def test_stream_returns_exit_code(self):
        code = SubprocessExecutor().stream([sys.executable, "-c", "import sys; sys.exit(4)"])
        assert code == 4

    def test_non_executable_file(self, non_executable):
        executor = SubprocessExecutor()
        result = executor.run([non_executable, "ps"])
        assert result.returncode == NOT_EXECUTABLE
        assert "Permission denied" in result.stderr
        assert executor.stream([non_executable, "build"]) == NOT_EXECUTABLE
