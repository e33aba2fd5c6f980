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
Error taxonomy for the deployment workflows.

Fatal errors abort the current command with a printed diagnostic and a
non-zero exit code. ``EngineCommandFailure`` is the only best-effort class:
it is raised and caught inside multi-step workflows (cleanup, status) and
never reaches the command line.
"""
from typing import Optional

from .MODELS.results import CommandResult


class DeployError(Exception):
    """Base class for every error the dispatcher turns into an exit code."""

    exit_code = 1


class MissingDependency(DeployError):
    """A required executable (the container engine) is not installed."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(
            f"{executable.capitalize()} is not installed. "
            f"Please install {executable.capitalize()} first."
        )


class ConfigurationError(DeployError):
    """The project configuration could not be loaded or validated."""


class BuildFailure(DeployError):
    """The image build exited non-zero."""

    def __init__(self, image: str, returncode: int):
        self.image = image
        self.returncode = returncode
        super().__init__(f"Failed to build image {image} (exit code {returncode})")


class VerificationFailure(DeployError):
    """The test container did not answer its readiness probe."""

    def __init__(self, container: str, url: str, reason: str = "Health check failed"):
        self.container = container
        self.url = url
        super().__init__(f"{reason} for {container} at {url}")


class PublishFailure(DeployError):
    """
    One step of the publish sequence failed.

    ``step`` is one of ``message``, ``stage``, ``commit`` or ``push`` so the
    operator knows which command to repeat by hand.
    """

    def __init__(self, step: str, message: str):
        self.step = step
        super().__init__(message)


class EngineCommandFailure(DeployError):
    """An individual engine or VCS subcommand exited non-zero."""

    def __init__(self, result: CommandResult, detail: Optional[str] = None):
        self.result = result
        text = detail or result.stderr.strip() or f"exit code {result.returncode}"
        super().__init__(f"{' '.join(result.command)}: {text}")
