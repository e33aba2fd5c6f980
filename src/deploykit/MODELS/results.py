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
Transient, process-scoped values produced by the workflows.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """
    Outcome of one captured external command.
    """
    command: List[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def lines(self) -> List[str]:
        """Non-empty stdout lines, stripped."""
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]


class VerifyState(str, Enum):
    """
    States of a build-and-verify run.
    """
    STARTING = "starting"
    SETTLING = "settling"
    PROBING = "probing"
    VERIFIED = "verified"
    FAILED = "failed"


class VerificationOutcome(BaseModel):
    """
    Record of one build-and-verify run, including the states it went through.
    """
    container: str
    image: str
    url: str
    history: List[VerifyState] = []

    @property
    def state(self) -> Optional[VerifyState]:
        return self.history[-1] if self.history else None

    def advance(self, state: VerifyState) -> None:
        self.history.append(state)


class CleanupReport(BaseModel):
    """
    What a cleanup pass stopped and removed, and which commands failed.
    """
    stopped: List[str] = []
    removed_containers: List[str] = []
    removed_images: List[str] = []
    failures: List[str] = []

    @property
    def found_anything(self) -> bool:
        return bool(
            self.stopped or self.removed_containers or self.removed_images or self.failures
        )


class StatusFacet(BaseModel):
    """
    One independently gathered section of the status report.
    """
    title: str
    ok: bool
    text: str


class StatusSnapshot(BaseModel):
    """
    Read-only view of engine and VCS state for the project.
    """
    engine_version: StatusFacet
    containers: StatusFacet
    images: StatusFacet
    vcs_status: StatusFacet

    def facets(self) -> List[StatusFacet]:
        return [self.engine_version, self.containers, self.images, self.vcs_status]


class VcsCommit(BaseModel):
    """
    One publish attempt: the pathspec to stage, the message and the target.
    """
    pathspec: str = "."
    message: str = Field(min_length=1)
    remote: str = "origin"
    branch: str = "main"
