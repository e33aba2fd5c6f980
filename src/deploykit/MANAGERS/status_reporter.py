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
Read-only status snapshot of the engine, project resources and VCS tree.
"""
from typing import Callable, List

from ..MODELS.project_config import ProjectConfig
from ..MODELS.results import CommandResult, StatusFacet, StatusSnapshot
from ..RUNNERS.process_runner import ProcessExecutor

CONTAINER_FORMAT = "table {{.Names}}\t{{.Status}}\t{{.Ports}}"
IMAGE_FORMAT = "table {{.Repository}}:{{.Tag}}\t{{.Size}}"


class StatusReporter:
    """
    Gathers each facet independently; a failing facet falls back to a
    message and never stops the others.
    """
    def __init__(self, executor: ProcessExecutor, config: ProjectConfig):
        self.executor = executor
        self.config = config

    def report_status(self) -> StatusSnapshot:
        engine = self.config.engine
        tag = self.config.name
        return StatusSnapshot(
            engine_version=self._facet(
                "Local engine information",
                [engine, "--version"],
                f"{engine} is not available",
            ),
            containers=self._facet(
                "Containers",
                [engine, "ps", "-a", "--filter", f"name={tag}", "--format", CONTAINER_FORMAT],
                f"No {tag} containers found",
                has_content=_has_rows,
            ),
            images=self._facet(
                "Images",
                [engine, "images", "--filter", f"reference={tag}*", "--format", IMAGE_FORMAT],
                f"No {tag} images found",
                has_content=_has_rows,
            ),
            vcs_status=self._facet(
                f"{self.config.vcs.capitalize()} status",
                [self.config.vcs, "status", "--short"],
                f"Not a {self.config.vcs} repository",
                empty_text="Working tree clean",
            ),
        )

    def _facet(
        self,
        title: str,
        command: List[str],
        fallback: str,
        has_content: Callable[[CommandResult], bool] = lambda result: bool(result.lines()),
        empty_text: str = "",
    ) -> StatusFacet:
        result = self.executor.run(command)
        if not result.ok:
            return StatusFacet(title=title, ok=False, text=fallback)
        if not has_content(result):
            return StatusFacet(title=title, ok=True, text=empty_text or fallback)
        return StatusFacet(title=title, ok=True, text=result.stdout.rstrip("\n"))


def _has_rows(result: CommandResult) -> bool:
    """True if a table listing has anything beyond its header row."""
    return len(result.lines()) > 1
