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
Removal of every container and image belonging to the project.
"""
from typing import List

from ..errors import EngineCommandFailure
from ..MODELS.results import CleanupReport
from ..RUNNERS.process_runner import ProcessExecutor
from ..UTILS.console import print_header, print_success, print_info


class ResourceCleanup:
    """
    Best-effort, idempotent cleanup of project containers and images.

    Each phase lists its resources first and does nothing when the list is
    empty. A failing stop/rm/rmi is recorded and the pass continues.
    """
    def __init__(self, executor: ProcessExecutor, engine: str = "docker"):
        self.executor = executor
        self.engine = engine

    def cleanup_all(self, project_tag: str) -> CleanupReport:
        """
        Stops and removes all containers named after ``project_tag`` and
        removes every image of that repository, whatever its tag.

        :param project_tag: Project identifier used as name/reference filter.
        :return: What was done and which commands failed.
        """
        print_header("Cleaning Up Container Resources")
        report = CleanupReport()

        running = self._list([self.engine, "ps", "-q", "--filter", f"name={project_tag}"], report)
        if running:
            print_info("Stopping running containers...")
            report.stopped = self._apply("stop", running, report)

        containers = self._list([self.engine, "ps", "-aq", "--filter", f"name={project_tag}"], report)
        if containers:
            print_info("Removing containers...")
            report.removed_containers = self._apply("rm", containers, report)

        images = self._list([self.engine, "images", "-q", project_tag], report)
        if images:
            print_info("Removing images...")
            report.removed_images = self._apply("rmi", images, report)

        if report.failures:
            print_info(f"{len(report.failures)} cleanup step(s) failed and were skipped")
        print_success("Cleanup complete")
        return report

    def _list(self, command: List[str], report: CleanupReport) -> List[str]:
        """
        Returns the unique IDs printed by a listing command, or an empty list
        if the command fails.
        """
        result = self.executor.run(command)
        if not result.ok:
            report.failures.append(str(EngineCommandFailure(result)))
            return []
        ids: List[str] = []
        for line in result.lines():
            if line not in ids:
                ids.append(line)
        return ids

    def _apply(self, action: str, ids: List[str], report: CleanupReport) -> List[str]:
        done = []
        for resource_id in ids:
            result = self.executor.run([self.engine, action, resource_id])
            if result.ok:
                done.append(resource_id)
            else:
                report.failures.append(str(EngineCommandFailure(result)))
        return done
