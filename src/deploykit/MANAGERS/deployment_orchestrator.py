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
Orchestration of the named deployment workflows.
"""
from typing import Callable, Optional

from ..BUILDERS.image_builder import ImageBuilder
from ..MODELS.project_config import ProjectConfig
from ..MODELS.results import CleanupReport, StatusSnapshot, VcsCommit, VerificationOutcome
from ..RUNNERS.process_runner import ProcessExecutor, SubprocessExecutor
from .cleanup import ResourceCleanup
from .container_manager import ContainerManager
from .health_monitor import HttpProbe, ReadinessPolicy
from .preflight import ensure_engine_available
from .status_reporter import StatusReporter
from .vcs_publisher import VcsPublisher
from ..UTILS.console import print_header, print_info, print_plain


class DeploymentOrchestrator:
    """
    Wires the builder, container manager, cleanup, publisher and status
    reporter to one executor and one project configuration.
    """
    def __init__(
        self,
        config: ProjectConfig,
        executor: Optional[ProcessExecutor] = None,
        policy: Optional[ReadinessPolicy] = None,
        probe_factory: Optional[Callable[[str], HttpProbe]] = None,
    ):
        """
        Initializes the orchestrator.

        :param config: Project configuration.
        :param executor: Executor for engine/VCS commands; a SubprocessExecutor by default.
        :param policy: Readiness policy override for the test workflow.
        :param probe_factory: Probe override for the test workflow.
        """
        self.config = config
        self.executor = executor or SubprocessExecutor()
        self.builder = ImageBuilder(self.executor, config)
        self.containers = ContainerManager(
            self.executor, config, builder=self.builder, policy=policy, probe_factory=probe_factory
        )
        self.cleanup = ResourceCleanup(self.executor, config.engine)
        self.publisher = VcsPublisher(
            self.executor,
            vcs=config.vcs,
            remote=config.remote,
            branch=config.branch,
            deploy_target=config.deploy_target,
        )
        self.reporter = StatusReporter(self.executor, config)

    def preflight(self) -> None:
        ensure_engine_available(self.executor, self.config.engine)

    def build(self) -> str:
        self.preflight()
        return self.builder.build("latest")

    def test(self) -> VerificationOutcome:
        self.preflight()
        return self.containers.run_and_verify(
            "test", self.config.host_port, self.config.test_container
        )

    def run(self) -> int:
        """
        Builds ``latest`` and runs it in the foreground.

        :return: The container's exit code.
        """
        self.preflight()
        self.builder.build("latest")
        return self.containers.run_foreground(
            "latest", self.config.host_port, self.config.local_container
        )

    def clean(self) -> CleanupReport:
        return self.cleanup.cleanup_all(self.config.name)

    def push(self, ask_message: Callable[[], str]) -> VcsCommit:
        """
        Prompts for a commit message and publishes.

        :param ask_message: Returns the operator's commit message.
        """
        print_header(self.publisher.title)
        return self.publisher.publish(ask_message(), header=False)

    def status(self) -> StatusSnapshot:
        snapshot = self.reporter.report_status()
        print_header("Deployment Status")
        for facet in snapshot.facets():
            print_info(f"{facet.title}:")
            print_plain(facet.text)
            print_plain("")
        return snapshot
