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
Container lifecycle: interactive foreground runs and the build/verify
workflow with its failure-path teardown.
"""
from typing import Callable, List, Optional

from ..BUILDERS.image_builder import ImageBuilder
from ..errors import VerificationFailure
from ..MODELS.project_config import ProjectConfig
from ..MODELS.results import VerificationOutcome, VerifyState
from ..RUNNERS.process_runner import ProcessExecutor
from .health_monitor import HttpProbe, ReadinessPolicy, policy_for
from .log_aggregator import LogAggregator
from ..UTILS.console import print_header, print_success, print_error, print_info


class ContainerManager:
    """
    Starts project containers and decides whether a test container is healthy.

    Container names are always passed in by the caller; this class keeps no
    notion of a current container.
    """

    def __init__(
        self,
        executor: ProcessExecutor,
        config: ProjectConfig,
        builder: Optional[ImageBuilder] = None,
        policy: Optional[ReadinessPolicy] = None,
        probe_factory: Optional[Callable[[str], HttpProbe]] = None,
    ):
        """
        Initializes the container manager.

        :param executor: Executor that runs the engine.
        :param config: Project configuration.
        :param builder: Image builder used by the verify workflow.
        :param policy: Readiness policy; defaults to the configured one.
        :param probe_factory: Builds a probe for a URL; defaults to HttpProbe.
        """
        self.executor = executor
        self.config = config
        self.builder = builder or ImageBuilder(executor, config)
        self.policy = policy or policy_for(config)
        self.probe_factory = probe_factory or (
            lambda url: HttpProbe(url, timeout=config.probe_timeout)
        )
        self.logs = LogAggregator(executor, config.engine)
        self.last_outcome: Optional[VerificationOutcome] = None

    def run_command(self, image_tag: str, host_port: int, container: str, detach: bool) -> List[str]:
        cmd = [self.config.engine, "run"]
        if detach:
            cmd.append("-d")
        cmd += [
            "-p", f"{host_port}:{self.config.container_port}",
            "-e", f"PORT={self.config.container_port}",
            "--name", container,
            self.config.image(image_tag),
        ]
        return cmd

    def run_foreground(self, image_tag: str, host_port: int, container: str) -> int:
        """
        Runs a container attached to the terminal until it exits or is
        interrupted. A stale container with the same name is not removed; the
        engine reports the conflict.

        :return: The container's exit code.
        """
        print_header("Running Local Container")
        print_info(f"Starting container on port {host_port}...")
        return self.executor.stream(self.run_command(image_tag, host_port, container, detach=False))

    def run_and_verify(self, image_tag: str, host_port: int, container: str) -> VerificationOutcome:
        """
        Builds ``image_tag``, starts it detached, waits, and probes it once.

        On success the container's logs are followed until the operator
        interrupts; the container is never removed. On failure the logs are
        printed, the container is stopped and removed (each step best-effort)
        and VerificationFailure is raised.

        :raises BuildFailure: If the image cannot be built.
        :raises VerificationFailure: If the container cannot start or fails the probe.
        """
        url = self.config.probe_url(host_port)
        outcome = VerificationOutcome(
            container=container, image=self.config.image(image_tag), url=url
        )
        self.last_outcome = outcome
        print_header("Testing Local Deployment")

        print_info("Building image...")
        self.builder.build(image_tag, header=False)

        outcome.advance(VerifyState.STARTING)
        print_info("Starting test container...")
        started = self.executor.run(self.run_command(image_tag, host_port, container, detach=True))
        if not started.ok:
            print_error(started.stderr.strip() or f"{self.config.engine} run exited {started.returncode}")
            self._fail(outcome, "Container failed to start")

        outcome.advance(VerifyState.SETTLING)
        print_info(self.policy.describe())
        probe = self.probe_factory(url)

        def probing():
            outcome.advance(VerifyState.PROBING)
            print_info("Testing health endpoint...")

        if not self.policy.wait_until_ready(probe, on_probe=probing):
            self._fail(outcome, "Health check failed")

        outcome.advance(VerifyState.VERIFIED)
        print_success("Health check passed!")
        print_info(f"Your service is running at http://localhost:{host_port}")
        print_info("Press Ctrl+C to stop the container")
        self.logs.follow(container)
        return outcome

    def _fail(self, outcome: VerificationOutcome, reason: str) -> None:
        outcome.advance(VerifyState.FAILED)
        print_error(reason)
        self.logs.dump(outcome.container)
        self.teardown(outcome.container)
        raise VerificationFailure(outcome.container, outcome.url, reason)

    def teardown(self, container: str) -> None:
        """
        Stops then removes a container, ignoring failures of either step.
        """
        for action in ("stop", "rm"):
            result = self.executor.run([self.config.engine, action, container])
            if not result.ok:
                print_info(f"{self.config.engine} {action} {container} failed; continuing")
