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
Publishing local changes upstream: stage, commit, push.
"""
from ..errors import PublishFailure
from ..MODELS.results import VcsCommit
from ..RUNNERS.process_runner import ProcessExecutor
from ..UTILS.console import print_header, print_success, print_info


class VcsPublisher:
    """
    Stages all changes, commits them and pushes to the configured branch.

    Steps short-circuit on the first failure and nothing is retried, so a
    commit that was made before a failed push is never duplicated.
    """
    def __init__(
        self,
        executor: ProcessExecutor,
        vcs: str = "git",
        remote: str = "origin",
        branch: str = "main",
        deploy_target: str = "Cloudflare Pages",
    ):
        self.executor = executor
        self.vcs = vcs
        self.remote = remote
        self.branch = branch
        self.deploy_target = deploy_target

    @property
    def title(self) -> str:
        return f"Pushing to {self.remote}/{self.branch}"

    def publish(self, message: str, header: bool = True) -> VcsCommit:
        """
        Publishes the working tree with ``message``.

        :param message: Commit message; empty or blank is rejected locally.
        :param header: Print the section header first.
        :return: The commit that was pushed.
        :raises PublishFailure: Naming the step that failed.
        """
        if header:
            print_header(self.title)

        if not message or not message.strip():
            raise PublishFailure("message", "Commit message cannot be empty")

        commit = VcsCommit(message=message, remote=self.remote, branch=self.branch)

        print_info("Adding files...")
        self._step("stage", [self.vcs, "add", commit.pathspec])

        print_info("Committing changes...")
        self._step("commit", [self.vcs, "commit", "-m", commit.message])

        print_info(f"Pushing to {commit.remote}...")
        self._step("push", [self.vcs, "push", commit.remote, commit.branch])

        print_success(f"Successfully pushed to {commit.remote}/{commit.branch}!")
        print_info(f"{self.deploy_target} will automatically deploy your changes")
        return commit

    def _step(self, step: str, command: list) -> None:
        returncode = self.executor.stream(command)
        if returncode != 0:
            raise PublishFailure(step, f"{' '.join(command[:2])} failed (exit code {returncode})")
