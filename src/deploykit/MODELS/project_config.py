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
Project configuration: names, ports and targets shared by every workflow.
"""
from enum import Enum
from pydantic import BaseModel, Field


class ReadinessMode(str, Enum):
    """
    How the test container is judged ready.
    """
    FIXED = "fixed"
    POLLING = "polling"


class ProjectConfig(BaseModel):
    """
    Settings for one deployable project. The defaults reproduce the
    behaviour of the original shell helper.
    """
    name: str = Field(default="blog-v2", min_length=1)
    engine: str = "docker"
    vcs: str = "git"
    build_context: str = "."

    # Networking
    host_port: int = Field(default=8080, ge=1, le=65535)
    container_port: int = Field(default=8080, ge=1, le=65535)

    # Readiness
    probe_path: str = "/"
    probe_timeout: float = Field(default=5.0, gt=0)
    settle_delay: float = Field(default=10.0, ge=0)
    readiness: ReadinessMode = ReadinessMode.FIXED
    poll_attempts: int = Field(default=10, ge=1)
    poll_interval: float = Field(default=1.0, ge=0)

    # Publishing
    remote: str = "origin"
    branch: str = "main"
    deploy_target: str = "Cloudflare Pages"

    def image(self, tag: str) -> str:
        """Full image reference for ``tag``."""
        return f"{self.name}:{tag}"

    @property
    def local_container(self) -> str:
        return f"{self.name}-local"

    @property
    def test_container(self) -> str:
        return f"{self.name}-test"

    def probe_url(self, host_port: int) -> str:
        """
        URL of the liveness probe for a container published on ``host_port``.
        """
        path = self.probe_path if self.probe_path.startswith("/") else f"/{self.probe_path}"
        return f"http://localhost:{host_port}{path}"
