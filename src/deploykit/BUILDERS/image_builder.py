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
Builds the project's container image with the engine.
"""
from ..errors import BuildFailure
from ..MODELS.project_config import ProjectConfig
from ..RUNNERS.process_runner import ProcessExecutor
from ..UTILS.console import print_header, print_success


class ImageBuilder:
    """
    Runs a synchronous image build against the configured build context.
    """
    def __init__(self, executor: ProcessExecutor, config: ProjectConfig):
        """
        Initializes the ImageBuilder.

        :param executor: Executor that runs the engine.
        :param config: Project configuration naming the image and context.
        """
        self.executor = executor
        self.config = config

    def build_command(self, tag: str) -> list:
        return [
            self.config.engine,
            "build",
            "-t",
            self.config.image(tag),
            self.config.build_context,
        ]

    def build(self, tag: str, header: bool = True) -> str:
        """
        Builds ``<name>:<tag>``. Engine output goes straight to the terminal.

        :param tag: Image tag, ``latest`` or ``test``.
        :param header: Print the section header before building.
        :return: The image reference that was built.
        :raises BuildFailure: If the engine exits non-zero.
        """
        image = self.config.image(tag)
        if header:
            print_header("Building Image")

        returncode = self.executor.stream(self.build_command(tag))
        if returncode != 0:
            raise BuildFailure(image, returncode)

        print_success(f"Image {image} built successfully")
        return image
