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
Container log output: one-shot dumps for diagnosis and a blocking follow.
"""
from ..RUNNERS.process_runner import ProcessExecutor
from ..UTILS.console import print_info


class LogAggregator:
    """
    Prints container logs through the engine's ``logs`` subcommand.
    """
    def __init__(self, executor: ProcessExecutor, engine: str = "docker"):
        """
        Initializes the log aggregator.

        :param executor: Executor that runs the engine.
        :param engine: Engine executable.
        """
        self.executor = executor
        self.engine = engine

    def dump(self, container: str) -> int:
        """
        Prints everything the container has logged so far.
        """
        return self.executor.stream([self.engine, "logs", container])

    def follow(self, container: str) -> bool:
        """
        Streams the container's logs until the engine stops or the operator
        interrupts. The container itself keeps running.

        :return: True if the stream ended because of an interrupt.
        """
        try:
            self.executor.stream([self.engine, "logs", "-f", container])
        except KeyboardInterrupt:
            print_info(f"\nStopped following logs; {container} is still running")
            return True
        return False
