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
Preflight checks run before any engine-dependent workflow.
"""
from ..errors import MissingDependency
from ..RUNNERS.process_runner import ProcessExecutor
from ..UTILS.console import print_success


def ensure_engine_available(executor: ProcessExecutor, engine: str) -> str:
    """
    Verifies that the container engine executable is on the search path.

    :param executor: Executor used to resolve the executable.
    :param engine: Name of the engine executable, e.g. ``docker``.
    :return: The resolved path.
    :raises MissingDependency: If the engine cannot be found. Not retried.
    """
    path = executor.which(engine)
    if not path:
        raise MissingDependency(engine)
    print_success(f"{engine.capitalize()} is installed")
    return path
