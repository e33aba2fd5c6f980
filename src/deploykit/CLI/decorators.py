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

"""Decorators for CLI commands."""
from functools import wraps
from typing import Callable, TypeVar

import click

from ..errors import DeployError
from ..UTILS.console import print_error

R = TypeVar("R")

# Exit status of a process stopped by SIGINT
INTERRUPTED = 130


def handle_deploy_errors(func: Callable[..., R]) -> Callable[..., R]:
    """Decorator that turns DeployError and operator interrupts into exit codes."""
    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> R:
        try:
            return func(*args, **kwargs)
        except DeployError as e:
            print_error(str(e))
            raise click.exceptions.Exit(e.exit_code)
        except KeyboardInterrupt:
            click.echo("\nInterrupted.", err=True)
            raise click.exceptions.Exit(INTERRUPTED)
    return wrapper
