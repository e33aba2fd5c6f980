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
Colored status messages for the terminal.
"""
import click

RULE = "=" * 40


def print_header(title: str) -> None:
    """
    Prints a section header framed by two rules.
    """
    click.secho(RULE, fg="blue")
    click.secho(title, fg="blue")
    click.secho(RULE, fg="blue")


def print_success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def print_error(message: str) -> None:
    click.secho(f"✗ {message}", fg="red", err=True)


def print_info(message: str) -> None:
    click.secho(f"ℹ {message}", fg="yellow")


def print_plain(text: str) -> None:
    """Prints captured engine/VCS output unchanged."""
    click.echo(text.rstrip("\n"))
