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
Command Line Interface for DeployKit.

A single positional token selects one workflow; there are no options and
no aliases beyond ``help``/``--help``/``-h``.
"""
from typing import Callable, Dict, Tuple

import click

from ..errors import ConfigurationError
from ..MODELS.command import Command, first_token
from ..MODELS.project_config import ProjectConfig
from ..MANAGERS.deployment_orchestrator import DeploymentOrchestrator
from ..MANAGERS.environment_manager import EnvironmentManager
from ..UTILS.console import print_error
from .decorators import handle_deploy_errors
from .usage import render_usage

RAW_ARGS = "deploykit.raw_args"


def ask_commit_message() -> str:
    return click.prompt("Enter commit message", default="", show_default=False)


def _build(orchestrator: DeploymentOrchestrator) -> None:
    orchestrator.build()


def _test(orchestrator: DeploymentOrchestrator) -> None:
    orchestrator.test()


def _run(orchestrator: DeploymentOrchestrator) -> None:
    returncode = orchestrator.run()
    if returncode != 0:
        raise click.exceptions.Exit(returncode)


def _clean(orchestrator: DeploymentOrchestrator) -> None:
    orchestrator.clean()


def _push(orchestrator: DeploymentOrchestrator) -> None:
    orchestrator.push(ask_commit_message)


def _status(orchestrator: DeploymentOrchestrator) -> None:
    orchestrator.status()


WORKFLOWS: Dict[Command, Callable[[DeploymentOrchestrator], None]] = {
    Command.BUILD: _build,
    Command.TEST: _test,
    Command.RUN: _run,
    Command.CLEAN: _clean,
    Command.PUSH: _push,
    Command.STATUS: _status,
}


def load_config(obj: dict) -> ProjectConfig:
    return obj.get('config') or EnvironmentManager(obj.get('base_dir', '.')).load_config()


def usage_config(obj: dict) -> ProjectConfig:
    """
    Configuration used only to word the usage text; a broken project file
    falls back to the defaults so help is always available.
    """
    try:
        return load_config(obj)
    except ConfigurationError:
        return ProjectConfig()


def make_orchestrator(obj: dict) -> DeploymentOrchestrator:
    """
    Builds the orchestrator, honouring test doubles placed in the click
    context object (``config``, ``executor``, ``policy``, ``probe_factory``).
    """
    return DeploymentOrchestrator(
        load_config(obj),
        executor=obj.get('executor'),
        policy=obj.get('policy'),
        probe_factory=obj.get('probe_factory'),
    )


class RawArgsCommand(click.Command):
    """
    Records the arguments as given, including a bare ``--`` that click
    would otherwise consume as the end-of-options marker.
    """
    def parse_args(self, ctx, args):
        ctx.meta[RAW_ARGS] = list(args)
        return super().parse_args(ctx, args)


@click.command(
    cls=RawArgsCommand,
    context_settings={"ignore_unknown_options": True},
    add_help_option=False,
)
@click.argument('tokens', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
@handle_deploy_errors
def cli(ctx, tokens: Tuple[str, ...]):
    """
    DeployKit - build, verify and publish a containerized web service.
    """
    ctx.ensure_object(dict)
    args = ctx.meta.get(RAW_ARGS, list(tokens))
    command = Command.from_args(args)

    if command == Command.HELP:
        click.echo(render_usage(usage_config(ctx.obj)))
        return

    if command == Command.UNKNOWN:
        print_error(f"Unknown command: {first_token(args)}")
        click.echo("")
        click.echo(render_usage(usage_config(ctx.obj)))
        raise click.exceptions.Exit(1)

    WORKFLOWS[command](make_orchestrator(ctx.obj))


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
