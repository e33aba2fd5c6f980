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
Usage text for the dispatcher.
"""
from jinja2 import Template

from ..MODELS.project_config import ProjectConfig

COMMANDS = [
    ("build", "Build the container image locally"),
    ("test", "Build and test the container locally"),
    ("run", "Run the container (continuous mode)"),
    ("clean", "Stop and remove project containers and images"),
    ("push", "Commit and push code (triggers {{ deploy_target }} deployment)"),
    ("status", "Show deployment status"),
    ("help", "Show this help message"),
]

USAGE_TEMPLATE = """{{ title }}

Usage: {{ prog }} [COMMAND]

Commands:
{% for name, help in commands %}    {{ "%-15s"|format(name) }} {{ help }}
{% endfor %}
Examples:
    {{ prog }} build          # Build the image
    {{ prog }} test           # Test locally
    {{ prog }} run            # Run container interactively
    {{ prog }} push           # Push for automatic deployment
    {{ prog }} clean          # Clean up container resources
    {{ prog }} status         # Check deployment status

Prerequisites:
    - {{ engine }} installed
    - {{ vcs }} configured, with remote '{{ remote }}'
    - {{ deploy_target }} connected to the '{{ branch }}' branch

Deployment Workflow:
    1. Make changes locally
    2. Run: {{ prog }} test           (test changes locally)
    3. Run: {{ prog }} push           (push to {{ remote }}/{{ branch }})
    4. {{ deploy_target }} automatically deploys your changes!
"""


def render_usage(config: ProjectConfig, prog: str = "deploykit") -> str:
    """
    Renders the usage text for ``config``.
    """
    commands = [
        (name, Template(help).render(deploy_target=config.deploy_target))
        for name, help in COMMANDS
    ]
    return Template(USAGE_TEMPLATE).render(
        title=f"{config.name} Deployment Helper",
        prog=prog,
        commands=commands,
        engine=config.engine.capitalize(),
        vcs=config.vcs.capitalize(),
        remote=config.remote,
        branch=config.branch,
        deploy_target=config.deploy_target,
    )
