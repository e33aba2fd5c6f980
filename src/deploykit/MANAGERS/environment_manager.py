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
Resolution of the project configuration from defaults, the project file,
a .env file and the process environment.
"""
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..MODELS.project_config import ProjectConfig
from ..PARSERS.config_parser import ConfigParser

ENV_PREFIX = "DEPLOYKIT_"
CONFIG_FILE = "deploykit.yml"


class EnvironmentManager:
    """
    Merges configuration sources. Later sources override earlier ones:
    defaults, project file, .env file, process environment.
    """
    def __init__(self, base_dir: str = ".", environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the environment manager.

        :param base_dir: Directory holding deploykit.yml and .env.
        :param environ: Environment to read; defaults to os.environ.
        """
        self.base_dir = base_dir
        self.environ = os.environ if environ is None else environ
        self.parser = ConfigParser()

    def config_path(self) -> str:
        explicit = self.environ.get(f"{ENV_PREFIX}CONFIG")
        if explicit:
            return explicit
        return os.path.join(self.base_dir, CONFIG_FILE)

    def get_overrides(self) -> Dict[str, Any]:
        """
        Collects ``DEPLOYKIT_<FIELD>`` settings from .env and the environment.
        """
        merged: Dict[str, Any] = {}
        env_file = os.path.join(self.base_dir, ".env")
        if os.path.exists(env_file):
            merged.update(_prefixed(dotenv_values(env_file)))
        merged.update(_prefixed(self.environ))
        return merged

    def load_config(self) -> ProjectConfig:
        """
        Builds the validated ProjectConfig.

        :raises ConfigurationError: If a source is unreadable or a value is invalid.
        """
        settings: Dict[str, Any] = {}
        path = self.config_path()
        if os.path.exists(path):
            settings.update(self.parser.parse(path))
        elif path != os.path.join(self.base_dir, CONFIG_FILE):
            raise ConfigurationError(f"Config file {path} not found")

        settings.update(self.get_overrides())
        try:
            return ProjectConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid project configuration: {e}") from e


def _prefixed(values: Mapping[str, Optional[str]]) -> Dict[str, str]:
    fields = ProjectConfig.model_fields
    found = {}
    for key, value in values.items():
        if not key.startswith(ENV_PREFIX) or value is None:
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name in fields:
            found[name] = value
    return found
