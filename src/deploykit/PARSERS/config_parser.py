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
Parser for the optional ``deploykit.yml`` project file.
"""
import yaml
from typing import Any, Dict

from ..errors import ConfigurationError


class ConfigParser:
    """
    Reads project settings from YAML. Keys may use dashes or underscores.
    """
    def parse(self, config_path: str) -> Dict[str, Any]:
        """
        Parses a project file from a path.

        :param config_path: Path to the YAML file.
        :return: Settings keyed by ProjectConfig field name.
        """
        with open(config_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content, source=config_path)

    def parse_from_string(self, content: str, source: str = "<string>") -> Dict[str, Any]:
        """
        Parses a project file from a string.

        :param content: YAML content.
        :param source: Name used in error messages.
        :return: Settings keyed by ProjectConfig field name.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {source}: {e}") from e

        if not data:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{source} must contain a mapping of settings")

        # Settings may be nested under a top-level 'project' key
        if isinstance(data.get('project'), dict):
            data = data['project']

        return {str(key).replace('-', '_'): value for key, value in data.items()}
