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
Models for the commands accepted by the dispatcher.
"""
from enum import Enum
from typing import Sequence


class Command(str, Enum):
    """
    The literal set of commands. Anything else parses to ``UNKNOWN``.
    """
    BUILD = "build"
    TEST = "test"
    RUN = "run"
    CLEAN = "clean"
    PUSH = "push"
    STATUS = "status"
    HELP = "help"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, token: str) -> "Command":
        """
        Maps a single token to a command. No prefixes, no case folding.
        """
        if token in HELP_TOKENS:
            return cls.HELP
        try:
            return cls(token)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "Command":
        """
        Parses the first argument, defaulting to ``help`` when there is none.
        """
        return cls.parse(first_token(args))


HELP_TOKENS = ("help", "--help", "-h")


def first_token(args: Sequence[str]) -> str:
    return args[0] if args else Command.HELP.value
