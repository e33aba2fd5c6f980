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
Readiness checks for a freshly started container: an HTTP liveness probe
and the policies that decide when to run it.
"""
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import HTTPRedirectHandler, build_opener

from tenacity import Retrying, retry_if_result, stop_after_attempt, wait_fixed

from ..MODELS.project_config import ProjectConfig, ReadinessMode


class _NoRedirect(HTTPRedirectHandler):
    """Leaves 3xx responses unanswered so they surface as HTTPError."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


class HttpProbe:
    """
    Single HTTP GET against a local endpoint, redirects not followed. Any
    status below 400 counts as alive; error statuses, refused connections,
    timeouts and non-HTTP replies count as not alive.
    """

    def __init__(self, url: str, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout
        self.opener = build_opener(_NoRedirect)

    def check(self) -> bool:
        try:
            with self.opener.open(self.url, timeout=self.timeout) as response:
                return response.status < 400
        except HTTPError as e:
            e.close()
            return e.code < 400
        except (URLError, HTTPException, OSError, ValueError):
            return False


class ReadinessPolicy(ABC):
    """
    Decides when and how often a probe is consulted.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self.sleep = sleep

    def describe(self) -> str:
        return "Waiting for container to start..."

    @abstractmethod
    def wait_until_ready(self, probe: HttpProbe, on_probe: Optional[Callable[[], None]] = None) -> bool:
        """
        Blocks for the policy's delay and returns the probe verdict.

        :param probe: Probe to consult.
        :param on_probe: Called once, right before the first probe.
        """


class FixedDelayPolicy(ReadinessPolicy):
    """
    One unconditional settling delay, then exactly one probe.
    """

    def __init__(self, delay: float = 10.0, sleep: Callable[[float], None] = time.sleep):
        super().__init__(sleep)
        self.delay = delay

    def describe(self) -> str:
        return f"Waiting for container to start ({self.delay:g} seconds)..."

    def wait_until_ready(self, probe: HttpProbe, on_probe: Optional[Callable[[], None]] = None) -> bool:
        if self.delay > 0:
            self.sleep(self.delay)
        if on_probe:
            on_probe()
        return probe.check()


class PollingPolicy(ReadinessPolicy):
    """
    Bounded polling: an initial delay, then up to ``attempts`` probes spaced
    ``interval`` seconds apart. Stops at the first success.
    """

    def __init__(
        self,
        initial_delay: float = 0.0,
        attempts: int = 10,
        interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(sleep)
        self.initial_delay = initial_delay
        self.attempts = attempts
        self.interval = interval

    def describe(self) -> str:
        return (
            f"Waiting for container to start (up to {self.attempts} probes, "
            f"{self.interval:g}s apart)..."
        )

    def wait_until_ready(self, probe: HttpProbe, on_probe: Optional[Callable[[], None]] = None) -> bool:
        if self.initial_delay > 0:
            self.sleep(self.initial_delay)
        if on_probe:
            on_probe()

        retrying = Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.interval),
            retry=retry_if_result(lambda alive: not alive),
            retry_error_callback=lambda state: False,
            sleep=self.sleep,
        )
        return retrying(probe.check)


def policy_for(config: ProjectConfig, sleep: Callable[[float], None] = time.sleep) -> ReadinessPolicy:
    """
    Builds the readiness policy selected in the project configuration.
    """
    if config.readiness == ReadinessMode.POLLING:
        return PollingPolicy(
            initial_delay=config.settle_delay,
            attempts=config.poll_attempts,
            interval=config.poll_interval,
            sleep=sleep,
        )
    return FixedDelayPolicy(delay=config.settle_delay, sleep=sleep)
