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
Unit tests for the status reporter.
"""
from deploykit.MANAGERS.status_reporter import StatusReporter


class TestStatusReporter:
    """Tests for StatusReporter.report_status."""

    def test_all_facets_gathered(self, executor, config):
        executor.script("docker", "--version", stdout="Docker version 27.0.1\n")
        executor.script("docker", "ps", stdout="NAMES\tSTATUS\tPORTS\nblog-v2-test\tUp 2 minutes\t0.0.0.0:8080->8080/tcp\n")
        executor.script("docker", "images", stdout="REPOSITORY:TAG\tSIZE\nblog-v2:latest\t95MB\n")
        executor.script("git", "status", stdout=" M posts/hello.md\n")

        snapshot = StatusReporter(executor, config).report_status()

        assert snapshot.engine_version.text == "Docker version 27.0.1"
        assert "blog-v2-test" in snapshot.containers.text
        assert "blog-v2:latest" in snapshot.images.text
        assert snapshot.vcs_status.text == " M posts/hello.md"
        assert all(facet.ok for facet in snapshot.facets())

    def test_filters_by_project_tag(self, executor, config):
        StatusReporter(executor, config).report_status()
        ps = executor.called("docker", "ps")[0]
        images = executor.called("docker", "images")[0]
        assert "name=blog-v2" in ps
        assert "-a" in ps
        assert "reference=blog-v2*" in images

    def test_not_a_repository(self, executor, config):
        executor.script("git", "status", returncode=128, stderr="fatal: not a git repository")
        snapshot = StatusReporter(executor, config).report_status()
        assert snapshot.vcs_status.ok is False
        assert snapshot.vcs_status.text == "Not a git repository"
        assert snapshot.engine_version.ok is True

    def test_facets_fail_independently(self, make_executor, config):
        executor = make_executor(available=("git",))
        executor.script("docker", returncode=127)
        executor.script("git", "status", stdout="")

        snapshot = StatusReporter(executor, config).report_status()

        assert snapshot.engine_version.text == "docker is not available"
        assert snapshot.containers.text == "No blog-v2 containers found"
        assert snapshot.images.text == "No blog-v2 images found"
        assert snapshot.vcs_status.ok is True
        assert snapshot.vcs_status.text == "Working tree clean"
        assert len(executor.calls) == 4

    def test_header_only_listing_counts_as_empty(self, executor, config):
        executor.script("docker", "ps", stdout="NAMES\tSTATUS\tPORTS\n")
        snapshot = StatusReporter(executor, config).report_status()
        assert snapshot.containers.ok is True
        assert snapshot.containers.text == "No blog-v2 containers found"
