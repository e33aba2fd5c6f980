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
Unit tests for project resource cleanup.
"""
from deploykit.MANAGERS.cleanup import ResourceCleanup


class TestResourceCleanup:
    """Tests for ResourceCleanup.cleanup_all."""

    def test_nothing_to_clean_is_idempotent(self, executor):
        cleanup = ResourceCleanup(executor)
        first = cleanup.cleanup_all("blog-v2")
        second = cleanup.cleanup_all("blog-v2")

        for report in (first, second):
            assert not report.found_anything
        assert executor.called("docker", "stop") == []
        assert executor.called("docker", "rm") == []
        assert executor.called("docker", "rmi") == []

    def test_listing_filters_by_project_tag(self, executor):
        ResourceCleanup(executor).cleanup_all("shop")
        assert executor.calls == [
            ["docker", "ps", "-q", "--filter", "name=shop"],
            ["docker", "ps", "-aq", "--filter", "name=shop"],
            ["docker", "images", "-q", "shop"],
        ]

    def test_stops_removes_and_deletes_images(self, executor):
        executor.script("docker", "ps", "-q", stdout="c1\n")
        executor.script("docker", "ps", "-aq", stdout="c1\nc2\n")
        executor.script("docker", "images", "-q", stdout="i1\ni2\ni1\n")

        report = ResourceCleanup(executor).cleanup_all("blog-v2")

        assert report.stopped == ["c1"]
        assert report.removed_containers == ["c1", "c2"]
        assert report.removed_images == ["i1", "i2"]
        assert report.failures == []

    def test_individual_failures_do_not_abort(self, executor):
        executor.script("docker", "ps", "-q", stdout="gone\nc2\n")
        executor.script("docker", "ps", "-aq", stdout="c2\n")
        executor.script("docker", "images", "-q", stdout="i1\n")
        executor.script("docker", "stop", "gone", returncode=1, stderr="No such container: gone")
        executor.script("docker", "rmi", returncode=1, stderr="image is in use")

        report = ResourceCleanup(executor).cleanup_all("blog-v2")

        assert report.stopped == ["c2"]
        assert report.removed_containers == ["c2"]
        assert report.removed_images == []
        assert len(report.failures) == 2
        assert "No such container: gone" in report.failures[0]

    def test_missing_engine_still_completes(self, make_executor):
        executor = make_executor(available=())
        executor.script("docker", returncode=127, stderr="docker: not found")

        report = ResourceCleanup(executor).cleanup_all("blog-v2")

        assert len(report.failures) == 3
        assert report.stopped == []
