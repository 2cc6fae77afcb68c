# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""Unit tests for GitHubActionsClient over httpx.MockTransport."""

import httpx
import pytest

from apk_bridge.core.builds.exceptions import UpstreamRequestError
from apk_bridge.core.builds.value_objects import ArtifactId
from apk_bridge.infra.github import GitHubActionsClient
from apk_bridge.infra.settings import GitHubCoordinates
from apk_bridge.tests.utils import BUILD_ID, generate_github_token


@pytest.fixture
def token() -> str:
    return generate_github_token()


@pytest.fixture
def coordinates(token) -> GitHubCoordinates:
    return GitHubCoordinates(
        token=token, owner="acme", repo="builds", api_url="https://api.github.test"
    )


def _client(coordinates, github_api) -> GitHubActionsClient:
    return GitHubActionsClient(coordinates, timeout_seconds=5.0, transport=github_api.transport())


class TestDispatch:
    """Tests for repository_dispatch."""

    def test_dispatch_posts_event(self, coordinates, github_api, token):
        _client(coordinates, github_api).dispatch("build-apk", {"build_id": BUILD_ID})

        request = github_api.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.github.test/repos/acme/builds/dispatches"
        assert request.headers["authorization"] == f"Bearer {token}"
        assert request.headers["accept"] == "application/vnd.github+json"
        assert request.headers["x-github-api-version"] == "2022-11-28"
        assert github_api.dispatched == [{
            "event_type": "build-apk",
            "client_payload": {"build_id": BUILD_ID},
        }]

    def test_rejection_carries_upstream_status(self, coordinates, github_api):
        github_api.dispatch_status = 422
        github_api.dispatch_message = "Invalid event_type"

        with pytest.raises(UpstreamRequestError) as exc_info:
            _client(coordinates, github_api).dispatch("build-apk", {})

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail == "Invalid event_type"

    def test_transport_failure_is_bad_gateway(self, coordinates):
        def _refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = GitHubActionsClient(coordinates, transport=httpx.MockTransport(_refuse))

        with pytest.raises(UpstreamRequestError) as exc_info:
            client.dispatch("build-apk", {})

        assert exc_info.value.status_code == 502

    def test_plain_text_error_detail(self, coordinates):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="maintenance"))
        client = GitHubActionsClient(coordinates, transport=transport)

        with pytest.raises(UpstreamRequestError) as exc_info:
            client.dispatch("build-apk", {})

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "maintenance"

    def test_tracking_url(self, coordinates, github_api):
        assert _client(coordinates, github_api).tracking_url() == (
            "https://github.com/acme/builds/actions"
        )


class TestListings:
    """Tests for run and artifact listings."""

    def test_list_workflow_runs(self, coordinates, github_api):
        github_api.add_run(11, BUILD_ID, status="in_progress", conclusion=None)

        runs = _client(coordinates, github_api).list_workflow_runs("repository_dispatch", 20)

        assert [run.run_id for run in runs] == [11]
        assert runs[0].title == f"APK build {BUILD_ID}"
        params = github_api.requests[0].url.params
        assert params["event"] == "repository_dispatch"
        assert params["per_page"] == "20"

    def test_page_size_capped(self, coordinates, github_api):
        _client(coordinates, github_api).list_workflow_runs("repository_dispatch", 500)
        assert github_api.requests[0].url.params["per_page"] == "100"

    def test_list_run_artifacts(self, coordinates, github_api):
        github_api.add_artifact(11, 901, f"apk-{BUILD_ID}", bundle=b"zip")

        artifacts = _client(coordinates, github_api).list_run_artifacts(11)

        assert [artifact.artifact_id for artifact in artifacts] == [901]
        assert artifacts[0].size_in_bytes == 3


class TestDownloadArtifact:
    """Tests for artifact bundle download."""

    def test_download_returns_bytes(self, coordinates, github_api):
        github_api.add_artifact(11, 901, "apk-x", bundle=b"PK\x03\x04bundle")

        content = _client(coordinates, github_api).download_artifact(ArtifactId("901"))

        assert content == b"PK\x03\x04bundle"
        assert github_api.requests[0].url.path == "/repos/acme/builds/actions/artifacts/901/zip"

    def test_download_follows_redirect(self, coordinates):
        def _handler(request):
            if request.url.host == "api.github.test":
                return httpx.Response(
                    302, headers={"Location": "https://blob.example.net/bundle.zip"}
                )
            assert "authorization" not in request.headers
            return httpx.Response(200, content=b"blob-bytes")

        client = GitHubActionsClient(coordinates, transport=httpx.MockTransport(_handler))

        assert client.download_artifact(ArtifactId("5")) == b"blob-bytes"

    def test_missing_artifact_is_not_found(self, coordinates, github_api):
        with pytest.raises(UpstreamRequestError) as exc_info:
            _client(coordinates, github_api).download_artifact(ArtifactId("404404"))
        assert exc_info.value.status_code == 404
