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

"""GitHub Actions REST client.

Implements the dispatch and artifact ports on top of ``httpx``. Every call
opens a short-lived client; nothing is cached between calls, and no call
is retried.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from apk_bridge.core.builds.entities import WorkflowArtifact, WorkflowRun
from apk_bridge.core.builds.exceptions import UpstreamRequestError
from apk_bridge.core.builds.value_objects import ArtifactId
from apk_bridge.infra.settings import GitHubCoordinates

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
MAX_PAGE_SIZE = 100
TRANSPORT_FAILURE_STATUS = 502


class GitHubActionsClient:
    """Client for the repository's Actions endpoints."""

    def __init__(
        self,
        coordinates: GitHubCoordinates,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            coordinates: Token and repository address.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self._coordinates = coordinates
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    @property
    def repo_path(self) -> str:
        return f"/repos/{self._coordinates.owner}/{self._coordinates.repo}"

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self._coordinates.api_url,
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self._coordinates.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and raise on any non-success answer."""
        try:
            with self._client() as client:
                response = client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s could not reach GitHub: %s", operation, exc)
            raise UpstreamRequestError(
                TRANSPORT_FAILURE_STATUS, operation, detail=str(exc)
            ) from exc

        if not response.is_success:
            detail = _error_detail(response)
            logger.error(
                "%s failed: status=%d detail=%s",
                operation, response.status_code, detail,
            )
            raise UpstreamRequestError(response.status_code, operation, detail=detail)
        return response

    def dispatch(self, event_type: str, payload: Dict[str, Any]) -> None:
        """Fire a repository_dispatch event.

        GitHub answers 204 with no body; the run appears later.
        """
        self._request(
            "POST",
            f"{self.repo_path}/dispatches",
            "Workflow dispatch",
            json={"event_type": event_type, "client_payload": payload},
        )
        logger.info("Dispatched %s event to %s", event_type, self.repo_path)

    def tracking_url(self) -> str:
        return self._coordinates.web_url

    def list_workflow_runs(self, event: str, limit: int) -> List[WorkflowRun]:
        """List the most recent runs triggered by event, newest first."""
        response = self._request(
            "GET",
            f"{self.repo_path}/actions/runs",
            "List workflow runs",
            params={"event": event, "per_page": max(1, min(limit, MAX_PAGE_SIZE))},
        )
        return [
            WorkflowRun.from_api(item)
            for item in response.json().get("workflow_runs", [])
        ]

    def list_run_artifacts(self, run_id: int) -> List[WorkflowArtifact]:
        """List the artifacts uploaded by a run."""
        response = self._request(
            "GET",
            f"{self.repo_path}/actions/runs/{run_id}/artifacts",
            "List run artifacts",
            params={"per_page": MAX_PAGE_SIZE},
        )
        return [
            WorkflowArtifact.from_api(item)
            for item in response.json().get("artifacts", [])
        ]

    def download_artifact(self, artifact_id: ArtifactId) -> bytes:
        """Download an artifact's zip bundle into memory.

        GitHub redirects to blob storage; httpx drops the Authorization
        header when the redirect leaves the API origin.
        """
        response = self._request(
            "GET",
            f"{self.repo_path}/actions/artifacts/{artifact_id}/zip",
            "Artifact download",
        )
        logger.info(
            "Downloaded artifact %s (%d bytes)", artifact_id, len(response.content)
        )
        return response.content


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""
