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

"""Integration tests for the /api/status endpoint."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from apk_bridge.tests.utils import BUILD_ID

STATUS_URL = "/api/status"


@pytest.mark.integration
class TestStatusEndpoint:
    """Test suite for GET /api/status."""

    def test_unknown_build_is_pending(self, cloud_client: TestClient):
        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"buildId": BUILD_ID, "status": "pending"}

    def test_old_unknown_build_is_stale(self, cloud_client: TestClient):
        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID, "staleAfter": 60})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"buildId": BUILD_ID, "status": "failed", "reason": "stale"}

    def test_running_build(self, cloud_client: TestClient, github_api):
        github_api.add_run(10, BUILD_ID, status="in_progress", conclusion=None)

        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID})

        assert response.json()["status"] == "running"

    def test_failed_build_reports_conclusion(self, cloud_client: TestClient, github_api):
        github_api.add_run(10, BUILD_ID, conclusion="failure")

        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID})

        assert response.json() == {"buildId": BUILD_ID, "status": "failed", "reason": "failure"}

    def test_completed_build_reports_artifact(self, cloud_client: TestClient, github_api):
        github_api.add_run(10, BUILD_ID)
        github_api.add_artifact(10, 4242, f"apk-{BUILD_ID}")

        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID})

        assert response.json() == {
            "buildId": BUILD_ID,
            "status": "completed",
            "artifactId": "4242",
        }

    def test_missing_build_id_returns_400(self, cloud_client: TestClient):
        response = cloud_client.get(STATUS_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"success": False, "error": "Missing buildId"}

    def test_malformed_build_id_returns_400(self, cloud_client: TestClient):
        response = cloud_client.get(STATUS_URL, params={"buildId": "not-a-build"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_negative_stale_after_returns_400(self, cloud_client: TestClient):
        response = cloud_client.get(STATUS_URL, params={"buildId": BUILD_ID, "staleAfter": -1})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unconfigured_server_returns_500(self, unconfigured_client: TestClient):
        response = unconfigured_client.get(STATUS_URL, params={"buildId": BUILD_ID})
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
