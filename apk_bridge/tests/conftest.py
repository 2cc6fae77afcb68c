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

"""Shared pytest fixtures for APK Bridge tests.

API fixtures swap the build service behind the routes for one wired to
in-memory fakes, so no test touches a real toolchain or GitHub.
"""

from pathlib import Path
from typing import Generator

import pytest

from apk_bridge.core.builds.value_objects import (
    ApplicationName,
    BuildId,
    CorrelationId,
    IconImage,
    TargetUrl,
)
from apk_bridge.infra.settings import BuildSettings
from apk_bridge.infra.workspace import BuildWorkspace
from apk_bridge.tests.mocks.fake_github import FakeGitHubApi
from apk_bridge.tests.mocks.fake_id_generator import SequenceBuildIdGenerator
from apk_bridge.tests.mocks.fake_toolchain import FakeIconServer, FakePackageBuilder
from apk_bridge.tests.utils import BUILD_ID, PNG_BYTES, generate_github_token

_APP = None


def _get_app():
    """Lazy import of FastAPI app."""
    global _APP
    if _APP is None:
        from apk_bridge.main import app  # noqa: PLC0415
        _APP = app
    return _APP


SETTINGS_ENV_VARS = (
    "APK_BRIDGE_CONFIG",
    "APK_BRIDGE_LOCAL_TOOLCHAIN",
    "APK_BRIDGE_WORKSPACE",
    "APK_BRIDGE_BUBBLEWRAP",
    "APK_BRIDGE_KEYSTORE_ALIAS",
    "APK_BRIDGE_KEYSTORE_PASSWORD",
    "APK_BRIDGE_DISPATCH_EVENT",
    "APK_BRIDGE_RUN_SCAN_LIMIT",
    "APK_BRIDGE_ARTIFACT_PREFIX",
    "APK_BRIDGE_PACKAGE_PREFIX",
    "APK_BRIDGE_HTTP_TIMEOUT",
    "APK_BRIDGE_LOG_LEVEL",
    "APK_BRIDGE_LOCAL_RETENTION",
    "JAVA_HOME",
    "ANDROID_HOME",
    "ANDROID_SDK_ROOT",
    "GITHUB_PAT",
    "GITHUB_OWNER",
    "GITHUB_REPO",
    "GITHUB_API_URL",
    "VERCEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings_environment(monkeypatch):
    """Keep the host's environment out of settings built during a test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def build_id() -> BuildId:
    return BuildId(BUILD_ID)


@pytest.fixture
def correlation_id() -> CorrelationId:
    return CorrelationId("corr-0001")


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def icon() -> IconImage:
    return IconImage(PNG_BYTES)


@pytest.fixture
def app_name() -> ApplicationName:
    return ApplicationName("My Shop")


@pytest.fixture
def target_url() -> TargetUrl:
    return TargetUrl("https://shop.example.com/home")


@pytest.fixture
def id_generator() -> SequenceBuildIdGenerator:
    return SequenceBuildIdGenerator(BUILD_ID)


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    return tmp_path / "workspace"


@pytest.fixture
def workspace(workspace_root: Path) -> BuildWorkspace:
    return BuildWorkspace(workspace_root)


@pytest.fixture
def local_settings(workspace_root: Path) -> BuildSettings:
    """Settings for a host with the native toolchain installed."""
    return BuildSettings(
        local_toolchain_available=True,
        workspace_root=workspace_root,
        java_home="/opt/jdk",
        android_sdk_root="/opt/android-sdk",
    )


@pytest.fixture
def remote_settings(workspace_root: Path) -> BuildSettings:
    """Settings for a host that delegates builds to GitHub Actions."""
    return BuildSettings(
        local_toolchain_available=False,
        workspace_root=workspace_root,
        github_token=generate_github_token(),
        github_owner="acme",
        github_repo="builds",
        github_api_url="https://api.github.test",
    )


@pytest.fixture
def package_builder() -> FakePackageBuilder:
    return FakePackageBuilder()


@pytest.fixture
def icon_server() -> FakeIconServer:
    return FakeIconServer()


@pytest.fixture
def github_api() -> FakeGitHubApi:
    return FakeGitHubApi()


def _client_with_service(service) -> Generator:
    from fastapi.testclient import TestClient  # noqa: PLC0415
    from apk_bridge.api.builds import routes as build_routes  # noqa: PLC0415

    app = _get_app()
    original_service = build_routes._build_service  # noqa: W0212
    build_routes._build_service = service

    with TestClient(app) as client:
        yield client

    build_routes._build_service = original_service


@pytest.fixture
def local_client(local_settings, package_builder, icon_server, id_generator) -> Generator:
    """TestClient whose builds run on the fake local toolchain."""
    from apk_bridge.api.builds.service import BuildService  # noqa: PLC0415

    service = BuildService(
        local_settings,
        id_generator=id_generator,
        package_builder=package_builder,
        icon_server=icon_server,
    )
    yield from _client_with_service(service)


@pytest.fixture
def cloud_client(remote_settings, github_api, id_generator) -> Generator:
    """TestClient whose builds are dispatched to the fake GitHub API."""
    from apk_bridge.api.builds.service import BuildService  # noqa: PLC0415

    service = BuildService(
        remote_settings,
        id_generator=id_generator,
        transport=github_api.transport(),
    )
    yield from _client_with_service(service)


@pytest.fixture
def unconfigured_client(workspace_root) -> Generator:
    """TestClient with neither the local toolchain nor GitHub configured."""
    from apk_bridge.api.builds.service import BuildService  # noqa: PLC0415

    service = BuildService(
        BuildSettings(local_toolchain_available=False, workspace_root=workspace_root)
    )
    yield from _client_with_service(service)
