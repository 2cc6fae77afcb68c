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

"""Wiring of build use cases for the HTTP layer.

Use cases are assembled per call so that configuration for a build path
is only demanded when that path is used: a missing CI token surfaces as a
ConfigurationError on the first remote request, never at import time.
"""

import logging
from typing import Optional

import httpx

from apk_bridge.core.builds.ports import (
    BuildIdGenerator,
    IconServerFactory,
    PackageBuilder,
    UUIDGenerator,
)
from apk_bridge.core.builds.value_objects import CorrelationId
from apk_bridge.infra.github import GitHubActionsClient, GitHubRunScanner
from apk_bridge.infra.icon_server import serve_icon
from apk_bridge.infra.id_generator import UUIDv4Generator, UUIDv7Generator
from apk_bridge.infra.settings import BuildSettings
from apk_bridge.infra.toolchain import BubblewrapPackageBuilder
from apk_bridge.infra.workspace import BuildWorkspace
from apk_bridge.orchestrator.builds.use_cases import (
    FetchLocalPackageUseCase,
    LocalBuildRunner,
    PollBuildStatusUseCase,
    RemoteBuildDispatcher,
    RetrieveArtifactUseCase,
    SubmitBuildUseCase,
)

logger = logging.getLogger(__name__)


class BuildService:  # pylint: disable=too-many-instance-attributes
    """Factory for build use cases bound to one settings instance."""

    def __init__(
        self,
        settings: BuildSettings,
        id_generator: Optional[BuildIdGenerator] = None,
        uuid_generator: Optional[UUIDGenerator] = None,
        workspace: Optional[BuildWorkspace] = None,
        package_builder: Optional[PackageBuilder] = None,
        icon_server: IconServerFactory = serve_icon,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Process configuration.
            id_generator: Build id generator. Defaults to UUID v7.
            uuid_generator: Correlation id generator. Defaults to UUID v4.
            workspace: Working directory owner. Defaults to settings root.
            package_builder: Packaging capability. Defaults to Bubblewrap,
                created on first local build.
            icon_server: Loopback icon endpoint factory.
            transport: Optional httpx transport for the GitHub client.
        """
        self.settings = settings
        self._id_generator = id_generator or UUIDv7Generator()
        self._uuid_generator = uuid_generator or UUIDv4Generator()
        self._workspace = workspace or BuildWorkspace(settings.workspace_root)
        self._package_builder = package_builder
        self._icon_server = icon_server
        self._transport = transport

    def correlation_id(self, supplied: Optional[str] = None) -> CorrelationId:
        """Return the caller's correlation id or a fresh one.

        Raises:
            ValueError: If a supplied id is blank or too long.
        """
        if supplied is not None:
            return CorrelationId(supplied)
        return CorrelationId(str(self._uuid_generator.generate()))

    def submit_build(self) -> SubmitBuildUseCase:
        return SubmitBuildUseCase(
            settings=self.settings,
            workspace=self._workspace,
            id_generator=self._id_generator,
            local_runner=self._local_runner,
            remote_dispatcher=self._remote_dispatcher,
        )

    def poll_build_status(self) -> PollBuildStatusUseCase:
        """Raises ConfigurationError when CI coordinates are missing."""
        return PollBuildStatusUseCase(
            GitHubRunScanner(
                self._github_client(),
                scan_limit=self.settings.run_scan_limit,
                artifact_name_prefix=self.settings.artifact_name_prefix,
            )
        )

    def retrieve_artifact(self) -> RetrieveArtifactUseCase:
        """Raises ConfigurationError when CI coordinates are missing."""
        return RetrieveArtifactUseCase(self._github_client())

    def fetch_local_package(self) -> FetchLocalPackageUseCase:
        return FetchLocalPackageUseCase(self._workspace)

    def _github_client(self) -> GitHubActionsClient:
        return GitHubActionsClient(
            self.settings.require_remote(),
            timeout_seconds=self.settings.http_timeout_seconds,
            transport=self._transport,
        )

    def _local_runner(self) -> LocalBuildRunner:
        paths = self.settings.require_local()
        if self._package_builder is None:
            self._package_builder = BubblewrapPackageBuilder(
                paths, keystore_password=self.settings.keystore_password
            )
            logger.info("Using Bubblewrap toolchain at %s", paths.android_sdk_root)
        return LocalBuildRunner(
            settings=self.settings,
            package_builder=self._package_builder,
            workspace=self._workspace,
            icon_server=self._icon_server,
        )

    def _remote_dispatcher(self) -> RemoteBuildDispatcher:
        return RemoteBuildDispatcher(
            dispatcher=self._github_client(),
            id_generator=self._id_generator,
            event_type=self.settings.dispatch_event_type,
        )
