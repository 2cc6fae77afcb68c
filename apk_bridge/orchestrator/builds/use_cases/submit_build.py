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

"""SubmitBuild use case implementation (build coordinator)."""

import logging
from datetime import timedelta
from typing import Callable

from apk_bridge.core.builds.entities import BuildJob, BuildRequest
from apk_bridge.core.builds.exceptions import ToolchainError
from apk_bridge.core.builds.ports import BuildIdGenerator
from apk_bridge.core.builds.value_objects import BuildMode
from apk_bridge.infra.settings import BuildSettings
from apk_bridge.infra.workspace import BuildWorkspace

from ..commands import SubmitBuildCommand
from ..dtos import BuildSubmissionResponse
from .dispatch_remote_build import RemoteBuildDispatcher
from .run_local_build import LocalBuildRunner

logger = logging.getLogger(__name__)


class SubmitBuildUseCase:
    """Use case for accepting a build request and choosing where it runs.

    This use case orchestrates submission with the following guarantees:
    - Path selection: decided from the toolchain capability flag before
      anything runs; a local failure never falls back to remote
    - Single outcome: either a completed local build or a dispatched
      remote build is returned, never both
    - Scoped working area: the icon is written under the build id and the
      working area is discarded when a local build fails or once a remote
      dispatch has been sent; finished local builds are kept for download
      until the retention period passes and are pruned on a later submission

    Attributes:
        settings: Process configuration.
        workspace: Owner of per-build working directories.
        id_generator: Build identifier generator.
        local_runner: Provider of the local build runner.
        remote_dispatcher: Provider of the remote build dispatcher.
    """

    def __init__(
        self,
        settings: BuildSettings,
        workspace: BuildWorkspace,
        id_generator: BuildIdGenerator,
        local_runner: Callable[[], LocalBuildRunner],
        remote_dispatcher: Callable[[], RemoteBuildDispatcher],
    ) -> None:
        """Initialize use case with its collaborators.

        Runners are passed as providers so that configuration for a path
        is only demanded when that path is taken.
        """
        self._settings = settings
        self._workspace = workspace
        self._id_generator = id_generator
        self._local_runner = local_runner
        self._remote_dispatcher = remote_dispatcher

    def execute(self, command: SubmitBuildCommand) -> BuildSubmissionResponse:
        """Execute build submission.

        Args:
            command: SubmitBuild command with request details.

        Returns:
            BuildSubmissionResponse for a completed or dispatched build.

        Raises:
            ConfigurationError: If the selected path is not configured.
            ToolchainError: If the local packaging pipeline fails.
            UpstreamRequestError: If the CI system rejects the dispatch.
        """
        request = BuildRequest(
            application_name=command.application_name,
            target_url=command.target_url,
            icon=command.icon,
            correlation_id=command.correlation_id,
        )
        job = BuildJob(build_id=self._id_generator.generate(), mode=self._select_mode())
        logger.info(
            "Build %s submitted in %s mode (correlation_id=%s)",
            job.build_id, job.mode.value, command.correlation_id,
        )

        if job.mode is BuildMode.LOCAL:
            return self._run_local(job, request)
        return self._dispatch_remote(job, request)

    def _select_mode(self) -> BuildMode:
        if self._settings.local_toolchain_available:
            return BuildMode.LOCAL
        return BuildMode.REMOTE

    def _run_local(self, job: BuildJob, request: BuildRequest) -> BuildSubmissionResponse:
        runner = self._local_runner()
        self._workspace.prune(timedelta(seconds=self._settings.local_retention_seconds))
        self._workspace.store_icon(job.build_id, request.icon)
        job.start()
        try:
            result = runner.run(request, job.build_id)
        except ToolchainError as exc:
            job.fail(exc.stage)
            self._workspace.discard(job.build_id)
            raise
        except Exception:
            self._workspace.discard(job.build_id)
            raise

        job.complete()
        return BuildSubmissionResponse.from_completed(job, result)

    def _dispatch_remote(self, job: BuildJob, request: BuildRequest) -> BuildSubmissionResponse:
        dispatcher = self._remote_dispatcher()
        self._workspace.store_icon(job.build_id, request.icon)
        try:
            dispatcher.dispatch(request, job.build_id)
        finally:
            self._workspace.discard(job.build_id)
        return BuildSubmissionResponse.from_dispatched(job, dispatcher.tracking_url())
