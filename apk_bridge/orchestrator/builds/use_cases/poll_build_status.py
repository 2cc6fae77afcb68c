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

"""PollBuildStatus use case implementation (job status resolver)."""

import logging
from datetime import datetime, timezone
from typing import Callable

from apk_bridge.core.builds.entities import BuildJob
from apk_bridge.core.builds.ports import BuildStatusSource
from apk_bridge.core.builds.value_objects import ArtifactId, BuildMode

from ..commands import PollBuildCommand
from ..dtos import BuildStatusResponse

logger = logging.getLogger(__name__)

STALE_REASON = "stale"
MISSING_ARTIFACT_REASON = "artifact_missing"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PollBuildStatusUseCase:
    """Use case for resolving a remote build's state from the CI system.

    Each call rebuilds the job from what the CI system reports and keeps
    nothing between calls, so repeated polls against an unchanged
    upstream return the same answer. A build that cannot be found yet is
    pending, not failed; it only fails on an explicit unsuccessful
    conclusion or when the caller's staleness bound has passed.

    Attributes:
        status_source: Port locating runs and artifacts.
        clock: Returns the current UTC time.
    """

    def __init__(
        self,
        status_source: BuildStatusSource,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._status_source = status_source
        self._clock = clock

    def execute(self, command: PollBuildCommand) -> BuildStatusResponse:
        """Resolve the current state of a build.

        Args:
            command: PollBuild command.

        Returns:
            BuildStatusResponse with status and, once completed, artifact id.

        Raises:
            UpstreamRequestError: If the CI system cannot be queried.
        """
        build_id = command.build_id
        job = BuildJob(
            build_id=build_id,
            mode=BuildMode.REMOTE,
            created_at=build_id.issued_at(),
        )

        run = self._status_source.find_run(build_id)
        if run is None:
            if self._is_stale(job, command):
                job.start()
                job.fail(STALE_REASON)
                logger.warning("Build %s has no run after %s", build_id, command.stale_after)
            return BuildStatusResponse.from_entity(job)

        job.start()
        if not run.is_finished():
            return BuildStatusResponse.from_entity(job)

        if not run.succeeded():
            job.fail(run.conclusion or "unknown")
            logger.info("Build %s run %d concluded %s", build_id, run.run_id, run.conclusion)
            return BuildStatusResponse.from_entity(job)

        artifact = self._status_source.find_artifact(run, build_id)
        if artifact is None:
            job.fail(MISSING_ARTIFACT_REASON)
            logger.warning("Build %s run %d succeeded without an artifact", build_id, run.run_id)
        else:
            job.complete(ArtifactId(str(artifact.artifact_id)))
            logger.info("Build %s completed with artifact %s", build_id, artifact.artifact_id)
        return BuildStatusResponse.from_entity(job)

    def _is_stale(self, job: BuildJob, command: PollBuildCommand) -> bool:
        if command.stale_after is None:
            return False
        return self._clock() - job.created_at > command.stale_after
