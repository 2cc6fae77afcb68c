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

"""Build status source that scans recent workflow runs.

GitHub cannot query runs by a custom id, so the workflow names its run
after the build id (``run-name: APK build <build_id>``) and names its
artifact ``<prefix><build_id>``. This source matches on those names.
"""

import logging
from typing import Optional

from apk_bridge.core.builds.entities import WorkflowArtifact, WorkflowRun
from apk_bridge.core.builds.value_objects import BuildId

from .client import GitHubActionsClient

logger = logging.getLogger(__name__)

# Runs started through the dispatches endpoint report this event, whatever
# custom event_type the payload carried.
TRIGGER_EVENT = "repository_dispatch"


class GitHubRunScanner:
    """Locate the run and artifact of a build among recent runs."""

    def __init__(
        self,
        client: GitHubActionsClient,
        scan_limit: int = 20,
        artifact_name_prefix: str = "apk-",
    ) -> None:
        """Initialize the scanner.

        Args:
            client: GitHub Actions client.
            scan_limit: Number of most recent runs inspected per lookup.
            artifact_name_prefix: Artifact name prefix preceding the build id.
        """
        self._client = client
        self._scan_limit = scan_limit
        self._artifact_name_prefix = artifact_name_prefix

    def artifact_name(self, build_id: BuildId) -> str:
        return f"{self._artifact_name_prefix}{build_id}"

    def find_run(self, build_id: BuildId) -> Optional[WorkflowRun]:
        runs = self._client.list_workflow_runs(TRIGGER_EVENT, self._scan_limit)
        for run in runs:
            if str(build_id) in run.title:
                logger.debug("Build %s matched run %d", build_id, run.run_id)
                return run
        logger.debug("Build %s not among %d recent runs", build_id, len(runs))
        return None

    def find_artifact(
        self,
        run: WorkflowRun,
        build_id: BuildId,
    ) -> Optional[WorkflowArtifact]:
        expected = self.artifact_name(build_id)
        for artifact in self._client.list_run_artifacts(run.run_id):
            if artifact.name != expected:
                continue
            if artifact.expired:
                logger.warning("Artifact %s of run %d has expired", expected, run.run_id)
                continue
            return artifact
        return None
