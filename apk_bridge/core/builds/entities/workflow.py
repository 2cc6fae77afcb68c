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

"""Read-only snapshots of remote CI records."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WorkflowRun:
    """A workflow run as reported by the CI system.

    Attributes:
        run_id: Numeric run identifier.
        title: Display title of the run (carries the build id).
        status: CI-native status (queued, in_progress, completed, ...).
        conclusion: CI-native conclusion once completed.
        html_url: Link to the run page.
    """

    run_id: int
    title: str
    status: str
    conclusion: Optional[str] = None
    html_url: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "WorkflowRun":
        """Create snapshot from a GitHub workflow run payload."""
        return cls(
            run_id=int(data["id"]),
            title=data.get("display_title") or data.get("name") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion"),
            html_url=data.get("html_url") or "",
        )

    def is_finished(self) -> bool:
        """Check if the CI has finished executing the run."""
        return self.status == "completed"

    def succeeded(self) -> bool:
        """Check if the run finished successfully."""
        return self.is_finished() and self.conclusion == "success"


@dataclass(frozen=True)
class WorkflowArtifact:
    """An artifact uploaded by a workflow run.

    Attributes:
        artifact_id: Numeric artifact identifier.
        name: Artifact name.
        size_in_bytes: Compressed bundle size.
        expired: True once the CI retention period has passed.
    """

    artifact_id: int
    name: str
    size_in_bytes: int = 0
    expired: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "WorkflowArtifact":
        """Create snapshot from a GitHub artifact payload."""
        return cls(
            artifact_id=int(data["id"]),
            name=data.get("name") or "",
            size_in_bytes=int(data.get("size_in_bytes") or 0),
            expired=bool(data.get("expired", False)),
        )
