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

"""Build response DTOs."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class BuildSubmissionResponse:
    """Response DTO for a build submission.

    Exactly one of two shapes is produced: a completed local build
    (package_id and sha256_fingerprint set) or a dispatched remote build
    (tracking_url set).

    Attributes:
        build_id: Unique build identifier.
        mode: ``local`` or ``cloud``.
        job_state: Lifecycle state when the response was produced.
        created_at: Job creation timestamp (ISO 8601).
        package_id: Android application identifier (local only).
        sha256_fingerprint: Signing certificate fingerprint (local only).
        tracking_url: Where the remote run can be watched (cloud only).
    """

    build_id: str
    mode: str
    job_state: str
    created_at: str
    package_id: Optional[str] = None
    sha256_fingerprint: Optional[str] = None
    tracking_url: Optional[str] = None

    @property
    def is_dispatched(self) -> bool:
        return self.tracking_url is not None

    @staticmethod
    def from_completed(job, result) -> "BuildSubmissionResponse":
        """Create response DTO from a completed local job and its result."""
        return BuildSubmissionResponse(
            build_id=str(job.build_id),
            mode=job.mode.value,
            job_state=job.state.value,
            created_at=job.created_at.isoformat(),
            package_id=str(result.package_id),
            sha256_fingerprint=str(result.certificate_fingerprint),
        )

    @staticmethod
    def from_dispatched(job, tracking_url: str) -> "BuildSubmissionResponse":
        """Create response DTO from a dispatched remote job."""
        return BuildSubmissionResponse(
            build_id=str(job.build_id),
            mode=job.mode.value,
            job_state=job.state.value,
            created_at=job.created_at.isoformat(),
            tracking_url=tracking_url,
        )


@dataclass(frozen=True)
class BuildStatusResponse:
    """Response DTO for a status poll.

    Attributes:
        build_id: Build that was resolved.
        status: pending, running, completed or failed.
        artifact_id: Retrieval id once completed.
        reason: Failure reason once failed.
    """

    build_id: str
    status: str
    artifact_id: Optional[str] = None
    reason: Optional[str] = None

    @staticmethod
    def from_entity(job) -> "BuildStatusResponse":
        return BuildStatusResponse(
            build_id=str(job.build_id),
            status=job.state.value,
            artifact_id=str(job.artifact_id) if job.artifact_id else None,
            reason=job.failure_reason,
        )


@dataclass(frozen=True)
class ArtifactPayload:
    """In-memory package extracted from an artifact bundle."""

    filename: str
    media_type: str
    content: bytes

    @property
    def content_length(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class LocalPackageResponse:
    """Signed package produced by a local build."""

    path: Path
    filename: str
    media_type: str
