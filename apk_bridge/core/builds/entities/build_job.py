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

"""BuildJob aggregate root entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..exceptions import InvalidStateTransitionError, TerminalStateViolationError
from ..value_objects import ArtifactId, BuildId, BuildMode, JobState


@dataclass
class BuildJob:
    """BuildJob aggregate root.

    Tracks one build through its lifecycle. A job lives only for the
    duration of a submit or poll cycle; for remote builds the CI system
    is the source of truth and the job is rebuilt from its observations.

    Attributes:
        build_id: Unique build identifier.
        mode: Local or remote execution.
        state: Current lifecycle state.
        created_at: Job creation timestamp.
        updated_at: Last modification timestamp.
        artifact_id: Retrieval id, set once a remote build completes.
        failure_reason: Short reason, set once the job fails.
    """

    build_id: BuildId
    mode: BuildMode
    state: JobState = JobState.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    artifact_id: Optional[ArtifactId] = None
    failure_reason: Optional[str] = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.updated_at is None:
            self.updated_at = self.created_at

    def _validate_transition(
        self,
        allowed_states: set[JobState],
        target_state: JobState
    ) -> None:
        """Validate state transition is allowed.

        Args:
            allowed_states: States from which transition is valid.
            target_state: Desired target state.

        Raises:
            TerminalStateViolationError: If in terminal state.
            InvalidStateTransitionError: If transition invalid.
        """
        if self.state.is_terminal():
            raise TerminalStateViolationError(
                build_id=str(self.build_id),
                state=self.state.value
            )

        if self.state not in allowed_states:
            raise InvalidStateTransitionError(
                build_id=str(self.build_id),
                from_state=self.state.value,
                to_state=target_state.value
            )

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    def start(self) -> None:
        """Transition job from PENDING to RUNNING.

        Raises:
            InvalidStateTransitionError: If not in PENDING state.
            TerminalStateViolationError: If in terminal state.
        """
        self._validate_transition({JobState.PENDING}, JobState.RUNNING)
        self.state = JobState.RUNNING
        self._touch()

    def complete(self, artifact_id: Optional[ArtifactId] = None) -> None:
        """Transition job to COMPLETED state.

        Args:
            artifact_id: Retrieval id of the finished bundle (remote builds).

        Raises:
            InvalidStateTransitionError: If not in RUNNING state.
            TerminalStateViolationError: If already in terminal state.
        """
        self._validate_transition({JobState.RUNNING}, JobState.COMPLETED)
        self.state = JobState.COMPLETED
        self.artifact_id = artifact_id
        self._touch()

    def fail(self, reason: str) -> None:
        """Transition job to FAILED state.

        Args:
            reason: Short description of why the job failed.

        Raises:
            InvalidStateTransitionError: If not in RUNNING state.
            TerminalStateViolationError: If already in terminal state.
        """
        self._validate_transition({JobState.RUNNING}, JobState.FAILED)
        self.state = JobState.FAILED
        self.failure_reason = reason
        self._touch()

    def is_completed(self) -> bool:
        """Check if job is in COMPLETED state."""
        return self.state == JobState.COMPLETED

    def is_failed(self) -> bool:
        """Check if job is in FAILED state."""
        return self.state == JobState.FAILED
