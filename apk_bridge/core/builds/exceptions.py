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

"""Domain exceptions for Build aggregate."""

from typing import Iterable, Optional


class BuildDomainError(Exception):
    """Base exception for all build domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ConfigurationError(BuildDomainError):
    """Required configuration is missing for the selected build path."""

    def __init__(
        self,
        missing: Iterable[str],
        context: str = "build",
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            missing: Names of the absent configuration values.
            context: Which build path required them.
            correlation_id: Optional correlation ID for tracing.
        """
        self.missing = tuple(missing)
        super().__init__(
            f"Server configuration missing for {context}: {', '.join(self.missing)}",
            correlation_id=correlation_id
        )
        self.context = context


class UpstreamRequestError(BuildDomainError):
    """Remote CI system answered with a non-success status."""

    def __init__(
        self,
        status_code: int,
        operation: str,
        detail: str = "",
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize upstream request error.

        Args:
            status_code: HTTP status returned by the remote system.
            operation: Short description of the failed call.
            detail: Optional message returned by the remote system.
            correlation_id: Optional correlation ID for tracing.
        """
        message = f"{operation} failed with status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, correlation_id=correlation_id)
        self.status_code = status_code
        self.operation = operation
        self.detail = detail


class NotFoundError(BuildDomainError):
    """An expected entity is absent."""


class ArtifactNotFoundError(NotFoundError):
    """Artifact bundle holds no installable package entry."""

    def __init__(
        self,
        artifact_id: str,
        extension: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize artifact not found error.

        Args:
            artifact_id: The artifact that was inspected.
            extension: File extension that was searched for.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"No {extension} entry found in artifact {artifact_id}",
            correlation_id=correlation_id
        )
        self.artifact_id = artifact_id
        self.extension = extension


class PackageNotFoundError(NotFoundError):
    """No signed package exists for a local build."""

    def __init__(self, build_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize package not found error.

        Args:
            build_id: The build whose package was requested.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"No signed package found for build {build_id}",
            correlation_id=correlation_id
        )
        self.build_id = build_id


class InvalidArtifactBundleError(BuildDomainError):
    """Artifact bundle is unreadable or violates the single-package invariant."""

    def __init__(
        self,
        artifact_id: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize invalid bundle error.

        Args:
            artifact_id: The artifact that was inspected.
            reason: What is wrong with the bundle.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid artifact bundle {artifact_id}: {reason}",
            correlation_id=correlation_id
        )
        self.artifact_id = artifact_id
        self.reason = reason


class ToolchainError(BuildDomainError):
    """Local packaging pipeline failed at one of its stages."""

    def __init__(
        self,
        stage: str,
        cause: BaseException,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize toolchain error.

        Args:
            stage: Pipeline stage that failed.
            cause: Underlying exception raised by the toolchain.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Packaging failed during {stage}: {cause}",
            correlation_id=correlation_id
        )
        self.stage = stage
        self.cause = cause


class InvalidStateTransitionError(BuildDomainError):
    """Attempted state transition is not valid."""

    def __init__(
        self,
        build_id: str,
        from_state: str,
        to_state: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            build_id: Identifier of the build job.
            from_state: Current state.
            to_state: Attempted target state.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid build state transition for {build_id}: "
            f"{from_state} -> {to_state}",
            correlation_id=correlation_id
        )
        self.build_id = build_id
        self.from_state = from_state
        self.to_state = to_state


class TerminalStateViolationError(BuildDomainError):
    """Attempted to modify a build job in a terminal state."""

    def __init__(
        self,
        build_id: str,
        state: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize terminal state violation error.

        Args:
            build_id: Identifier of the build job.
            state: Current terminal state.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Cannot modify build {build_id} in terminal state: {state}",
            correlation_id=correlation_id
        )
        self.build_id = build_id
        self.state = state
