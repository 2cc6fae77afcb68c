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

"""Value objects for Build domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar
from urllib.parse import urlparse


@dataclass(frozen=True)
class BuildId:
    """UUID v7 identifier for a build job.

    The leading 48 bits carry the issue time in milliseconds, which lets
    pollers reason about job age without any local persistence.

    Attributes:
        value: String representation of UUID v7.

    Raises:
        ValueError: If value does not match UUID v7 pattern or exceeds length.
    """

    value: str

    UUID_V7_PATTERN: ClassVar[str] = (
        r'^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$'
    )
    MAX_LENGTH: ClassVar[int] = 36

    def __post_init__(self) -> None:
        """Validate UUID v7 format and length."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"BuildId length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not re.match(self.UUID_V7_PATTERN, self.value):
            raise ValueError(f"Invalid UUID v7 format: {self.value}")

    @property
    def hex(self) -> str:
        """Return the identifier without separators."""
        return self.value.replace("-", "")

    def issued_at(self) -> datetime:
        """Return the timestamp embedded in the identifier."""
        timestamp_ms = int(self.hex[:12], 16)
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class CorrelationId:
    """Opaque identifier for request tracing.

    Attributes:
        value: Caller-supplied or generated correlation token.

    Raises:
        ValueError: If value is empty or exceeds length.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 128

    def __post_init__(self) -> None:
        """Validate correlation ID is not empty and within length limit."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"CorrelationId length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not self.value or not self.value.strip():
            raise ValueError("Correlation ID cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ApplicationName:
    """Display name of the generated application.

    Raises:
        ValueError: If value is blank or exceeds length.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 20
    LAUNCHER_LENGTH: ClassVar[int] = 12

    def __post_init__(self) -> None:
        """Validate name is not blank and within length limit."""
        if not self.value or not self.value.strip():
            raise ValueError("Application name cannot be empty")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"Application name cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )

    @property
    def launcher_name(self) -> str:
        """Short name shown under the launcher icon."""
        return self.value[:self.LAUNCHER_LENGTH]

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class TargetUrl:
    """Absolute http(s) URL wrapped by the generated application.

    Raises:
        ValueError: If value is not an absolute http or https URL.
    """

    value: str

    ALLOWED_SCHEMES: ClassVar[frozenset] = frozenset({"http", "https"})
    MAX_LENGTH: ClassVar[int] = 2048

    def __post_init__(self) -> None:
        """Validate scheme and host."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"URL length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        parsed = urlparse(self.value)
        if parsed.scheme not in self.ALLOWED_SCHEMES or not parsed.hostname:
            raise ValueError(f"Invalid absolute URL: {self.value}")

    @property
    def host(self) -> str:
        """Hostname component of the URL."""
        return urlparse(self.value).hostname or ""

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class IconImage:
    """PNG image bytes used as the launcher icon.

    Raises:
        ValueError: If content is empty, too large or not a PNG.
    """

    content: bytes

    PNG_SIGNATURE: ClassVar[bytes] = b"\x89PNG\r\n\x1a\n"
    MAX_SIZE: ClassVar[int] = 5 * 1024 * 1024

    def __post_init__(self) -> None:
        """Validate PNG signature and size."""
        if not self.content:
            raise ValueError("Icon image cannot be empty")
        if len(self.content) > self.MAX_SIZE:
            raise ValueError(
                f"Icon image cannot exceed {self.MAX_SIZE} bytes, "
                f"got {len(self.content)}"
            )
        if not self.content.startswith(self.PNG_SIGNATURE):
            raise ValueError("Icon image must be a PNG file")

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PackageId:
    """Android application identifier (e.g. com.example.app).

    Raises:
        ValueError: If value is not a valid Java-style package name.
    """

    value: str

    PACKAGE_PATTERN: ClassVar[str] = r'^[a-zA-Z][a-zA-Z0-9_]*(\.[a-zA-Z][a-zA-Z0-9_]*)+$'
    MAX_LENGTH: ClassVar[int] = 255

    def __post_init__(self) -> None:
        """Validate package name format and length."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"PackageId length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not re.match(self.PACKAGE_PATTERN, self.value):
            raise ValueError(f"Invalid Android package name: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class CertificateFingerprint:
    """SHA-256 fingerprint of a signing certificate in colon-hex form.

    Attributes:
        value: 32 upper-case hex pairs separated by colons.

    Raises:
        ValueError: If value is not a colon-hex SHA-256 digest.
    """

    value: str

    FINGERPRINT_PATTERN: ClassVar[str] = r'^[0-9A-F]{2}(:[0-9A-F]{2}){31}$'

    def __post_init__(self) -> None:
        """Validate colon-hex SHA-256 format."""
        if not re.match(self.FINGERPRINT_PATTERN, self.value):
            raise ValueError(
                f"Invalid SHA-256 fingerprint: {self.value}. "
                f"Expected 32 colon-separated hex pairs."
            )

    @classmethod
    def parse(cls, raw: str) -> "CertificateFingerprint":
        """Normalise a fingerprint string to upper-case colon-hex form."""
        return cls(raw.strip().upper())

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ArtifactId:
    """Identifier of a CI artifact bundle.

    Raises:
        ValueError: If value is not a positive integer string.
    """

    value: str

    ARTIFACT_PATTERN: ClassVar[str] = r'^[1-9][0-9]{0,19}$'

    def __post_init__(self) -> None:
        """Validate artifact ID is numeric."""
        if not re.match(self.ARTIFACT_PATTERN, self.value):
            raise ValueError(f"Invalid artifact ID: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class BuildMode(str, Enum):
    """Where a build executes."""

    LOCAL = "local"
    REMOTE = "cloud"


class JobState(str, Enum):
    """Build job lifecycle states.

    Terminal states (COMPLETED, FAILED) cannot transition.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if state is terminal (immutable).

        Returns:
            True if state is COMPLETED or FAILED.
        """
        return self in {JobState.COMPLETED, JobState.FAILED}


class ToolchainStage(str, Enum):
    """Stages of the local packaging pipeline, in execution order."""

    GENERATE = "generate"
    COMPILE = "compile"
    SIGN = "sign"
    INSPECT = "inspect"
