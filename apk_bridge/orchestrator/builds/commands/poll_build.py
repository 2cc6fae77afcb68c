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

"""Command DTOs for polling and artifact retrieval."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from apk_bridge.core.builds.value_objects import ArtifactId, BuildId, CorrelationId


@dataclass(frozen=True)
class PollBuildCommand:
    """Command to resolve the current state of a remote build.

    Attributes:
        build_id: Build to resolve.
        correlation_id: Request correlation identifier for tracing.
        stale_after: Caller-owned bound after which a build with no
            visible run is reported as failed. None disables the bound.
    """

    build_id: BuildId
    correlation_id: CorrelationId
    stale_after: Optional[timedelta] = None


@dataclass(frozen=True)
class RetrieveArtifactCommand:
    """Command to fetch the package inside a CI artifact bundle.

    Attributes:
        artifact_id: Artifact to fetch.
        correlation_id: Request correlation identifier for tracing.
    """

    artifact_id: ArtifactId
    correlation_id: CorrelationId


@dataclass(frozen=True)
class FetchLocalPackageCommand:
    """Command to fetch the signed package of a finished local build."""

    build_id: BuildId
    correlation_id: CorrelationId
