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

"""Build domain module for APK Bridge."""

from .entities import (
    BuildJob,
    BuildRequest,
    BuildResult,
    PackageManifest,
    WorkflowArtifact,
    WorkflowRun,
)
from .exceptions import (
    BuildDomainError,
    ConfigurationError,
    UpstreamRequestError,
    NotFoundError,
    ArtifactNotFoundError,
    PackageNotFoundError,
    InvalidArtifactBundleError,
    ToolchainError,
    InvalidStateTransitionError,
    TerminalStateViolationError,
)
from .ports import (
    ArtifactSource,
    BuildIdGenerator,
    BuildStatusSource,
    IconServerFactory,
    PackageBuilder,
    UUIDGenerator,
    WorkflowDispatcher,
)
from .services import APK_EXTENSION, APK_MEDIA_TYPE, BundleExtractor, PackageIdService
from .value_objects import (
    ApplicationName,
    ArtifactId,
    BuildId,
    BuildMode,
    CertificateFingerprint,
    CorrelationId,
    IconImage,
    JobState,
    PackageId,
    TargetUrl,
    ToolchainStage,
)

__all__ = [
    "BuildJob",
    "BuildRequest",
    "BuildResult",
    "PackageManifest",
    "WorkflowArtifact",
    "WorkflowRun",
    "BuildDomainError",
    "ConfigurationError",
    "UpstreamRequestError",
    "NotFoundError",
    "ArtifactNotFoundError",
    "PackageNotFoundError",
    "InvalidArtifactBundleError",
    "ToolchainError",
    "InvalidStateTransitionError",
    "TerminalStateViolationError",
    "ArtifactSource",
    "BuildIdGenerator",
    "BuildStatusSource",
    "IconServerFactory",
    "PackageBuilder",
    "UUIDGenerator",
    "WorkflowDispatcher",
    "APK_EXTENSION",
    "APK_MEDIA_TYPE",
    "BundleExtractor",
    "PackageIdService",
    "ApplicationName",
    "ArtifactId",
    "BuildId",
    "BuildMode",
    "CertificateFingerprint",
    "CorrelationId",
    "IconImage",
    "JobState",
    "PackageId",
    "TargetUrl",
    "ToolchainStage",
]
