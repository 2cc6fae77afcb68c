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

"""Build request and result records."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..value_objects import (
    ApplicationName,
    ArtifactId,
    CertificateFingerprint,
    CorrelationId,
    IconImage,
    PackageId,
    TargetUrl,
)


@dataclass(frozen=True)
class BuildRequest:
    """Immutable request to package a website as an Android application.

    Attributes:
        application_name: Display name of the application.
        target_url: Website wrapped by the application.
        icon: Launcher icon as PNG bytes.
        correlation_id: Request correlation identifier for tracing.
    """

    application_name: ApplicationName
    target_url: TargetUrl
    icon: IconImage
    correlation_id: CorrelationId


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a completed build.

    Attributes:
        package_id: Android application identifier.
        certificate_fingerprint: SHA-256 fingerprint of the signing certificate.
        artifact_locator: Signed package path (local) or retrieval id (remote).
    """

    package_id: PackageId
    certificate_fingerprint: CertificateFingerprint
    artifact_locator: Union[Path, ArtifactId]
