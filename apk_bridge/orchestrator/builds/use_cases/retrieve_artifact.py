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

"""Artifact retrieval and local package download use cases."""

import logging

from apk_bridge.core.builds.exceptions import PackageNotFoundError
from apk_bridge.core.builds.ports import ArtifactSource
from apk_bridge.core.builds.services import APK_EXTENSION, APK_MEDIA_TYPE, BundleExtractor
from apk_bridge.infra.workspace import BuildWorkspace

from ..commands import FetchLocalPackageCommand, RetrieveArtifactCommand
from ..dtos import ArtifactPayload, LocalPackageResponse

logger = logging.getLogger(__name__)


class RetrieveArtifactUseCase:
    """Use case for extracting the package from a remote artifact bundle.

    The bundle is buffered and opened in memory; nothing touches disk.
    """

    def __init__(self, artifact_source: ArtifactSource) -> None:
        self._artifact_source = artifact_source

    def execute(self, command: RetrieveArtifactCommand) -> ArtifactPayload:
        """Fetch the bundle and return its single package entry.

        Raises:
            UpstreamRequestError: If the bundle download fails.
            ArtifactNotFoundError: If the bundle holds no package.
            InvalidArtifactBundleError: If the bundle is corrupt or ambiguous.
        """
        bundle = self._artifact_source.download_artifact(command.artifact_id)
        filename, content = BundleExtractor.extract_package(
            bundle, command.artifact_id, APK_EXTENSION
        )
        logger.info(
            "Extracted %s (%d bytes) from artifact %s (correlation_id=%s)",
            filename, len(content), command.artifact_id, command.correlation_id,
        )
        return ArtifactPayload(filename=filename, media_type=APK_MEDIA_TYPE, content=content)


class FetchLocalPackageUseCase:
    """Use case for locating the signed package left by a local build."""

    def __init__(self, workspace: BuildWorkspace) -> None:
        self._workspace = workspace

    def execute(self, command: FetchLocalPackageCommand) -> LocalPackageResponse:
        """Return the signed package of a finished local build.

        Raises:
            PackageNotFoundError: If the build left no signed package.
        """
        path = self._workspace.signed_package(command.build_id)
        if path is None:
            raise PackageNotFoundError(
                str(command.build_id), correlation_id=str(command.correlation_id)
            )
        return LocalPackageResponse(path=path, filename=path.name, media_type=APK_MEDIA_TYPE)
