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

"""Domain services for Builds domain."""

import io
import zipfile
import zlib
from pathlib import PurePosixPath
from typing import Tuple

from .exceptions import ArtifactNotFoundError, InvalidArtifactBundleError
from .value_objects import ArtifactId, BuildId, PackageId

APK_EXTENSION = ".apk"
APK_MEDIA_TYPE = "application/vnd.android.package-archive"


class PackageIdService:
    """Domain service for deriving Android package identifiers.

    The identifier depends only on the build id, so inspecting the same
    job twice always yields the same package. BuildId only accepts
    canonical lower-case UUIDs, which makes stripping the separators
    injective: distinct build ids never collide.
    """

    @staticmethod
    def derive(build_id: BuildId, prefix: str) -> PackageId:
        """Derive the package identifier for a build.

        Args:
            build_id: Build the package belongs to.
            prefix: Package prefix, e.g. ``com.apkbridge.app``.

        Returns:
            PackageId value object.

        Example:
            >>> bid = BuildId("018f3c4c-6a2e-7b2a-9c2a-3d8d2c4b9a11")
            >>> str(PackageIdService.derive(bid, "com.apkbridge.app"))
            'com.apkbridge.app018f3c4c6a2e7b2a9c2a3d8d2c4b9a11'
        """
        return PackageId(f"{prefix}{build_id.hex}")


class BundleExtractor:
    """Domain service for pulling the installable package out of a bundle.

    Works entirely in memory; the bundle is small (one package plus
    metadata) and is never written to disk.
    """

    @staticmethod
    def extract_package(
        bundle: bytes,
        artifact_id: ArtifactId,
        extension: str = APK_EXTENSION,
    ) -> Tuple[str, bytes]:
        """Return the file name and bytes of the single package entry.

        Args:
            bundle: Complete zip bundle bytes.
            artifact_id: Artifact the bundle belongs to, for error reporting.
            extension: Extension identifying the package entry.

        Returns:
            Tuple of (entry base name, entry bytes).

        Raises:
            ArtifactNotFoundError: If no entry has the extension.
            InvalidArtifactBundleError: If the bundle is not a zip or holds
                more than one matching entry.
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(bundle))
        except zipfile.BadZipFile as exc:
            raise InvalidArtifactBundleError(
                str(artifact_id), f"not a zip archive ({exc})"
            ) from exc

        with archive:
            matches = [
                info for info in archive.infolist()
                if not info.is_dir() and info.filename.lower().endswith(extension)
            ]
            if not matches:
                raise ArtifactNotFoundError(str(artifact_id), extension)
            if len(matches) > 1:
                names = ", ".join(info.filename for info in matches)
                raise InvalidArtifactBundleError(
                    str(artifact_id), f"multiple {extension} entries: {names}"
                )

            entry = matches[0]
            try:
                content = archive.read(entry)
            except (zipfile.BadZipFile, zlib.error, OSError) as exc:
                raise InvalidArtifactBundleError(
                    str(artifact_id), f"cannot read {entry.filename} ({exc})"
                ) from exc

        return PurePosixPath(entry.filename).name, content
