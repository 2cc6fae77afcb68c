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

"""Local build runner implementation."""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, TypeVar

from apk_bridge.core.builds.entities import BuildRequest, BuildResult, PackageManifest
from apk_bridge.core.builds.exceptions import ToolchainError
from apk_bridge.core.builds.ports import IconServerFactory, PackageBuilder
from apk_bridge.core.builds.services import PackageIdService
from apk_bridge.core.builds.value_objects import (
    BuildId,
    CertificateFingerprint,
    PackageId,
    ToolchainStage,
)
from apk_bridge.infra.icon_server import serve_icon
from apk_bridge.infra.settings import BuildSettings
from apk_bridge.infra.workspace import BuildWorkspace

logger = logging.getLogger(__name__)

T = TypeVar("T")

# The toolchain keeps global Gradle and SDK state; one build per process.
_LOCAL_BUILD_LOCK = threading.Lock()


class LocalBuildRunner:
    """Runs the package builder in-process, blocking until it finishes.

    There is no partial success: any stage failure aborts the run and is
    reported as a single ToolchainError naming the stage and carrying the
    underlying cause.

    Attributes:
        settings: Process configuration.
        package_builder: External packaging capability.
        workspace: Owner of per-build working directories.
        icon_server: Scoped loopback icon endpoint factory.
    """

    def __init__(
        self,
        settings: BuildSettings,
        package_builder: PackageBuilder,
        workspace: BuildWorkspace,
        icon_server: IconServerFactory = serve_icon,
    ) -> None:
        self._settings = settings
        self._package_builder = package_builder
        self._workspace = workspace
        self._icon_server = icon_server

    def run(self, request: BuildRequest, build_id: BuildId) -> BuildResult:
        """Build, sign and inspect the package for a request.

        Args:
            request: The build request.
            build_id: Identifier scoping the working directory.

        Returns:
            BuildResult whose locator is the signed package path.

        Raises:
            ConfigurationError: If the local toolchain is unavailable.
            ToolchainError: If any packaging stage fails.
        """
        self._settings.require_local()

        working_dir = self._workspace.prepare(build_id)
        icon_path = self._workspace.icon_path(build_id)
        if not icon_path.exists():
            self._workspace.store_icon(build_id, request.icon)

        package_id = PackageIdService.derive(build_id, self._settings.package_id_prefix)
        correlation_id = str(request.correlation_id)

        with _LOCAL_BUILD_LOCK:
            logger.info("Local build %s started for package %s", build_id, package_id)
            manifest = self._run_stage(
                ToolchainStage.GENERATE, correlation_id,
                self._generate_project, request, build_id, package_id, icon_path, working_dir,
            )
            unsigned = self._run_stage(
                ToolchainStage.COMPILE, correlation_id,
                self._package_builder.compile_project, manifest, working_dir,
            )
            signed = self._run_stage(
                ToolchainStage.SIGN, correlation_id,
                self._package_builder.sign_package, manifest, working_dir, unsigned,
            )
            fingerprint = self._run_stage(
                ToolchainStage.INSPECT, correlation_id,
                self._read_fingerprint, manifest,
            )

        logger.info("Local build %s finished: %s", build_id, signed)
        return BuildResult(
            package_id=package_id,
            certificate_fingerprint=fingerprint,
            artifact_locator=signed,
        )

    def _generate_project(
        self,
        request: BuildRequest,
        build_id: BuildId,
        package_id: PackageId,
        icon_path: Path,
        working_dir: Path,
    ) -> PackageManifest:
        with self._icon_server(icon_path) as icon_url:
            manifest = PackageManifest.for_application(
                package_id=package_id,
                name=request.application_name,
                url=request.target_url,
                icon_url=icon_url,
                signing_key_path=self._workspace.keystore_path(build_id),
                signing_key_alias=self._settings.keystore_alias,
            )
            self._package_builder.generate_project(manifest, working_dir)
        return manifest

    def _read_fingerprint(self, manifest: PackageManifest) -> CertificateFingerprint:
        raw = self._package_builder.read_certificate_fingerprint(manifest)
        return CertificateFingerprint.parse(raw)

    def _run_stage(
        self,
        stage: ToolchainStage,
        correlation_id: str,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        """Run one pipeline stage, attributing any failure to it."""
        try:
            return func(*args)
        except ToolchainError:
            raise
        except Exception as exc:
            logger.error("Local build stage %s failed: %s", stage.value, exc)
            raise ToolchainError(stage.value, exc, correlation_id=correlation_id) from exc
