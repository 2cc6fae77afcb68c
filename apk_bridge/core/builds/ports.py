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

"""Port interfaces (Protocols) for Builds domain.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

import uuid
from pathlib import Path
from typing import Any, Callable, ContextManager, Dict, Optional, Protocol

from .entities import PackageManifest, WorkflowArtifact, WorkflowRun
from .value_objects import ArtifactId, BuildId


IconServerFactory = Callable[[Path], ContextManager[str]]
"""Opens a loopback endpoint for an icon file and yields its URL."""


class BuildIdGenerator(Protocol):
    """Generator port for creating Build identifiers."""

    def generate(self) -> BuildId:
        """Generate a new Build identifier.

        Returns:
            A new, unique BuildId.
        """
        ...


class UUIDGenerator(Protocol):
    """Generator port for plain UUID objects."""

    def generate(self) -> uuid.UUID:
        """Generate a UUID object."""
        ...


class PackageBuilder(Protocol):
    """External capability that turns a manifest into a signed package.

    Each method is one pipeline stage. Implementations raise whatever the
    underlying toolchain raises; the caller attributes it to the stage.
    """

    def generate_project(self, manifest: PackageManifest, project_dir: Path) -> None:
        """Generate the Android project for the manifest into project_dir."""
        ...

    def compile_project(self, manifest: PackageManifest, project_dir: Path) -> Path:
        """Compile the project and return the unsigned package path."""
        ...

    def sign_package(
        self,
        manifest: PackageManifest,
        project_dir: Path,
        unsigned_package: Path,
    ) -> Path:
        """Sign the package and return the signed package path."""
        ...

    def read_certificate_fingerprint(self, manifest: PackageManifest) -> str:
        """Return the SHA-256 fingerprint of the signing certificate."""
        ...


class WorkflowDispatcher(Protocol):
    """Port for triggering workflows on the remote CI system."""

    def dispatch(self, event_type: str, payload: Dict[str, Any]) -> None:
        """Submit a fire-and-forget workflow trigger.

        Raises:
            UpstreamRequestError: If the CI system rejects the trigger.
        """
        ...

    def tracking_url(self) -> str:
        """Return a human-facing URL where dispatched runs can be watched."""
        ...


class BuildStatusSource(Protocol):
    """Port for locating the remote run and artifact of a build.

    The shipped implementation scans recent runs; an indexed lookup can
    replace it without touching the resolver.
    """

    def find_run(self, build_id: BuildId) -> Optional[WorkflowRun]:
        """Return the run tagged with build_id, or None if not visible yet.

        Raises:
            UpstreamRequestError: If the CI system cannot be queried.
        """
        ...

    def find_artifact(
        self,
        run: WorkflowRun,
        build_id: BuildId,
    ) -> Optional[WorkflowArtifact]:
        """Return the package artifact uploaded by run, or None.

        Raises:
            UpstreamRequestError: If the CI system cannot be queried.
        """
        ...


class ArtifactSource(Protocol):
    """Port for fetching compressed artifact bundles."""

    def download_artifact(self, artifact_id: ArtifactId) -> bytes:
        """Return the complete bundle bytes.

        Raises:
            UpstreamRequestError: If the CI system answers with non-success.
        """
        ...
