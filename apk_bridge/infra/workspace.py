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

"""Per-build private working directories."""

import logging
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from apk_bridge.core.builds.value_objects import BuildId, IconImage

logger = logging.getLogger(__name__)

ICON_FILENAME = "icon.png"
KEYSTORE_FILENAME = "android.keystore"
SIGNED_PACKAGE_RELPATH = Path("app", "build", "outputs", "apk", "release", "app-release-signed.apk")


class BuildWorkspace:
    """Owns ``<root>/<build_id>`` directories.

    Each build gets its own directory, so concurrent builds never share
    files. Directories are private to the process user.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def job_dir(self, build_id: BuildId) -> Path:
        """Return the working directory of a build (not created)."""
        return self._root / str(build_id)

    def prepare(self, build_id: BuildId) -> Path:
        """Create the working directory of a build and return it."""
        path = self.job_dir(build_id)
        path.mkdir(parents=True, exist_ok=True, mode=0o700)
        return path

    def store_icon(self, build_id: BuildId, icon: IconImage) -> Path:
        """Write the uploaded icon into the build's working directory."""
        path = self.prepare(build_id) / ICON_FILENAME
        path.write_bytes(icon.content)
        logger.debug("Stored icon for build %s (%d bytes)", build_id, len(icon))
        return path

    def icon_path(self, build_id: BuildId) -> Path:
        return self.job_dir(build_id) / ICON_FILENAME

    def keystore_path(self, build_id: BuildId) -> Path:
        return self.job_dir(build_id) / KEYSTORE_FILENAME

    def signed_package(self, build_id: BuildId) -> Optional[Path]:
        """Return the signed package of a finished local build, if present."""
        path = self.job_dir(build_id) / SIGNED_PACKAGE_RELPATH
        return path if path.is_file() else None

    def discard(self, build_id: BuildId) -> None:
        """Remove the build's working directory.

        Failures are logged and swallowed; a leftover directory does not
        change the outcome of the build.
        """
        path = self.job_dir(build_id)
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Failed to remove working directory %s: %s", path, exc)

    def prune(self, max_age: timedelta, now: Optional[datetime] = None) -> int:
        """Remove working directories of builds older than max_age.

        Age is read from the timestamp embedded in each build id. Entries
        not named after a build id are left alone.

        Returns:
            Number of directories removed.
        """
        if not self._root.is_dir():
            return 0
        now = now or datetime.now(timezone.utc)
        removed = 0
        for path in self._root.iterdir():
            if not path.is_dir():
                continue
            try:
                build_id = BuildId(path.name)
            except ValueError:
                continue
            if now - build_id.issued_at() > max_age:
                self.discard(build_id)
                removed += 1
        if removed:
            logger.info("Pruned %d expired working directories under %s", removed, self._root)
        return removed
