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

"""Package builder backed by the Bubblewrap CLI and the Android SDK.

The toolchain is treated as opaque: this adapter only writes the inputs it
expects and runs its commands. Project generation is done by
``bubblewrap update``, compilation by the generated Gradle wrapper,
signing by ``apksigner`` and fingerprint inspection by ``keytool``.
"""

import json
import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from apk_bridge.core.builds.entities import PackageManifest
from apk_bridge.infra.settings import ToolchainPaths

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "twa-manifest.json"
RELEASE_OUTPUT_DIR = Path("app", "build", "outputs", "apk", "release")
UNSIGNED_PACKAGE = "app-release-unsigned.apk"
SIGNED_PACKAGE = "app-release-signed.apk"
SHA256_PATTERN = re.compile(r"SHA256:\s*([A-Fa-f0-9:]+)")
DEFAULT_TIMEOUT_SECONDS = 1800
KEY_DNAME = "CN=APK Bridge, OU=Engineering, O=APK Bridge, C=US"

CommandRunner = Callable[..., subprocess.CompletedProcess]


class CommandFailedError(RuntimeError):
    """A toolchain command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str) -> None:
        tail = stderr.strip().splitlines()[-5:]
        super().__init__(
            f"{Path(command[0]).name} exited with status {returncode}"
            + (f": {' | '.join(tail)}" if tail else "")
        )
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class BubblewrapPackageBuilder:
    """PackageBuilder implementation driving the native toolchain."""

    def __init__(
        self,
        paths: ToolchainPaths,
        keystore_password: str,
        runner: CommandRunner = subprocess.run,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the builder.

        Args:
            paths: JDK, SDK and Bubblewrap locations.
            keystore_password: Password of the generated signing keystore.
            runner: Callable with the ``subprocess.run`` signature.
            timeout_seconds: Timeout applied to each command.
        """
        self._paths = paths
        self._keystore_password = keystore_password
        self._runner = runner
        self._timeout = timeout_seconds

    def _java_tool(self, name: str) -> str:
        suffix = ".exe" if os.name == "nt" else ""
        return str(self._paths.java_home / "bin" / f"{name}{suffix}")

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env["JAVA_HOME"] = str(self._paths.java_home)
        env["ANDROID_HOME"] = str(self._paths.android_sdk_root)
        env["ANDROID_SDK_ROOT"] = str(self._paths.android_sdk_root)
        return env

    def _run(self, command: List[str], cwd: Optional[Path] = None) -> str:
        """Run a toolchain command and return its stdout.

        Raises:
            CommandFailedError: If the command exits non-zero.
        """
        logger.info("Running %s", Path(command[0]).name)
        result = self._runner(
            command,
            cwd=str(cwd) if cwd else None,
            env=self._env(),
            capture_output=True,
            text=True,
            timeout=self._timeout,
            check=False,
        )
        if result.returncode != 0:
            raise CommandFailedError(command, result.returncode, result.stderr or "")
        return result.stdout or ""

    def generate_project(self, manifest: PackageManifest, project_dir: Path) -> None:
        manifest_path = project_dir / MANIFEST_FILENAME
        manifest_path.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
        self._run(
            [
                self._paths.bubblewrap_command,
                "update",
                "--skipVersionUpgrade",
                f"--manifest={manifest_path}",
            ],
            cwd=project_dir,
        )

    def compile_project(self, manifest: PackageManifest, project_dir: Path) -> Path:
        sdk_dir = str(self._paths.android_sdk_root).replace("\\", "\\\\")
        (project_dir / "local.properties").write_text(f"sdk.dir={sdk_dir}\n", encoding="utf-8")

        self._ensure_keystore(manifest)

        gradlew = project_dir / ("gradlew.bat" if os.name == "nt" else "gradlew")
        if not gradlew.exists():
            raise FileNotFoundError(f"Gradle wrapper not generated: {gradlew}")
        self._run([str(gradlew), "assembleRelease", "--no-daemon"], cwd=project_dir)

        unsigned = project_dir / RELEASE_OUTPUT_DIR / UNSIGNED_PACKAGE
        if not unsigned.is_file():
            raise FileNotFoundError(f"Gradle produced no package at {unsigned}")
        return unsigned

    def _ensure_keystore(self, manifest: PackageManifest) -> None:
        if manifest.signing_key_path.exists():
            return
        self._run([
            self._java_tool("keytool"),
            "-genkeypair",
            "-keystore", str(manifest.signing_key_path),
            "-alias", manifest.signing_key_alias,
            "-keyalg", "RSA",
            "-keysize", "2048",
            "-validity", "10000",
            "-storepass", self._keystore_password,
            "-keypass", self._keystore_password,
            "-dname", KEY_DNAME,
        ])

    def _latest_build_tools(self) -> Path:
        root = self._paths.android_sdk_root / "build-tools"
        versions = sorted(
            (p for p in root.iterdir() if p.is_dir()),
            key=lambda p: _version_key(p.name),
        ) if root.is_dir() else []
        if not versions:
            raise FileNotFoundError(f"No build-tools found under {root}")
        return versions[-1]

    def sign_package(
        self,
        manifest: PackageManifest,
        project_dir: Path,
        unsigned_package: Path,
    ) -> Path:
        apksigner = self._latest_build_tools() / "lib" / "apksigner.jar"
        signed = unsigned_package.with_name(SIGNED_PACKAGE)
        self._run([
            self._java_tool("java"),
            "-Xmx1024M",
            "-jar", str(apksigner),
            "sign",
            "--ks", str(manifest.signing_key_path),
            "--ks-key-alias", manifest.signing_key_alias,
            "--ks-pass", f"pass:{self._keystore_password}",
            "--key-pass", f"pass:{self._keystore_password}",
            "--out", str(signed),
            str(unsigned_package),
        ], cwd=project_dir)
        return signed

    def read_certificate_fingerprint(self, manifest: PackageManifest) -> str:
        output = self._run([
            self._java_tool("keytool"),
            "-list", "-v",
            "-keystore", str(manifest.signing_key_path),
            "-alias", manifest.signing_key_alias,
            "-storepass", self._keystore_password,
        ])
        return parse_sha256_fingerprint(output)


def parse_sha256_fingerprint(keytool_output: str) -> str:
    """Extract the SHA-256 certificate fingerprint from ``keytool -list -v``.

    Raises:
        ValueError: If the output holds no SHA256 line.
    """
    match = SHA256_PATTERN.search(keytool_output)
    if not match:
        raise ValueError("keytool output contains no SHA256 fingerprint")
    return match.group(1)


def _version_key(name: str):
    return [int(part) if part.isdigit() else 0 for part in re.split(r"[.\-]", name)]
