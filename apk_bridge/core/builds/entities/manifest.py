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

"""Trusted Web Activity manifest handed to the package builder."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..value_objects import ApplicationName, PackageId, TargetUrl


@dataclass(frozen=True)
class PackageManifest:
    """Description of the Android project wrapping a website.

    Attributes:
        package_id: Android application identifier.
        host: Hostname the activity is allowed to open.
        name: Display name.
        launcher_name: Short name under the launcher icon.
        icon_url: URL the builder downloads the icon from.
        signing_key_path: Keystore used to sign the package.
        signing_key_alias: Key alias inside the keystore.
    """

    package_id: PackageId
    host: str
    name: str
    launcher_name: str
    icon_url: str
    signing_key_path: Path
    signing_key_alias: str = "android"
    start_url: str = "/"
    display: str = "standalone"
    theme_color: str = "#000000"
    navigation_color: str = "#000000"
    background_color: str = "#FFFFFF"
    app_version: str = "1.0.0"
    app_version_code: int = 1
    splash_fade_out_ms: int = 300
    enable_notifications: bool = True
    generator_app: str = "apk-bridge"

    @classmethod
    def for_application(
        cls,
        package_id: PackageId,
        name: ApplicationName,
        url: TargetUrl,
        icon_url: str,
        signing_key_path: Path,
        signing_key_alias: str = "android",
    ) -> "PackageManifest":
        """Build a manifest with defaults for a plain website wrapper."""
        return cls(
            package_id=package_id,
            host=url.host,
            name=str(name),
            launcher_name=name.launcher_name,
            icon_url=icon_url,
            signing_key_path=signing_key_path,
            signing_key_alias=signing_key_alias,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the twa-manifest.json key names."""
        return {
            "packageId": str(self.package_id),
            "host": self.host,
            "name": self.name,
            "launcherName": self.launcher_name,
            "display": self.display,
            "themeColor": self.theme_color,
            "navigationColor": self.navigation_color,
            "backgroundColor": self.background_color,
            "startUrl": self.start_url,
            "iconUrl": self.icon_url,
            "appVersionName": self.app_version,
            "appVersionCode": self.app_version_code,
            "shortcuts": [],
            "splashScreenFadeOutDuration": self.splash_fade_out_ms,
            "enableNotifications": self.enable_notifications,
            "signingKey": {
                "path": str(self.signing_key_path),
                "alias": self.signing_key_alias,
            },
            "generatorApp": self.generator_app,
        }
