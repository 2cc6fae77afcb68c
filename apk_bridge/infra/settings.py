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

"""Process-wide configuration for APK Bridge.

Settings are resolved once at startup and handed to each component, so no
component reads the process environment on its own. Resolution order
(later wins): field defaults, the hosting platform default for the local
toolchain flag, an optional YAML file named by ``APK_BRIDGE_CONFIG``, then
environment variables.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import AliasChoices, Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from apk_bridge.core.builds.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "APK_BRIDGE_CONFIG"
SERVERLESS_HOST_ENV = "VERCEL"


def _default_workspace() -> Path:
    return Path(tempfile.gettempdir()) / "apk-bridge"


@dataclass(frozen=True)
class GitHubCoordinates:
    """Credentials and addressing for the remote CI repository.

    Attributes:
        token: Personal access token with actions scope.
        owner: Repository owner.
        repo: Repository name.
        api_url: Base URL of the GitHub REST API.
    """

    token: str = field(repr=False)
    owner: str
    repo: str
    api_url: str = "https://api.github.com"

    @property
    def web_url(self) -> str:
        """Human-facing actions page of the repository."""
        return f"https://github.com/{self.owner}/{self.repo}/actions"


@dataclass(frozen=True)
class ToolchainPaths:
    """Locations of the native Android toolchain.

    Attributes:
        java_home: JDK installation directory.
        android_sdk_root: Android SDK installation directory.
        bubblewrap_command: Bubblewrap CLI executable.
    """

    java_home: Path
    android_sdk_root: Path
    bubblewrap_command: str = "bubblewrap"


class HostPlatformSettingsSource(PydanticBaseSettingsSource):
    """Default for the local toolchain flag derived from the hosting platform.

    Serverless hosts never ship a JDK or Android SDK, so local builds are
    switched off there unless a higher source sets the flag.
    """

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        if os.environ.get(SERVERLESS_HOST_ENV):
            return {"local_toolchain_available": False}
        return {}


class BuildSettings(BaseSettings):
    """Immutable configuration passed to every component.

    YAML files use the field names below; environment variables use the
    names given as validation aliases.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_ignore_empty=True,
    )

    local_toolchain_available: bool = Field(
        default=True,
        validation_alias=AliasChoices("APK_BRIDGE_LOCAL_TOOLCHAIN"),
        description="Capability flag selecting the local build path.",
    )
    workspace_root: Path = Field(
        default_factory=_default_workspace,
        validation_alias=AliasChoices("APK_BRIDGE_WORKSPACE"),
        description="Parent directory of per-build working directories.",
    )
    java_home: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("JAVA_HOME"),
    )
    android_sdk_root: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ANDROID_HOME", "ANDROID_SDK_ROOT"),
    )
    bubblewrap_command: str = Field(
        default="bubblewrap",
        min_length=1,
        validation_alias=AliasChoices("APK_BRIDGE_BUBBLEWRAP"),
    )
    keystore_alias: str = Field(
        default="android",
        min_length=1,
        validation_alias=AliasChoices("APK_BRIDGE_KEYSTORE_ALIAS"),
    )
    keystore_password: str = Field(
        default="password",
        repr=False,
        min_length=6,
        validation_alias=AliasChoices("APK_BRIDGE_KEYSTORE_PASSWORD"),
    )
    github_token: Optional[str] = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("GITHUB_PAT"),
        description="Personal access token used for remote builds.",
    )
    github_owner: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OWNER"),
    )
    github_repo: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPO"),
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        validation_alias=AliasChoices("GITHUB_API_URL"),
    )
    dispatch_event_type: str = Field(
        default="build-apk",
        min_length=1,
        validation_alias=AliasChoices("APK_BRIDGE_DISPATCH_EVENT"),
        description="Custom event_type carried by the repository_dispatch payload.",
    )
    run_scan_limit: int = Field(
        default=20,
        ge=1,
        le=100,
        validation_alias=AliasChoices("APK_BRIDGE_RUN_SCAN_LIMIT"),
        description="Number of recent runs scanned per status poll.",
    )
    artifact_name_prefix: str = Field(
        default="apk-",
        validation_alias=AliasChoices("APK_BRIDGE_ARTIFACT_PREFIX"),
    )
    package_id_prefix: str = Field(
        default="com.apkbridge.app",
        min_length=1,
        validation_alias=AliasChoices("APK_BRIDGE_PACKAGE_PREFIX"),
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("APK_BRIDGE_HTTP_TIMEOUT"),
        description="Timeout for calls to the CI system (seconds).",
    )
    local_retention_seconds: float = Field(
        default=86400.0,
        gt=0,
        validation_alias=AliasChoices("APK_BRIDGE_LOCAL_RETENTION"),
        description="How long finished local builds stay downloadable (seconds).",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("APK_BRIDGE_LOG_LEVEL"),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings]
        config_file = os.environ.get(CONFIG_FILE_ENV)
        if config_file:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=Path(config_file)))
        sources.append(HostPlatformSettingsSource(settings_cls))
        return tuple(sources)

    def require_remote(self) -> GitHubCoordinates:
        """Return CI coordinates, or raise if any is missing.

        Raises:
            ConfigurationError: Naming every absent variable.
        """
        missing = [
            name for name, value in (
                ("GITHUB_PAT", self.github_token),
                ("GITHUB_OWNER", self.github_owner),
                ("GITHUB_REPO", self.github_repo),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing, context="remote builds")
        return GitHubCoordinates(
            token=self.github_token,
            owner=self.github_owner,
            repo=self.github_repo,
            api_url=self.github_api_url.rstrip("/"),
        )

    def require_local(self) -> ToolchainPaths:
        """Return toolchain paths, or raise if the local path is unusable.

        Raises:
            ConfigurationError: If the capability flag is off or paths are missing.
        """
        if not self.local_toolchain_available:
            raise ConfigurationError(
                ["APK_BRIDGE_LOCAL_TOOLCHAIN"], context="local builds"
            )
        missing = [
            name for name, value in (
                ("JAVA_HOME", self.java_home),
                ("ANDROID_HOME", self.android_sdk_root),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing, context="local builds")
        return ToolchainPaths(
            java_home=Path(self.java_home),
            android_sdk_root=Path(self.android_sdk_root),
            bubblewrap_command=self.bubblewrap_command,
        )


def load_settings() -> BuildSettings:
    """Resolve settings from the optional config file and the environment.

    Raises:
        FileNotFoundError: If ``APK_BRIDGE_CONFIG`` names a missing file.
        pydantic.ValidationError: If a configured value is malformed.
    """
    config_file = os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        if not Path(config_file).is_file():
            raise FileNotFoundError(
                f"Configuration file {config_file} named by {CONFIG_FILE_ENV} does not exist"
            )
        logger.info("Loading configuration file %s", config_file)
    return BuildSettings()
