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

"""Pydantic schemas for build endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LocalBuildResponse(_CamelModel):
    """Completed local build."""

    success: Literal[True] = True
    mode: Literal["local"] = "local"
    build_id: str = Field(..., alias="buildId")
    download_url: str = Field(..., alias="downloadUrl")
    package_id: str = Field(..., alias="packageId")
    sha256_fingerprint: str = Field(..., alias="sha256Fingerprint")


class CloudBuildResponse(_CamelModel):
    """Build dispatched to the remote CI system."""

    success: Literal[True] = True
    mode: Literal["cloud"] = "cloud"
    build_id: str = Field(..., alias="buildId")
    tracking_url: str = Field(..., alias="trackingUrl")


class BuildStatusSchema(_CamelModel):
    """Current state of a remote build."""

    build_id: str = Field(..., alias="buildId")
    status: Literal["pending", "running", "completed", "failed"]
    artifact_id: Optional[str] = Field(None, alias="artifactId")
    reason: Optional[str] = None


class ErrorResponse(BaseModel):
    """Failure body shared by every endpoint."""

    success: Literal[False] = False
    error: str
