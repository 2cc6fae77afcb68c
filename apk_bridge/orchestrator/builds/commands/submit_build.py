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

"""SubmitBuild command DTO."""

from dataclasses import dataclass

from apk_bridge.core.builds.value_objects import (
    ApplicationName,
    CorrelationId,
    IconImage,
    TargetUrl,
)


@dataclass(frozen=True)
class SubmitBuildCommand:
    """Command to package a website as an Android application.

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
