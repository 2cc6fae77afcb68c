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

"""Infrastructure layer for BuildId generation.

Build ids are UUID v7: time-ordered, so the status resolver can tell how
old a build is from its id alone.
"""

import secrets
import time
import uuid

from apk_bridge.core.builds.exceptions import BuildDomainError
from apk_bridge.core.builds.value_objects import BuildId


class UUIDv7Generator:
    """UUID v7 generator for build identifiers."""

    def generate(self) -> BuildId:
        """Generate a new UUID v7 BuildId.

        Returns:
            BuildId: A new UUID v7 identifier.

        Raises:
            BuildDomainError: If BuildId generation fails.
        """
        try:
            return BuildId(str(self._uuid7()))
        except ValueError:
            raise
        except Exception as exc:
            raise BuildDomainError(f"Failed to generate BuildId: {exc}") from exc

    def _uuid7(self) -> uuid.UUID:
        """Generate a UUID v7 using timestamp and random bytes."""
        timestamp_ms = int(time.time() * 1000)

        uuid7_bytes = bytearray(timestamp_ms.to_bytes(6, byteorder='big'))
        uuid7_bytes += secrets.token_bytes(10)

        uuid7_bytes[6] = (0x07 << 4) | (uuid7_bytes[6] & 0x0f)
        uuid7_bytes[8] = 0x80 | (uuid7_bytes[8] & 0x3f)

        return uuid.UUID(bytes=bytes(uuid7_bytes))


class UUIDv4Generator:
    """UUID v4 generator for correlation identifiers."""

    def generate(self) -> uuid.UUID:
        """Generate a new UUID v4."""
        return uuid.uuid4()
