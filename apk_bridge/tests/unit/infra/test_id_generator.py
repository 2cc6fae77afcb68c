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

"""Unit tests for UUIDv7Generator infrastructure component."""

import re
import uuid
from datetime import datetime, timedelta, timezone

from apk_bridge.infra.id_generator import UUIDv4Generator, UUIDv7Generator


class TestUUIDv7Generator:
    """Tests covering UUIDv7Generator behavior."""

    def test_generate_returns_uuid_v7_format(self) -> None:
        """Generated BuildId must be canonical lower-case UUID v7."""
        build_id = UUIDv7Generator().generate()

        assert re.match(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            build_id.value,
        )

    def test_generate_is_unique(self) -> None:
        """Generator should yield unique IDs over multiple invocations."""
        generator = UUIDv7Generator()

        generated = {generator.generate().value for _ in range(50)}

        assert len(generated) == 50

    def test_generated_id_embeds_current_time(self) -> None:
        """The embedded timestamp lets pollers compute build age."""
        before = datetime.now(timezone.utc) - timedelta(seconds=1)

        issued = UUIDv7Generator().generate().issued_at()

        assert before <= issued <= datetime.now(timezone.utc) + timedelta(seconds=1)


class TestUUIDv4Generator:
    """Tests covering UUIDv4Generator behavior."""

    def test_generate_returns_uuid4(self) -> None:
        value = UUIDv4Generator().generate()
        assert isinstance(value, uuid.UUID)
        assert value.version == 4
