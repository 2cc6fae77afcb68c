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

"""Unit tests for RemoteBuildDispatcher."""

import pytest

from apk_bridge.core.builds.entities import BuildRequest
from apk_bridge.core.builds.exceptions import UpstreamRequestError
from apk_bridge.core.builds.value_objects import BuildId
from apk_bridge.orchestrator.builds.use_cases import RemoteBuildDispatcher
from apk_bridge.tests.mocks.fake_github import FakeWorkflowDispatcher
from apk_bridge.tests.mocks.fake_id_generator import SequenceBuildIdGenerator
from apk_bridge.tests.utils import BUILD_ID, OTHER_BUILD_ID


@pytest.fixture
def request_(app_name, target_url, icon, correlation_id) -> BuildRequest:
    return BuildRequest(
        application_name=app_name,
        target_url=target_url,
        icon=icon,
        correlation_id=correlation_id,
    )


class TestRemoteBuildDispatcher:
    """Tests for dispatching builds to the CI system."""

    def test_mints_build_id_when_omitted(self, request_):
        fake = FakeWorkflowDispatcher()
        dispatcher = RemoteBuildDispatcher(fake, SequenceBuildIdGenerator(OTHER_BUILD_ID), "build-apk")

        build_id = dispatcher.dispatch(request_)

        assert build_id == BuildId(OTHER_BUILD_ID)
        assert fake.dispatched[0][1]["build_id"] == OTHER_BUILD_ID

    def test_uses_supplied_build_id(self, request_):
        fake = FakeWorkflowDispatcher()
        dispatcher = RemoteBuildDispatcher(fake, SequenceBuildIdGenerator(OTHER_BUILD_ID), "build-apk")

        build_id = dispatcher.dispatch(request_, BuildId(BUILD_ID))

        assert str(build_id) == BUILD_ID
        assert fake.dispatched[0][1]["build_id"] == BUILD_ID

    def test_payload_shape(self, request_):
        fake = FakeWorkflowDispatcher()
        dispatcher = RemoteBuildDispatcher(fake, SequenceBuildIdGenerator(), "custom-event")

        dispatcher.dispatch(request_)

        event_type, payload = fake.dispatched[0]
        assert event_type == "custom-event"
        assert set(payload) == {"build_id", "app_name", "app_url", "icon_base64"}

    def test_rejection_is_not_retried(self, request_):
        fake = FakeWorkflowDispatcher(error=UpstreamRequestError(401, "Workflow dispatch"))
        dispatcher = RemoteBuildDispatcher(fake, SequenceBuildIdGenerator(), "build-apk")

        with pytest.raises(UpstreamRequestError):
            dispatcher.dispatch(request_)

        assert fake.dispatched == []

    def test_tracking_url_delegates(self):
        dispatcher = RemoteBuildDispatcher(
            FakeWorkflowDispatcher(), SequenceBuildIdGenerator(), "build-apk"
        )
        assert dispatcher.tracking_url() == "https://github.com/acme/builds/actions"
