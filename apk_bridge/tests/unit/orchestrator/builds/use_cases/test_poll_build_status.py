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

"""Unit tests for PollBuildStatusUseCase."""

from datetime import timedelta

import pytest

from apk_bridge.core.builds.entities import WorkflowArtifact, WorkflowRun
from apk_bridge.core.builds.value_objects import BuildId, CorrelationId
from apk_bridge.orchestrator.builds.commands import PollBuildCommand
from apk_bridge.orchestrator.builds.use_cases import PollBuildStatusUseCase
from apk_bridge.orchestrator.builds.use_cases.poll_build_status import (
    MISSING_ARTIFACT_REASON,
    STALE_REASON,
)
from apk_bridge.tests.mocks.fake_github import FakeStatusSource
from apk_bridge.tests.utils import BUILD_ID


def _run(status="completed", conclusion="success") -> WorkflowRun:
    return WorkflowRun(
        run_id=314,
        title=f"APK build {BUILD_ID}",
        status=status,
        conclusion=conclusion,
    )


def _command(stale_after=None) -> PollBuildCommand:
    return PollBuildCommand(
        build_id=BuildId(BUILD_ID),
        correlation_id=CorrelationId("corr-poll"),
        stale_after=stale_after,
    )


def _clock_after(elapsed: timedelta):
    issued = BuildId(BUILD_ID).issued_at()
    return lambda: issued + elapsed


class TestPollBuildStatus:
    """Tests for mapping CI observations to build states."""

    def test_unknown_build_is_pending(self):
        source = FakeStatusSource()
        response = PollBuildStatusUseCase(source).execute(_command())

        assert response.build_id == BUILD_ID
        assert response.status == "pending"
        assert response.artifact_id is None
        assert response.reason is None
        assert source.artifact_lookups == 0

    def test_unknown_build_without_bound_never_fails(self):
        use_case = PollBuildStatusUseCase(
            FakeStatusSource(), clock=_clock_after(timedelta(days=30))
        )
        assert use_case.execute(_command()).status == "pending"

    def test_unknown_build_within_bound_is_pending(self):
        use_case = PollBuildStatusUseCase(
            FakeStatusSource(), clock=_clock_after(timedelta(minutes=5))
        )
        response = use_case.execute(_command(stale_after=timedelta(minutes=30)))
        assert response.status == "pending"

    def test_unknown_build_past_bound_is_stale(self):
        use_case = PollBuildStatusUseCase(
            FakeStatusSource(), clock=_clock_after(timedelta(hours=2))
        )
        response = use_case.execute(_command(stale_after=timedelta(minutes=30)))
        assert response.status == "failed"
        assert response.reason == STALE_REASON

    @pytest.mark.parametrize("status", ["queued", "in_progress", "waiting"])
    def test_unfinished_run_is_running(self, status):
        source = FakeStatusSource(run=_run(status=status, conclusion=None))
        response = PollBuildStatusUseCase(source).execute(_command())
        assert response.status == "running"
        assert source.artifact_lookups == 0

    def test_found_run_is_never_stale(self):
        use_case = PollBuildStatusUseCase(
            FakeStatusSource(run=_run(status="in_progress", conclusion=None)),
            clock=_clock_after(timedelta(days=1)),
        )
        response = use_case.execute(_command(stale_after=timedelta(minutes=1)))
        assert response.status == "running"

    @pytest.mark.parametrize("conclusion", ["failure", "cancelled", "timed_out"])
    def test_unsuccessful_conclusion_is_failed(self, conclusion):
        source = FakeStatusSource(run=_run(conclusion=conclusion))
        response = PollBuildStatusUseCase(source).execute(_command())
        assert response.status == "failed"
        assert response.reason == conclusion

    def test_successful_run_with_artifact_is_completed(self):
        source = FakeStatusSource(
            run=_run(),
            artifact=WorkflowArtifact(artifact_id=9001, name=f"apk-{BUILD_ID}"),
        )
        response = PollBuildStatusUseCase(source).execute(_command())
        assert response.status == "completed"
        assert response.artifact_id == "9001"
        assert response.reason is None

    def test_successful_run_without_artifact_is_failed(self):
        source = FakeStatusSource(run=_run())
        response = PollBuildStatusUseCase(source).execute(_command())
        assert response.status == "failed"
        assert response.reason == MISSING_ARTIFACT_REASON
        assert response.artifact_id is None

    def test_repeated_polls_agree(self):
        source = FakeStatusSource(
            run=_run(),
            artifact=WorkflowArtifact(artifact_id=9001, name=f"apk-{BUILD_ID}"),
        )
        use_case = PollBuildStatusUseCase(source)
        assert use_case.execute(_command()) == use_case.execute(_command())
        assert source.run_lookups == 2
