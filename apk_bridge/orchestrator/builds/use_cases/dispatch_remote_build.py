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

"""Remote build dispatcher implementation."""

import base64
import logging
from typing import Any, Dict, Optional

from apk_bridge.core.builds.entities import BuildRequest
from apk_bridge.core.builds.ports import BuildIdGenerator, WorkflowDispatcher
from apk_bridge.core.builds.value_objects import BuildId

logger = logging.getLogger(__name__)


class RemoteBuildDispatcher:
    """Submits build requests to the remote CI system.

    The CI dispatch call only acknowledges receipt, so the build id is
    minted here before dispatch and embedded in the payload; the workflow
    names its run and artifact after it for later correlation. Rejections
    are reported immediately and never retried.
    """

    def __init__(
        self,
        dispatcher: WorkflowDispatcher,
        id_generator: BuildIdGenerator,
        event_type: str,
    ) -> None:
        """Initialize dispatcher.

        Args:
            dispatcher: Workflow trigger port of the CI system.
            id_generator: Build identifier generator.
            event_type: Event type the build workflow listens for.
        """
        self._dispatcher = dispatcher
        self._id_generator = id_generator
        self._event_type = event_type

    def dispatch(self, request: BuildRequest, build_id: Optional[BuildId] = None) -> BuildId:
        """Trigger a remote build and return its correlation id.

        Args:
            request: The build request.
            build_id: Pre-minted id; a new one is generated when omitted.

        Returns:
            The id embedded in the dispatched payload.

        Raises:
            UpstreamRequestError: If the CI system rejects the dispatch.
        """
        if build_id is None:
            build_id = self._id_generator.generate()
        self._dispatcher.dispatch(self._event_type, self._payload(request, build_id))
        logger.info(
            "Remote build %s dispatched (correlation_id=%s)",
            build_id, request.correlation_id,
        )
        return build_id

    def tracking_url(self) -> str:
        return self._dispatcher.tracking_url()

    @staticmethod
    def _payload(request: BuildRequest, build_id: BuildId) -> Dict[str, Any]:
        return {
            "build_id": str(build_id),
            "app_name": str(request.application_name),
            "app_url": str(request.target_url),
            "icon_base64": base64.b64encode(request.icon.content).decode("ascii"),
        }
