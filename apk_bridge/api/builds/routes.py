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

"""HTTP routes for build submission, polling and package download.

Domain errors raised here are turned into responses by the handlers
registered in ``apk_bridge.main``.
"""

import logging
from datetime import timedelta
from typing import Optional, Union
from urllib.parse import quote

from fastapi import APIRouter, File, Form, Header, Query, Response, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse

from apk_bridge.core.builds.value_objects import (
    ApplicationName,
    ArtifactId,
    BuildId,
    IconImage,
    TargetUrl,
)
from apk_bridge.infra.settings import load_settings
from apk_bridge.orchestrator.builds.commands import (
    FetchLocalPackageCommand,
    PollBuildCommand,
    RetrieveArtifactCommand,
    SubmitBuildCommand,
)

from .schemas import BuildStatusSchema, CloudBuildResponse, ErrorResponse, LocalBuildResponse
from .service import BuildService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["builds"])

_build_service: Optional[BuildService] = None


def get_build_service() -> BuildService:
    """Return the process-wide build service, creating it on first use."""
    global _build_service  # pylint: disable=global-statement
    if _build_service is None:
        _build_service = BuildService(load_settings())
    return _build_service


def set_build_service(service: Optional[BuildService]) -> None:
    global _build_service  # pylint: disable=global-statement
    _build_service = service


def _bad_request(message: str) -> JSONResponse:
    logger.warning("Rejected request: %s", message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=message).model_dump(),
    )


def _download_url(build_id: str) -> str:
    return f"{router.prefix}/download?buildId={build_id}"


def _content_disposition(filename: str) -> str:
    """Attachment header value, encoded the way FileResponse encodes it."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


@router.post(
    "/build",
    response_model=Union[LocalBuildResponse, CloudBuildResponse],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def submit_build(
    name: str = Form(...),
    url: str = Form(...),
    icon: UploadFile = File(...),
    x_correlation_id: Optional[str] = Header(None),
):
    """Accept a build request and run it locally or dispatch it to CI."""
    service = get_build_service()
    try:
        command = SubmitBuildCommand(
            application_name=ApplicationName(name),
            target_url=TargetUrl(url),
            icon=IconImage(icon.file.read()),
            correlation_id=service.correlation_id(x_correlation_id),
        )
    except ValueError as exc:
        return _bad_request(str(exc))

    result = service.submit_build().execute(command)

    if result.is_dispatched:
        return CloudBuildResponse(build_id=result.build_id, tracking_url=result.tracking_url)
    return LocalBuildResponse(
        build_id=result.build_id,
        download_url=_download_url(result.build_id),
        package_id=result.package_id,
        sha256_fingerprint=result.sha256_fingerprint,
    )


@router.get(
    "/status",
    response_model=BuildStatusSchema,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
def get_build_status(
    build_id: Optional[str] = Query(None, alias="buildId"),
    stale_after: Optional[float] = Query(None, alias="staleAfter", ge=0),
    x_correlation_id: Optional[str] = Header(None),
):
    """Resolve the state of a remote build. Unknown builds are pending."""
    if not build_id:
        return _bad_request("Missing buildId")
    service = get_build_service()
    try:
        command = PollBuildCommand(
            build_id=BuildId(build_id),
            correlation_id=service.correlation_id(x_correlation_id),
            stale_after=timedelta(seconds=stale_after) if stale_after is not None else None,
        )
    except ValueError as exc:
        return _bad_request(str(exc))

    result = service.poll_build_status().execute(command)
    return BuildStatusSchema(
        build_id=result.build_id,
        status=result.status,
        artifact_id=result.artifact_id,
        reason=result.reason,
    )


@router.get(
    "/artifact",
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def download_artifact(
    artifact_id: Optional[str] = Query(None, alias="artifactId"),
    x_correlation_id: Optional[str] = Header(None),
):
    """Stream the package inside a CI artifact bundle."""
    if not artifact_id:
        return _bad_request("Missing artifactId")
    service = get_build_service()
    try:
        command = RetrieveArtifactCommand(
            artifact_id=ArtifactId(artifact_id),
            correlation_id=service.correlation_id(x_correlation_id),
        )
    except ValueError as exc:
        return _bad_request(str(exc))

    payload = service.retrieve_artifact().execute(command)
    return Response(
        content=payload.content,
        media_type=payload.media_type,
        headers={"Content-Disposition": _content_disposition(payload.filename)},
    )


@router.get(
    "/download",
    response_class=FileResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def download_local_package(
    build_id: Optional[str] = Query(None, alias="buildId"),
    x_correlation_id: Optional[str] = Header(None),
):
    """Serve the signed package of a finished local build."""
    if not build_id:
        return _bad_request("Missing buildId")
    service = get_build_service()
    try:
        command = FetchLocalPackageCommand(
            build_id=BuildId(build_id),
            correlation_id=service.correlation_id(x_correlation_id),
        )
    except ValueError as exc:
        return _bad_request(str(exc))

    package = service.fetch_local_package().execute(command)
    return FileResponse(
        path=package.path,
        media_type=package.media_type,
        filename=package.filename,
    )
