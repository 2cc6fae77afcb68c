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

"""APK Bridge HTTP application.

Run with ``uvicorn apk_bridge.main:app`` or ``python -m apk_bridge.main``.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apk_bridge.api.builds import routes as build_routes
from apk_bridge.api.builds.schemas import ErrorResponse
from apk_bridge.api.builds.service import BuildService
from apk_bridge.core.builds.exceptions import (
    BuildDomainError,
    InvalidArtifactBundleError,
    NotFoundError,
    UpstreamRequestError,
)
from apk_bridge.infra.settings import BuildSettings, load_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def error_status(exc: BuildDomainError) -> int:
    """Map a domain error to the HTTP status returned to the caller."""
    if isinstance(exc, UpstreamRequestError):
        if exc.status_code >= 400:
            return exc.status_code
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidArtifactBundleError):
        return status.HTTP_502_BAD_GATEWAY
    # ConfigurationError, ToolchainError and anything unclassified
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def _domain_error_handler(request: Request, exc: BuildDomainError) -> JSONResponse:
    status_code = error_status(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s (correlation_id=%s)",
            request.method, request.url.path, exc.message, exc.correlation_id,
        )
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(status_code, exc.message)


async def _validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


def create_app(settings: Optional[BuildSettings] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Resolved configuration; loaded from the environment when omitted.

    Returns:
        Configured FastAPI instance.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    app = FastAPI(
        title="APK Bridge",
        description="Package websites as signed Android applications",
        version="0.1.0",
    )
    app.add_exception_handler(BuildDomainError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/health", tags=["health"])
    def health():
        service = build_routes.get_build_service()
        return {"status": "ok", "localToolchain": service.settings.local_toolchain_available}

    app.include_router(build_routes.router)
    build_routes.set_build_service(BuildService(settings))

    logger.info(
        "APK Bridge ready (local toolchain %s)",
        "enabled" if settings.local_toolchain_available else "disabled",
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("APK_BRIDGE_HOST", "0.0.0.0"),
        port=int(os.getenv("APK_BRIDGE_PORT", "8000")),
    )
