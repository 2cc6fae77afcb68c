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

"""Ephemeral loopback HTTP endpoint serving a build icon.

The packaging toolchain only accepts an icon URL, so the icon is served
from 127.0.0.1 for the duration of project generation.
"""

import logging
import threading
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

LOOPBACK_HOST = "127.0.0.1"
SHUTDOWN_TIMEOUT_SECONDS = 5.0


def _handler_for(content: bytes):
    class _IconHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            self.send_response(200)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(content)))
            self.end_headers()
            self.wfile.write(content)

        def log_message(self, format, *args) -> None:  # pylint: disable=redefined-builtin
            logger.debug("icon server: " + format, *args)

    return _IconHandler


@contextmanager
def serve_icon(icon_path: Path) -> Iterator[str]:
    """Serve icon_path on a free loopback port and yield its URL.

    The server is shut down on every exit path. Errors raised while
    shutting down are logged and swallowed so they never mask the
    outcome of the build.

    Args:
        icon_path: PNG file to serve.

    Yields:
        URL of the icon, e.g. ``http://127.0.0.1:53121/icon.png``.
    """
    content = Path(icon_path).read_bytes()
    server = ThreadingHTTPServer((LOOPBACK_HOST, 0), _handler_for(content))
    port = server.server_address[1]
    thread = threading.Thread(
        target=server.serve_forever,
        name=f"icon-server-{port}",
        daemon=True,
    )
    thread.start()
    logger.info("Icon server listening on %s:%d", LOOPBACK_HOST, port)
    try:
        yield f"http://{LOOPBACK_HOST}:{port}/icon.png"
    finally:
        try:
            server.shutdown()
            server.server_close()
            thread.join(timeout=SHUTDOWN_TIMEOUT_SECONDS)
        except OSError as exc:
            logger.warning("Icon server on port %d did not close cleanly: %s", port, exc)
        else:
            logger.info("Icon server on port %d closed", port)
