"""Threaded websockets server for the timer page and its live session feed."""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from websockets.asyncio.server import ServerConnection, broadcast, serve
from websockets.datastructures import Headers
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_HELLO

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import StickyEventStore, make_event, parse_intent

IntentHandler = Callable[[dict[str, Any]], None]

_HTML = "text/html; charset=utf-8"
_TEXT = "text/plain; charset=utf-8"


class UIServer:
    """Serves the timer page and pushes session events to websocket clients.

    The asyncio loop lives on a daemon thread. ``publish`` may be called from
    any thread. Intents received from clients are passed to the intent
    handler on the server thread.
    """

    def __init__(
        self,
        config: UIServerConfig,
        on_intent: Optional[IntentHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._on_intent = on_intent
        self._logger = logger or logging.getLogger("ui_server")
        self._sticky_events = StickyEventStore()
        self._clients: set[ServerConnection] = set()

        index_html = Path(config.index_file).read_bytes()
        self._routes: dict[str, tuple[bytes, str]] = {
            ROOT_PATH: (index_html, _HTML),
            INDEX_PATH: (index_html, _HTML),
            HEALTHZ_PATH: (b"ok\n", _TEXT),
        }

        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready: Optional[concurrent.futures.Future[None]] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

    @property
    def is_running(self) -> bool:
        ready = self._ready
        if self._thread is None or not self._thread.is_alive():
            return False
        return ready is not None and ready.done() and ready.exception() is None

    def set_intent_handler(self, on_intent: Optional[IntentHandler]) -> None:
        self._on_intent = on_intent

    def start(self, timeout_seconds: float = 5.0) -> None:
        """Start serving; raises ``RuntimeError`` if the socket cannot be bound in time."""
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        ready: concurrent.futures.Future[None] = concurrent.futures.Future()
        self._ready = ready
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(ready,),
            daemon=True,
            name="ui-server",
        )
        self._thread.start()

        try:
            ready.result(timeout=timeout_seconds)
        except concurrent.futures.TimeoutError as error:
            raise RuntimeError(
                f"UI server did not start within {timeout_seconds:.1f}s"
            ) from error
        except Exception as error:
            raise RuntimeError(f"UI server startup failed: {error}") from error

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return

        loop, shutdown = self._loop, self._shutdown
        if loop is not None and shutdown is not None:
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(shutdown.set)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error(
                "UI server thread did not stop within %.1fs",
                timeout_seconds,
            )
        self._thread = None
        self._shutdown = None

    def publish(self, event_type: str, **payload: Any) -> None:
        message = make_event(event_type, **payload)
        self._sticky_events.remember(event_type, message)

        loop = self._loop
        if loop is None or not self.is_running:
            return
        try:
            loop.call_soon_threadsafe(self._broadcast, message)
        except RuntimeError:
            # Loop closed between the check and the call.
            return

    def _broadcast(self, message: str) -> None:
        if self._clients:
            broadcast(self._clients, message)

    def _run_loop(self, ready: concurrent.futures.Future[None]) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop

        try:
            loop.run_until_complete(self._serve(ready))
        except Exception as error:  # pragma: no cover - depends on host networking
            self._logger.error("UI server failed: %s", error, exc_info=True)
            if not ready.done():
                ready.set_exception(error)
        finally:
            self._loop = None
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            if pending:
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()

    async def _serve(self, ready: concurrent.futures.Future[None]) -> None:
        self._shutdown = asyncio.Event()
        async with serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server listening on http://%s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            ready.set_result(None)
            await self._shutdown.wait()

    async def _handler(self, connection: ServerConnection) -> None:
        # Plain HTTP paths are answered in _process_request, so only the
        # websocket path reaches this point.
        self._clients.add(connection)
        self._logger.info("Client connected: %s", connection.remote_address)
        try:
            await connection.send(make_event(EVENT_HELLO, message="UI websocket connected"))
            for message in self._sticky_events.snapshot():
                await connection.send(message)
            async for message in connection:
                self._dispatch_message(message)
        except ConnectionClosed:
            pass
        finally:
            self._clients.discard(connection)
            self._logger.info("Client disconnected: %s", connection.remote_address)

    def _dispatch_message(self, message: str | bytes) -> None:
        intent = parse_intent(message)
        if intent is None:
            self._logger.warning("Ignoring malformed UI message: %r", message)
            return

        self._logger.debug("Received intent from UI: %s", intent["type"])
        if self._on_intent is not None:
            self._on_intent(intent)

    def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Optional[Response]:
        del connection
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None

        route = self._routes.get(path)
        if route is None:
            return _response(HTTPStatus.NOT_FOUND, b"not found\n", _TEXT)
        body, content_type = route
        return _response(HTTPStatus.OK, body, content_type)


def _response(status: HTTPStatus, body: bytes, content_type: str) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status.value, status.phrase, headers, body)
