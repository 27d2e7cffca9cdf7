"""WebSocket subject server for glow-label.

Every WebSocket connection that joins becomes an animated subject: it
receives its gradient label as a JSON frame on every tick, can switch to
a custom gradient, and departs when it leaves or disconnects.

Protocol (JSON text messages):
    -> {"type": "join", "name": "Steve"}
    <- {"type": "joined", "key": "...", "label": "FancyItem | Steve"}
    -> {"type": "set_gradient", "notation": "<#FF0000:0 #0000FF:1>"}
    -> {"type": "set_gradient", "preset": "fire"}
    <- {"type": "gradient_set", "notation": "<#FF0000:0.0 #0000FF:1.0>"}
    -> {"type": "reset_gradient"}
    -> {"type": "leave"}
    <- {"type": "frame", "label": {"text": "", "bold": true, "extra": [...]}}
    <- {"type": "error", "message": "..."}
"""

import asyncio
import json
import logging
import threading
import uuid
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any

from aiohttp import web, WSMsgType

from ..animation.scheduler import AnimationScheduler
from ..config.schema import GlowLabelConfig, LabelConfig
from ..gradient.notation import NotationError, ParseResult, format_notation, parse_notation
from ..gradient.presets import get_preset

if TYPE_CHECKING:
    from ..text.component import TextComponent

logger = logging.getLogger(__name__)

# Default port for the subject server
DEFAULT_PORT = 9877


class WebSocketSubject:
    """A joined WebSocket client, as seen by the animation scheduler."""

    def __init__(
        self,
        key: str,
        name: str,
        ws: web.WebSocketResponse,
        loop: asyncio.AbstractEventLoop,
        label_config: LabelConfig,
    ):
        self.key = key
        self.name = name
        self.ws = ws
        self.loop = loop
        self.label_config = label_config

    def label(self) -> str:
        return self.label_config.render(self.name)

    def deliver(self, component: "TextComponent") -> None:
        """
        Queue a frame for sending on the server's event loop.

        Called from the ticker thread; never blocks on the network.

        Raises:
            ConnectionResetError: If the socket is already closed
        """
        if self.ws.closed:
            raise ConnectionResetError(f"WebSocket for {self.name!r} is closed")

        message = {"type": "frame", "label": component.to_json()}
        future = asyncio.run_coroutine_threadsafe(self.ws.send_json(message), self.loop)
        future.add_done_callback(self._on_sent)

    def _on_sent(self, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.debug("Frame to %r not sent: %s", self.name, error)


class LabelServer:
    """WebSocket server acting as the subject registry for the scheduler."""

    def __init__(
        self,
        config: GlowLabelConfig | None = None,
        host: str | None = None,
        port: int | None = None,
    ):
        self.config = config or GlowLabelConfig.with_defaults()
        self.host = host if host is not None else self.config.server.host
        self.port = port if port is not None else self.config.server.port

        self.scheduler = AnimationScheduler(
            registry=self,
            config=self.config.animation,
            formatting=self.config.label.formatting_flags(),
        )

        # Written by the event loop thread, read by the ticker thread
        self._subjects: dict[str, WebSocketSubject] = {}
        self._subjects_lock = threading.Lock()

        self._app: web.Application | None = None
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None
        self._sockets: set[web.WebSocketResponse] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._start_error: BaseException | None = None

    # -- SubjectRegistry --------------------------------------------------

    def active_subjects(self) -> list[WebSocketSubject]:
        """Snapshot of the currently joined subjects."""
        with self._subjects_lock:
            return list(self._subjects.values())

    @property
    def subject_count(self) -> int:
        with self._subjects_lock:
            return len(self._subjects)

    # -- WebSocket handling -----------------------------------------------

    async def _handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle incoming WebSocket connection."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        self._sockets.add(ws)

        subject: WebSocketSubject | None = None
        try:
            async for msg in ws:
                if msg.type == WSMsgType.TEXT:
                    try:
                        data = json.loads(msg.data)
                    except json.JSONDecodeError:
                        await ws.send_json({"type": "error", "message": "Invalid JSON"})
                        continue
                    if not isinstance(data, dict):
                        await ws.send_json({"type": "error", "message": "Expected a JSON object"})
                        continue
                    subject = await self._handle_command(data, ws, subject)
                elif msg.type == WSMsgType.ERROR:
                    logger.warning("WebSocket error: %s", ws.exception())
        finally:
            self._sockets.discard(ws)
            if subject is not None:
                await self._depart(subject)

        return ws

    async def _handle_command(
        self,
        data: dict[str, Any],
        ws: web.WebSocketResponse,
        subject: WebSocketSubject | None,
    ) -> WebSocketSubject | None:
        """Handle a command from a client; returns the socket's subject afterwards."""
        cmd_type = data.get("type")

        if cmd_type == "join":
            if subject is not None:
                await ws.send_json({"type": "error", "message": "Already joined"})
                return subject
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                await ws.send_json({"type": "error", "message": "join requires a non-empty name"})
                return None
            subject = self._join(name.strip(), ws)
            await ws.send_json({"type": "joined", "key": subject.key, "label": subject.label()})
            return subject

        if subject is None:
            await ws.send_json({"type": "error", "message": "Send a join message first"})
            return None

        if cmd_type == "set_gradient":
            result = self._resolve_gradient(data)
            if result.ok:
                stops = result.unwrap()
                self.scheduler.set_stops(subject.key, stops)
                await ws.send_json({"type": "gradient_set", "notation": format_notation(stops)})
            else:
                await ws.send_json({"type": "error", "message": str(result.error)})

        elif cmd_type == "reset_gradient":
            self.scheduler.reset_stops(subject.key)
            await ws.send_json({"type": "gradient_reset"})

        elif cmd_type == "leave":
            await self._depart(subject)
            await ws.send_json({"type": "left"})
            return None

        else:
            await ws.send_json({"type": "error", "message": f"Unknown command: {cmd_type}"})

        return subject

    def _resolve_gradient(self, data: dict[str, Any]) -> ParseResult:
        """Turn a set_gradient request into stops (from a preset or notation)."""
        preset = data.get("preset")
        if preset is not None:
            stops = get_preset(str(preset))
            if stops is None:
                return ParseResult(error=NotationError(f"Unknown preset: {preset}"))
            return ParseResult(stops=stops)

        notation = data.get("notation")
        if not isinstance(notation, str):
            return ParseResult(error=NotationError("set_gradient requires a notation or preset"))
        return parse_notation(notation)

    def _join(self, name: str, ws: web.WebSocketResponse) -> WebSocketSubject:
        # Fresh key per join: a reconnecting client never picks up old state
        subject = WebSocketSubject(
            key=uuid.uuid4().hex,
            name=name,
            ws=ws,
            loop=asyncio.get_running_loop(),
            label_config=self.config.label,
        )
        with self._subjects_lock:
            self._subjects[subject.key] = subject
        logger.info("Subject %r joined (%d total)", name, self.subject_count)
        return subject

    async def _depart(self, subject: WebSocketSubject) -> None:
        # Leave the registry first so no later tick can recreate the state
        with self._subjects_lock:
            self._subjects.pop(subject.key, None)
        # The scheduler lock is held for a whole tick; wait for it off the loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.scheduler.on_subject_departed, subject.key)
        logger.info("Subject %r left (%d total)", subject.name, self.subject_count)

    # -- Lifecycle ----------------------------------------------------------

    def build_app(self) -> web.Application:
        """Create the aiohttp application (also used by tests)."""
        app = web.Application()
        app.router.add_get("/ws", self._handle_websocket)
        return app

    async def start(self) -> None:
        """Start the server (async)."""
        self._app = self.build_app()

        self._runner = web.AppRunner(self._app)
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        logger.info("WebSocket server running on ws://%s:%d/ws", self.host, self.port)

    async def stop(self) -> None:
        """Stop the server (async)."""
        for ws in list(self._sockets):
            await ws.close()
        self._sockets.clear()

        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    def start_in_thread(self) -> threading.Thread:
        """Start the server in a background thread.

        Returns the thread so caller can join it on shutdown.

        Raises:
            OSError: If the server could not start (e.g. the port is in use);
                the thread has finished by then
        """
        started = threading.Event()
        self._start_error = None

        def run():
            self._loop = asyncio.new_event_loop()
            asyncio.set_event_loop(self._loop)

            try:
                try:
                    self._loop.run_until_complete(self.start())
                except Exception as e:
                    self._start_error = e
                    return
                started.set()
                self._loop.run_forever()
            finally:
                started.set()
                self._loop.run_until_complete(self.stop())
                self._loop.close()

        thread = threading.Thread(target=run, daemon=True, name="LabelServer")
        thread.start()
        started.wait()

        if self._start_error is not None:
            thread.join()
            raise self._start_error
        return thread

    def stop_thread(self) -> None:
        """Signal the background server thread to stop."""
        if self._loop and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._loop.stop)
