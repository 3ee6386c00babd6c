"""Host bridge session: routes host messages into a ``RoutingEditor``.

Outgoing document text is debounced: a burst of edits produces a single
``updateText`` carrying the latest text.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from routing_studio.bridge.protocol import (
    Command,
    CommandMessage,
    CoreMessage,
    InitMessage,
    LogLevel,
    LogMessage,
    ReadyMessage,
    SetFileInfoMessage,
    SetTextMessage,
    UpdateTextMessage,
    ValidateResultMessage,
    WireIssue,
    parse_host_message,
)
from routing_studio.routing.types import RoutingDocument
from routing_studio.state.editor import RoutingEditor

logger = logging.getLogger("routing_studio.bridge.session")

PostFn = Callable[[dict[str, Any]], None]


class Debouncer:
    """Calls *callback* with the latest value once *delay* seconds pass without a new trigger.

    Runs on the current asyncio event loop; each trigger resets the timer.
    """

    def __init__(self, delay: float, callback: Callable[[Any], None]) -> None:
        self._delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._value: Any = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, value: Any) -> None:
        self._value = value
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Deliver a pending value now."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        value, self._value = self._value, None
        self._callback(value)


class EditorBridge:
    """Connects a ``RoutingEditor`` to a host through *post*.

    *post* receives plain JSON-ready dicts. With ``debounce_seconds=0`` text
    updates are posted immediately and no event loop is needed.
    """

    def __init__(
        self,
        editor: RoutingEditor,
        post: PostFn,
        debounce_seconds: float = 0.25,
    ) -> None:
        self.editor = editor
        self._post = post
        self._debounce_seconds = debounce_seconds
        self._debouncer = Debouncer(debounce_seconds, self._post_text)
        self.initialised = False
        self.host_issues: list[WireIssue] = []

    def _send(self, message: CoreMessage) -> None:
        self._post(message.to_wire())

    def _post_text(self, text: str) -> None:
        self._send(UpdateTextMessage(text=text))

    # -- Outgoing --------------------------------------------------------------

    def start(self) -> None:
        self._send(ReadyMessage())

    def notify_changed(self) -> None:
        """Offer the current text to the host, subject to the debounce."""
        if not self.initialised:
            return
        text = self.editor.current_text
        if self._debounce_seconds <= 0:
            self._post_text(text)
        else:
            self._debouncer.trigger(text)

    def send_command(self, command: Command) -> None:
        """Ask the host to act; carries the latest text so no debounce race is possible."""
        self._debouncer.cancel()
        self._send(CommandMessage(command=command, text=self.editor.current_text))

    def log(self, level: LogLevel, message: str, data: Any = None) -> None:
        self._send(LogMessage(level=level, message=message, data=data))

    def flush(self) -> None:
        self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    # -- Editing passthroughs ----------------------------------------------------

    def update_routing(self, mutate: Callable[[RoutingDocument], None], silent: bool = False) -> None:
        self.editor.update_routing(mutate, silent=silent)
        self.notify_changed()

    def undo(self) -> None:
        self.editor.undo()
        self.notify_changed()

    def redo(self) -> None:
        self.editor.redo()
        self.notify_changed()

    # -- Incoming --------------------------------------------------------------

    def handle(self, raw: Any) -> None:
        msg = parse_host_message(raw)
        if msg is None:
            return

        match msg:
            case InitMessage():
                logger.info("bridge.init %s", msg.file_name)
                self.initialised = True
                if self.editor.load_from_text(
                    msg.text, msg.file_name, file_uri=msg.uri, mark_saved=True, silent=True
                ):
                    self.notify_changed()
            case SetFileInfoMessage():
                self.editor.file_name = msg.file_name
                self.editor.file_uri = msg.uri
                self.initialised = True
            case SetTextMessage():
                self.initialised = True
                if msg.text == self.editor.current_text:
                    return
                if self.editor.load_from_text(msg.text, self.editor.file_name, silent=True):
                    self.notify_changed()
            case ValidateResultMessage():
                self.host_issues = list(msg.issues)
                logger.debug("bridge.validateResult %d issue(s)", len(msg.issues))
