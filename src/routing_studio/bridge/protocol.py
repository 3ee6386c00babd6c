"""Messages exchanged between the editor core and its host (e.g. an IDE extension)."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from routing_studio.routing.types import Severity

logger = logging.getLogger("routing_studio.bridge.protocol")

Command = Literal["open", "newFile", "save", "export", "validate", "showOutput"]
LogLevel = Literal["info", "warn", "error"]


class _Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Host → core ------------------------------------------------------------


class InitMessage(_Message):
    type: Literal["init"] = "init"
    text: str
    file_name: str = Field(alias="fileName")
    uri: str | None = None


class SetFileInfoMessage(_Message):
    type: Literal["setFileInfo"] = "setFileInfo"
    file_name: str = Field(alias="fileName")
    uri: str | None = None


class SetTextMessage(_Message):
    type: Literal["setText"] = "setText"
    text: str


class WireIssue(BaseModel):
    severity: Severity
    path: str
    message: str


class ValidateResultMessage(_Message):
    type: Literal["validateResult"] = "validateResult"
    issues: list[WireIssue]


HostMessage = Annotated[
    Union[InitMessage, SetFileInfoMessage, SetTextMessage, ValidateResultMessage],
    Field(discriminator="type"),
]


# --- Core → host ------------------------------------------------------------


class ReadyMessage(_Message):
    type: Literal["ready"] = "ready"


class UpdateTextMessage(_Message):
    type: Literal["updateText"] = "updateText"
    text: str


class CommandMessage(_Message):
    type: Literal["command"] = "command"
    command: Command
    # Snapshot of the current text so the host never acts on a stale debounce
    text: str | None = None


class LogMessage(_Message):
    type: Literal["log"] = "log"
    level: LogLevel
    message: str
    data: Any = None


CoreMessage = Annotated[
    Union[ReadyMessage, UpdateTextMessage, CommandMessage, LogMessage],
    Field(discriminator="type"),
]

_host_adapter: TypeAdapter[HostMessage] = TypeAdapter(HostMessage)
_core_adapter: TypeAdapter[CoreMessage] = TypeAdapter(CoreMessage)


def parse_host_message(data: Any) -> HostMessage | None:
    """Validate an incoming message; invalid ones are logged and dropped."""
    try:
        return _host_adapter.validate_python(data)
    except ValidationError as exc:
        logger.warning("bridge.message.invalid: %s", exc.errors(include_url=False))
        return None


def parse_core_message(data: Any) -> CoreMessage | None:
    """Host-side counterpart of ``parse_host_message``."""
    try:
        return _core_adapter.validate_python(data)
    except ValidationError as exc:
        logger.warning("bridge.message.invalid: %s", exc.errors(include_url=False))
        return None
