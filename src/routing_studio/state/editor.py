"""Editor session: the one place that produces new document versions.

Views call into ``RoutingEditor``; derived data (issues, status, dirty,
suggestions) is recomputed from the current snapshot on every read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from routing_studio.config.constants import DEFAULT_FILE_NAME, MAX_TOASTS
from routing_studio.routing.schema import parse_document, serialize_document, write_text_atomic
from routing_studio.routing.templates import STARTER_FILE_NAME, create_starter_document
from routing_studio.routing.types import IssueSummary, RoutingDocument, UiConfig, ValidationIssue
from routing_studio.routing.ui_config import UiConfigStore
from routing_studio.routing.validate import (
    suggest_models_for_class,
    summarize_issues,
    validate_routing,
)
from routing_studio.state.history import History

logger = logging.getLogger("routing_studio.state.editor")

_UNSET = object()


@dataclass(frozen=True)
class Toast:
    kind: str  # info | success | warning | error
    message: str


class RoutingEditor:
    """Wraps ``History`` with file info, dirty tracking and the UI config.

    The UI config is loaded once from *ui_store* here and saved back on every
    ``save_ui`` call, independently of document undo/redo.
    """

    def __init__(
        self,
        ui_store: UiConfigStore,
        initial: RoutingDocument | None = None,
        file_name: str = STARTER_FILE_NAME,
    ) -> None:
        doc = initial if initial is not None else create_starter_document()
        self._history: History[RoutingDocument] = History(doc)
        self._ui_store = ui_store
        self.file_name = file_name
        self.file_uri: str | None = None
        self.raw_json_draft = serialize_document(doc)
        self.raw_json_error: str | None = None
        self._baseline_text = self.raw_json_draft
        self.ui_config: UiConfig = ui_store.load()
        self.toasts: list[Toast] = []

    # -- Derived state ---------------------------------------------------------

    @property
    def routing(self) -> RoutingDocument:
        return self._history.present

    @property
    def history(self) -> History[RoutingDocument]:
        return self._history

    @property
    def current_text(self) -> str:
        return serialize_document(self._history.present)

    @property
    def issues(self) -> list[ValidationIssue]:
        return validate_routing(self._history.present)

    @property
    def status(self) -> IssueSummary:
        return summarize_issues(self.issues)

    @property
    def dirty(self) -> bool:
        return self.current_text != self._baseline_text

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def mark_saved(self) -> None:
        """Treat the current document as the saved baseline."""
        self._baseline_text = self.current_text

    # -- Notifications ---------------------------------------------------------

    def push_toast(self, kind: str, message: str) -> None:
        self.toasts = [*self.toasts, Toast(kind, message)][-MAX_TOASTS:]

    def clear_toasts(self) -> None:
        self.toasts = []

    # -- Mutation --------------------------------------------------------------

    def _sync_raw_from_state(self, doc: RoutingDocument) -> None:
        self.raw_json_draft = serialize_document(doc)
        self.raw_json_error = None

    def set_routing(self, next_doc: RoutingDocument, silent: bool = False) -> None:
        """Commit *next_doc* as a new version. It must not alias the present one."""
        self._history.set(next_doc)
        self._sync_raw_from_state(next_doc)
        if not silent:
            self.push_toast("success", "Updated.")

    def update_routing(
        self, mutate: Callable[[RoutingDocument], None], silent: bool = False
    ) -> RoutingDocument:
        """Deep-copy the present document, let *mutate* edit the copy, then commit it."""
        draft = self._history.present.model_copy(deep=True)
        mutate(draft)
        self.set_routing(draft, silent=silent)
        return draft

    def undo(self) -> None:
        self._history.undo()
        self._sync_raw_from_state(self._history.present)

    def redo(self) -> None:
        self._history.redo()
        self._sync_raw_from_state(self._history.present)

    # -- File lifecycle --------------------------------------------------------

    def new_file(self) -> None:
        doc = create_starter_document()
        self._history.reset(doc)
        self.file_name = STARTER_FILE_NAME
        self.file_uri = None
        self._sync_raw_from_state(doc)
        self._baseline_text = serialize_document(doc)
        logger.info("editor.new")
        self.push_toast("success", "Started a new routing file.")

    def load_from_text(
        self,
        text: str,
        name: str | None = None,
        *,
        file_uri: str | None | object = _UNSET,
        mark_saved: bool = False,
        silent: bool = False,
    ) -> bool:
        """Replace the document with parsed *text*, discarding history.

        On failure the current document is kept and *text* is left in the
        raw draft with the error beside it. Returns whether the load succeeded.
        """
        self.file_name = name or DEFAULT_FILE_NAME
        if file_uri is not _UNSET:
            self.file_uri = file_uri

        result = parse_document(text)
        if not result.ok:
            self.raw_json_draft = text
            self.raw_json_error = result.message
            logger.warning("editor.load.failed %s: %s", self.file_name, result.message)
            if not silent:
                self.push_toast("error", result.message)
            return False

        self._history.reset(result.value)
        self._sync_raw_from_state(result.value)
        if mark_saved:
            self._baseline_text = serialize_document(result.value)
        logger.info("editor.load %s", self.file_name)
        if not silent:
            self.push_toast("success", f"Loaded {self.file_name}.")
        return True

    def apply_raw_json_draft(self) -> bool:
        return self.load_from_text(self.raw_json_draft, self.file_name)

    def save(self, path: Path | None = None) -> Path:
        """Write the current document and advance the saved baseline."""
        if path is None:
            if not self.file_uri:
                raise ValueError("No target path: the document has never been saved")
            path = Path(self.file_uri)
        text = self.current_text
        write_text_atomic(path, text)
        self.file_uri = str(path)
        self.file_name = path.name
        self._baseline_text = text
        logger.info("editor.save %s", path)
        self.push_toast("success", f"Saved {self.file_name}.")
        return path

    # -- UI config -------------------------------------------------------------

    def save_ui(self, next_cfg: UiConfig, silent: bool = True) -> None:
        self.ui_config = next_cfg
        self._ui_store.save(next_cfg)
        if not silent:
            self.push_toast("success", "Saved UI configuration (local only).")

    def suggest_for_class(self, class_key: str) -> list[str]:
        """Suggestions from the class's configured rules; none when it has no rules."""
        meta = self.ui_config.class_meta.get(class_key)
        if meta is None or not meta.rules:
            return []
        return suggest_models_for_class(self._history.present, meta.rules)
