"""Headless annotation layer: end-of-line route markers for an editor host.

The host (an editor plugin, or the CLI) owns an AnnotationSession and feeds it
Documents. Rendering goes through a DecorationHandle, which stands in for the
editor's disposable decoration/phantom set.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .detector import base_prefix_for_file, is_route_file
from .models import Annotation, AnnotationState, Document, RouteRecord
from .route_extractor import resolve

logger = logging.getLogger(__name__)


@dataclass
class AnnotatorConfig:
    glyph: str = "\U0001F9E9"  # puzzle piece
    label: str = "Route Path"
    debounce_seconds: float = 0.5


def format_marker(record: RouteRecord, glyph: str = AnnotatorConfig.glyph,
                  label: str = AnnotatorConfig.label) -> str:
    return f"{glyph} {label}: {record.resolved_path}"


def annotate(text: str, records: List[RouteRecord],
             glyph: str = AnnotatorConfig.glyph) -> str:
    """Return ``text`` with each route line suffixed by its marker."""
    lines = text.split("\n")
    for record in records:
        if 0 <= record.line_index < len(lines):
            line = lines[record.line_index]
            ending = "\r" if line.endswith("\r") else ""
            lines[record.line_index] = (
                f"{line[:len(line) - len(ending)]}  {format_marker(record, glyph)}{ending}"
            )
    return "\n".join(lines)


class DecorationHandle:
    """Disposable store of the annotations currently shown per document."""

    def __init__(self):
        self._decorations: Optional[Dict[str, List[Annotation]]] = None

    @property
    def active(self) -> bool:
        return self._decorations is not None

    def acquire(self) -> DecorationHandle:
        if self._decorations is None:
            self._decorations = {}
        return self

    def release(self) -> None:
        self._decorations = None

    def __enter__(self) -> DecorationHandle:
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def set(self, doc_id: str, annotations: List[Annotation]) -> None:
        self._require_active()[doc_id] = list(annotations)

    def get(self, doc_id: str) -> List[Annotation]:
        return list(self._require_active().get(doc_id, []))

    def clear(self, doc_id: Optional[str] = None) -> None:
        decorations = self._require_active()
        if doc_id is None:
            decorations.clear()
        else:
            decorations.pop(doc_id, None)

    def _require_active(self) -> Dict[str, List[Annotation]]:
        if self._decorations is None:
            raise RuntimeError("Decoration handle used after release")
        return self._decorations


class AnnotationSession:
    """Owns the enable/disable state and applies scans to a DecorationHandle."""

    def __init__(self, handle: DecorationHandle,
                 config: Optional[AnnotatorConfig] = None,
                 state: AnnotationState = AnnotationState.ENABLED):
        self.handle = handle
        self.config = config or AnnotatorConfig()
        self.state = state

    @property
    def enabled(self) -> bool:
        return self.state is AnnotationState.ENABLED

    def toggle(self) -> str:
        """Flip the state and return the status message to show the user."""
        if self.enabled:
            self.state = AnnotationState.DISABLED
            self.handle.clear()
        else:
            self.state = AnnotationState.ENABLED
        message = f"Laravel Route annotations {self.state.value}"
        logger.info(message)
        return message

    def refresh(self, document: Document) -> List[Annotation]:
        """Recompute and store the annotations for ``document``."""
        if not self.enabled or not is_route_file(document.file_name):
            self.handle.clear(document.doc_id)
            return []

        records = resolve(document.text,
                          base_prefix=base_prefix_for_file(document.file_name))
        annotations = [
            Annotation(line_index=r.line_index,
                       text=format_marker(r, self.config.glyph, self.config.label))
            for r in records
        ]
        self.handle.set(document.doc_id, annotations)
        return annotations

    def close(self, document: Document) -> None:
        self.handle.clear(document.doc_id)


class RescanScheduler:
    """Debounce rescans: each edit resets a per-document timer.

    When a timer fires, the scan is applied only if the document is still the
    active one and no newer request has been scheduled for it.
    """

    def __init__(self, session: AnnotationSession,
                 is_active: Callable[[Document], bool],
                 delay: Optional[float] = None,
                 timer_factory: Callable[..., threading.Timer] = threading.Timer):
        self.session = session
        self.is_active = is_active
        self.delay = session.config.debounce_seconds if delay is None else delay
        self._timer_factory = timer_factory
        self._timers: Dict[str, threading.Timer] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def schedule(self, document: Document) -> None:
        with self._lock:
            pending = self._timers.pop(document.doc_id, None)
            if pending is not None:
                pending.cancel()
            generation = self._generations.get(document.doc_id, 0) + 1
            self._generations[document.doc_id] = generation
            timer = self._timer_factory(self.delay, self._fire,
                                        args=(document, generation))
            timer.daemon = True
            self._timers[document.doc_id] = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()

    def _fire(self, document: Document, generation: int) -> None:
        with self._lock:
            if self._generations.get(document.doc_id) != generation:
                return
            self._timers.pop(document.doc_id, None)

        if not self.is_active(document):
            logger.debug("Skipping rescan of inactive document %s", document.doc_id)
            return

        # A newer edit may have been scheduled while is_active ran.
        with self._lock:
            if self._generations.get(document.doc_id) != generation:
                return
            self.session.refresh(document)
