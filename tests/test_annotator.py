"""Tests for the annotation layer."""

import pytest

from laravel_routes import resolve
from laravel_routes.annotator import (
    AnnotationSession,
    AnnotatorConfig,
    DecorationHandle,
    RescanScheduler,
    annotate,
    format_marker,
)
from laravel_routes.models import AnnotationState, Document

ROUTES = "\n".join([
    "<?php",
    "Route::prefix('v1')->group(function () {",
    "    Route::get('/posts', fn () => 1);",
    "});",
])


class FakeTimer:
    """Stands in for threading.Timer; fired manually by the test."""

    created = []

    def __init__(self, interval, function, args=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args)


@pytest.fixture(autouse=True)
def reset_timers():
    FakeTimer.created = []


class TestMarkers:
    def test_format_marker(self):
        record = resolve("Route::get('/users', fn () => 1);")[0]
        assert format_marker(record) == "\U0001F9E9 Route Path: /users"

    def test_format_marker_custom_glyph(self):
        record = resolve("Route::get('/users', fn () => 1);")[0]
        assert format_marker(record, glyph=">>") == ">> Route Path: /users"

    def test_annotate_appends_to_route_lines_only(self):
        out = annotate(ROUTES, resolve(ROUTES), glyph="#").split("\n")
        assert out[0] == "<?php"
        assert out[2] == "    Route::get('/posts', fn () => 1);  # Route Path: /v1/posts"
        assert out[3] == "});"

    def test_annotate_keeps_crlf_line_endings(self):
        text = "Route::get('/a', fn () => 1);\r\nRoute::get('/b', fn () => 2);\r\n"
        out = annotate(text, resolve(text), glyph="#")
        assert out == (
            "Route::get('/a', fn () => 1);  # Route Path: /a\r\n"
            "Route::get('/b', fn () => 2);  # Route Path: /b\r\n"
        )


class TestDecorationHandle:
    def test_context_manager_releases(self):
        with DecorationHandle() as handle:
            handle.set("doc", [])
            assert handle.active
        assert not handle.active

    def test_use_after_release_raises(self):
        handle = DecorationHandle().acquire()
        handle.release()
        with pytest.raises(RuntimeError):
            handle.get("doc")


class TestAnnotationSession:
    def setup_method(self):
        self.handle = DecorationHandle().acquire()
        self.session = AnnotationSession(self.handle)
        self.doc = Document(doc_id="1", file_name="/app/routes/api.php", text=ROUTES)

    def test_refresh_uses_file_base_prefix(self):
        annotations = self.session.refresh(self.doc)
        assert len(annotations) == 1
        assert annotations[0].line_index == 2
        assert annotations[0].text.endswith("Route Path: /api/v1/posts")
        assert self.handle.get("1") == annotations

    def test_non_route_file_is_cleared(self):
        self.session.refresh(self.doc)
        other = Document(doc_id="1", file_name="/app/app/Models/User.php", text=ROUTES)
        assert self.session.refresh(other) == []
        assert self.handle.get("1") == []

    def test_untitled_document_is_ignored(self):
        assert self.session.refresh(Document(doc_id="2", file_name=None, text=ROUTES)) == []

    def test_toggle(self):
        self.session.refresh(self.doc)
        assert self.session.toggle() == "Laravel Route annotations disabled"
        assert self.session.state is AnnotationState.DISABLED
        assert self.handle.get("1") == []
        assert self.session.refresh(self.doc) == []

        assert self.session.toggle() == "Laravel Route annotations enabled"
        assert len(self.session.refresh(self.doc)) == 1

    def test_close(self):
        self.session.refresh(self.doc)
        self.session.close(self.doc)
        assert self.handle.get("1") == []

    def test_custom_label(self):
        session = AnnotationSession(self.handle, AnnotatorConfig(glyph="*", label="URL"))
        assert session.refresh(self.doc)[0].text == "* URL: /api/v1/posts"


class TestRescanScheduler:
    def setup_method(self):
        self.handle = DecorationHandle().acquire()
        self.session = AnnotationSession(self.handle)
        self.active = True
        self.scheduler = RescanScheduler(self.session, lambda doc: self.active,
                                         timer_factory=FakeTimer)

    def _doc(self, text=ROUTES):
        return Document(doc_id="1", file_name="/app/routes/web.php", text=text)

    def test_uses_configured_delay(self):
        self.scheduler.schedule(self._doc())
        assert FakeTimer.created[0].interval == 0.5
        assert FakeTimer.created[0].started

    def test_fire_refreshes(self):
        self.scheduler.schedule(self._doc())
        FakeTimer.created[0].fire()
        assert len(self.handle.get("1")) == 1

    def test_new_edit_cancels_pending_scan(self):
        self.scheduler.schedule(self._doc())
        self.scheduler.schedule(self._doc("<?php"))
        first, second = FakeTimer.created
        assert first.cancelled

        # A stale timer that fires anyway is ignored.
        first.fire()
        assert self.handle.get("1") == []

        second.fire()
        assert self.handle.get("1") == []

    def test_latest_text_wins(self):
        self.scheduler.schedule(self._doc("<?php"))
        self.scheduler.schedule(self._doc())
        FakeTimer.created[1].fire()
        assert len(self.handle.get("1")) == 1

    def test_inactive_document_is_skipped(self):
        self.scheduler.schedule(self._doc())
        self.active = False
        FakeTimer.created[0].fire()
        assert self.handle.get("1") == []

    def test_cancel(self):
        self.scheduler.schedule(self._doc())
        self.scheduler.cancel()
        assert FakeTimer.created[0].cancelled

    def test_edit_during_active_check_supersedes_scan(self):
        newer = self._doc("<?php")

        def is_active(doc):
            # The user types again while the older scan is being checked.
            self.scheduler.schedule(newer)
            return True

        self.scheduler.is_active = is_active
        self.scheduler.schedule(self._doc())
        FakeTimer.created[0].fire()
        assert self.handle.get("1") == []
