"""Tests for the wx entry point's error reporting."""

import sys

import pytest

pytest.importorskip("wx")

from nexusview import app  # noqa: E402


def _raise(exc):
    try:
        raise exc
    except Exception:
        return sys.exc_info()


class TestErrorSummary:
    def test_first_message_line(self):
        assert app.error_summary(ValueError, ValueError("bad snapshot\nsecond line")) == "ValueError: bad snapshot"

    def test_empty_message(self):
        assert app.error_summary(KeyError, KeyError()) == "KeyError"


class TestOnException:
    def test_logged_and_printed_without_frame(self, monkeypatch, capsys):
        monkeypatch.setattr(app.wx, "GetApp", lambda: None)
        app.Log.clear()

        app.on_exception(*_raise(RuntimeError("boom")))

        assert any("RuntimeError: boom" in m for _, m in app.Log.get())
        assert "RuntimeError: boom" in capsys.readouterr().err

    def test_routed_to_status_bar(self, monkeypatch):
        reported = []

        class Status:
            def ReportError(self, summary):
                reported.append(summary)

        class Frame:
            def GetStatusBar(self):
                return Status()

        class App:
            def GetTopWindow(self):
                return Frame()

        monkeypatch.setattr(app.wx, "GetApp", lambda: App())
        app.on_exception(*_raise(RuntimeError("boom")))
        assert reported == ["RuntimeError: boom"]

    def test_version_check(self, monkeypatch):
        monkeypatch.setattr(app.wx, "VERSION", (4, 1, 0, ""))
        with pytest.raises(RuntimeError):
            app.check_wx_version()
