"""Tests for the tab view and the headless entry point."""

import pytest

from nexusview.__main__ import main, render_headless
from nexusview.core.settings import Settings
from nexusview.ui.tabs import CurrencyTab
from nexusview.ui.view import TabView


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def view(host, source, settings):
    return TabView(host, source, settings)


class TestRenderTab:
    def test_currency_default(self, host, view, container):
        height = view.render_tab(container)

        assert view.current == "currency"
        assert height == container.fields["content_height"]
        assert host.find(container, "Alice (Online) - 5 currencies").fields["expanded"] is True
        assert host.find(container, "Bob - 2 currencies").fields["expanded"] is False
        assert host.find(container, "Bob").fields["text_color"] == "#c69b6d"
        assert host.find(container, "Season 3") is not None

    def test_header_click_redraws_and_persists(self, host, view, container, settings):
        view.render_tab(container)
        assert host.find(container, "Legion") is None

        host.click(host.find(container, "Bob"))

        assert host.find(container, "Legion (1)") is not None
        assert host.find(container, "Order Resources") is not None
        assert settings.get_expansion_flag("currencyExpanded", "currency-char-Bob-Draenor") is True
        assert settings.dirty

    def test_search_per_tab(self, host, view, container):
        view.render_tab(container)
        view.set_search("order")

        assert [w.fields.get("text") for w in host.visible_children(container)] == [
            "Bob - 1 currency", "Legion (1)", "Currency (1)", "Order Resources",
        ]

        view.set_tab("reputation")
        assert view.search_text["reputation"] == ""
        assert host.find(container, "Alice (Online) - 5 factions") is not None

    def test_set_tab(self, view, container, settings):
        view.render_tab(container)
        view.set_tab("storage")
        assert settings.get("lastTab") == "storage"
        assert view.renderer.keys("header") == ["storage-warband", "storage-personal"]

        with pytest.raises(KeyError):
            view.set_tab("mounts")

    def test_set_option(self, host, view, container):
        view.render_tab(container)
        view.set_option("currencyFilterMode", "nonfiltered")
        assert "currency-char-Alice-Silvermoon-header-The War Within" in view.renderer.keys("header")

        with pytest.raises(ValueError):
            view.set_option("currencyFilterMode", "sideways")

    def test_starts_on_last_tab(self, host, source):
        settings = Settings()
        settings.set("lastTab", "items")
        assert TabView(host, source, settings).current == "items"

    def test_on_rendered(self, host, source, settings, container):
        calls = []
        view = TabView(host, source, settings, on_rendered=lambda tab, h: calls.append((tab, h)))
        height = view.render_tab(container)
        assert calls == [("currency", height)]

    def test_refresh_without_container(self, view):
        assert view.refresh() == 0


class _TogglingTab(CurrencyTab):
    """Toggles a header while its tree is being built, as a click during a pass would."""

    def __init__(self):
        self.view = None
        self.builds = 0

    def build(self, source, settings):
        self.builds += 1
        if self.builds == 1:
            self.view.toggle("currency-char-Bob-Draenor", False)
        return super().build(source, settings)


class _BrokenTab(CurrencyTab):
    def build(self, source, settings):
        raise RuntimeError("bad data")


class TestReentrancy:
    def test_toggle_during_pass_redraws_after(self, host, source, settings, container):
        tab = _TogglingTab()
        view = TabView(host, source, settings, tabs={"currency": tab})
        tab.view = view

        calls = []
        view.on_rendered = lambda name, h: calls.append(h)
        view.render_tab(container)

        assert tab.builds == 2
        assert len(calls) == 1
        assert "currency-char-Bob-Draenor-exp-Legion" in view.renderer.keys("header")

    def test_failing_build_shows_empty_state(self, host, source, settings, container):
        view = TabView(host, source, settings, tabs={"currency": _BrokenTab()})
        height = view.render_tab(container)

        assert height == 8 + 100
        assert view.renderer.emitted[0].kind == "empty"


class TestHeadless:
    def test_render_headless(self, source, settings):
        text = render_headless(source, settings, "currency")
        lines = text.splitlines()

        assert lines[0].strip() == "8 [-] Alice (Online) - 5 currencies"
        assert any("[+] Bob - 2 currencies" in line for line in lines)
        assert lines[-1].startswith("-- currency: content height ")

    def test_render_headless_search(self, source, settings):
        text = render_headless(source, settings, "reputation", "weaver")
        assert "The Weaver" in text
        assert "The General" not in text
        assert "The Severed Threads" not in text
        assert "Council of Dornogal" not in text

    def test_main_headless(self, fixtures_dir, tmp_path, capsys):
        code = main([
            "--snapshot", str(fixtures_dir / "snapshot.json"),
            "--settings", str(tmp_path / "settings.json"),
            "--headless", "items",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Trade Goods (2)" in out
        assert "-- items: content height" in out

    def test_main_missing_snapshot(self, tmp_path, capsys):
        code = main(["--snapshot", str(tmp_path / "nope.json"), "--headless", "currency",
                     "--settings", str(tmp_path / "settings.json")])
        assert code == 2
        assert "Snapshot not found" in capsys.readouterr().err
