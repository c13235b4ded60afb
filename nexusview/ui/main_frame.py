'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import wx
from typing import Dict, Optional

from nexusview.core.log import Log
from nexusview.core.settings import Settings
from nexusview.core.snapshot import SnapshotSource
from nexusview.ui.constants import SEARCH_DEBOUNCE_MS
from nexusview.ui.statusbar import StatusBar
from nexusview.ui.view import TabView
from nexusview.ui.wx_host import WxHost

FILTER_MODES = (("filtered", "By expansion"), ("nonfiltered", "As listed in game"))
SUB_TABS = (("warband", "Warband Bank"), ("personal", "Personal Bank"), ("guild", "Guild Bank"))


class MainFrame(wx.Frame):
    """Main application window: tab buttons, search box and the scrolled list."""

    def __init__(self, source: SnapshotSource, settings: Settings, verbosity: int = 0,
                 snapshot_path: Optional[str] = None):
        super().__init__(None, title="NexusView", size=(900, 700))
        self.SetMinSize((600, 400))
        Log.set_verbosity(verbosity)

        self.settings = settings
        self.snapshot_path = snapshot_path
        self._search_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, self._on_search_timer, self._search_timer)

        self._build_menu()
        self.SetStatusBar(StatusBar(self))
        self._build_body()

        self.host = WxHost(self.scroller)
        self.view = TabView(self.host, source, settings, on_rendered=self._on_rendered)
        self._select_tab_button(self.view.current)
        self._update_options()

        self.Bind(wx.EVT_CLOSE, self.on_close)
        self.scroller.Bind(wx.EVT_SIZE, self._on_scroller_size)
        wx.CallAfter(self.render)
        self.SetStatusText("Ready.")

    # ---------------- construction ----------------

    def _build_menu(self):
        menubar = wx.MenuBar()
        file_menu = wx.Menu()
        item_open = file_menu.Append(wx.ID_OPEN, "&Open Snapshot...\tCtrl+O")
        item_reload = file_menu.Append(wx.ID_REFRESH, "&Reload Snapshot\tF5")
        file_menu.AppendSeparator()
        item_quit = file_menu.Append(wx.ID_EXIT, "&Quit\tCtrl+Q")
        menubar.Append(file_menu, "&File")

        help_menu = wx.Menu()
        item_about = help_menu.Append(wx.ID_ABOUT, "&About")
        menubar.Append(help_menu, "&Help")
        self.SetMenuBar(menubar)

        self.Bind(wx.EVT_MENU, self.on_open_snapshot, item_open)
        self.Bind(wx.EVT_MENU, self.on_reload_snapshot, item_reload)
        self.Bind(wx.EVT_MENU, lambda evt: self.Close(), item_quit)
        self.Bind(wx.EVT_MENU, self.on_about, item_about)

    def _build_body(self):
        panel = wx.Panel(self)
        box_main = wx.BoxSizer(wx.VERTICAL)

        # Tab buttons
        box_tabs = wx.BoxSizer(wx.HORIZONTAL)
        self.tab_buttons: Dict[str, wx.ToggleButton] = {}
        for name, title in (("currency", "Currency"), ("items", "Items"),
                            ("storage", "Storage"), ("reputation", "Reputations")):
            btn = wx.ToggleButton(panel, label=title)
            btn.Bind(wx.EVT_TOGGLEBUTTON, lambda evt, n=name: self.on_tab(n))
            self.tab_buttons[name] = btn
            box_tabs.Add(btn, 0, wx.RIGHT, 4)
        box_main.Add(box_tabs, 0, wx.EXPAND | wx.ALL, 6)

        # Search + per-tab options
        box_opts = wx.BoxSizer(wx.HORIZONTAL)
        self.search = wx.SearchCtrl(panel, size=(260, -1))
        self.search.ShowCancelButton(True)
        self.search.Bind(wx.EVT_TEXT, self._on_search_text)
        self.search.Bind(wx.EVT_SEARCHCTRL_CANCEL_BTN, self._on_search_cancel)
        box_opts.Add(self.search, 0, wx.RIGHT, 12)

        self.filter_mode = wx.Choice(panel, choices=[label for _, label in FILTER_MODES])
        self.filter_mode.Bind(wx.EVT_CHOICE, self._on_filter_mode)
        box_opts.Add(self.filter_mode, 0, wx.RIGHT, 8)

        self.show_zero = wx.CheckBox(panel, label="Show 0 Qty")
        self.show_zero.Bind(wx.EVT_CHECKBOX, self._on_show_zero)
        box_opts.Add(self.show_zero, 0, wx.ALIGN_CENTER_VERTICAL | wx.RIGHT, 8)

        self.sub_tab = wx.Choice(panel, choices=[label for _, label in SUB_TABS])
        self.sub_tab.Bind(wx.EVT_CHOICE, self._on_sub_tab)
        box_opts.Add(self.sub_tab, 0, wx.RIGHT, 8)
        box_main.Add(box_opts, 0, wx.EXPAND | wx.LEFT | wx.RIGHT | wx.BOTTOM, 6)

        self.scroller = wx.ScrolledWindow(panel, style=wx.VSCROLL)
        self.scroller.SetBackgroundColour(wx.Colour(13, 13, 15))
        box_main.Add(self.scroller, 1, wx.EXPAND)

        panel.SetSizer(box_main)

    # ---------------- rendering ----------------

    def render(self):
        return self.view.render_tab(self.scroller)

    def _on_rendered(self, tab: str, height: int):
        stats = self.view.pool.stats()
        rows = sum(s["active"] for s in stats.values())
        self.GetStatusBar().SetSummary(f"{rows} rows, {height}px")
        Log.debug(f"{tab}: {rows} rows, pool {stats}", 3)

    def _on_scroller_size(self, event):
        event.Skip()
        wx.CallAfter(self.view.refresh)

    # ---------------- tabs / options ----------------

    def _select_tab_button(self, name: str):
        for tab, btn in self.tab_buttons.items():
            btn.SetValue(tab == name)

    def _update_options(self):
        tab = self.view.current
        self.filter_mode.Show(tab == "currency")
        self.show_zero.Show(tab == "currency")
        self.sub_tab.Show(tab == "items")
        modes = [m for m, _ in FILTER_MODES]
        self.filter_mode.SetSelection(modes.index(self.settings.get("currencyFilterMode")))
        self.show_zero.SetValue(bool(self.settings.get("currencyShowZero")))
        subs = [s for s, _ in SUB_TABS]
        self.sub_tab.SetSelection(subs.index(self.settings.get("itemsSubTab")))
        self.search.ChangeValue(self.view.search_text[tab])
        self.filter_mode.GetParent().Layout()

    def on_tab(self, name: str):
        self._search_timer.Stop()
        self.view.set_tab(name)
        self._select_tab_button(name)
        self._update_options()
        self.scroller.Scroll(0, 0)
        self.SetStatusText(f"{self.view.tab.title}")

    def _on_filter_mode(self, event):
        self.view.set_option("currencyFilterMode", FILTER_MODES[self.filter_mode.GetSelection()][0])

    def _on_show_zero(self, event):
        self.view.set_option("currencyShowZero", self.show_zero.GetValue())

    def _on_sub_tab(self, event):
        self.view.set_option("itemsSubTab", SUB_TABS[self.sub_tab.GetSelection()][0])

    # ---------------- search ----------------

    def _on_search_text(self, event):
        # Restart the debounce window on every keystroke.
        self._search_timer.StartOnce(SEARCH_DEBOUNCE_MS)

    def _on_search_cancel(self, event):
        self._search_timer.Stop()
        self.search.ChangeValue("")
        self.view.set_search("")

    def _on_search_timer(self, event):
        text = self.search.GetValue()
        self.view.set_search(text)
        if text.strip():
            self.SetStatusText(f"Search: {text.strip()}")

    # ---------------- snapshot ----------------

    def load_snapshot(self, path: str) -> bool:
        try:
            source = SnapshotSource.from_file(path)
        except ValueError as e:
            Log.debug(f"Could not load snapshot: {e}", 0)
            wx.MessageBox(str(e), "Could not load snapshot", wx.OK | wx.ICON_ERROR, self)
            return False
        self.snapshot_path = path
        self.view.set_source(source)
        stats = source.stats()
        self.SetStatusText(f"Loaded {path}: {stats['characters']} characters")
        return True

    def on_open_snapshot(self, event):
        with wx.FileDialog(self, "Open Snapshot", wildcard="JSON files (*.json)|*.json|All files (*.*)|*.*",
                           style=wx.FD_OPEN | wx.FD_FILE_MUST_EXIST) as dlg:
            if dlg.ShowModal() == wx.ID_OK:
                self.load_snapshot(dlg.GetPath())

    def on_reload_snapshot(self, event):
        if self.snapshot_path:
            self.load_snapshot(self.snapshot_path)

    def on_about(self, event):
        wx.MessageBox("NexusView\n\nBrowse the banks, currencies and reputations of all your characters.",
                      "About NexusView", wx.OK | wx.ICON_INFORMATION, self)

    def on_close(self, event):
        self._search_timer.Stop()
        try:
            self.settings.save()
        except OSError as e:
            Log.debug(f"Could not save settings: {e}", 0)
        event.Skip()
