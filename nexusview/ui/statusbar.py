################################################################################################
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the main window's status bar and its log viewer.
'''
################################################################################################

import wx

from nexusview.core.log import Log

################################################################################################
class LogDialog(wx.Dialog):
    def __init__(self, parent, log):
        super().__init__(parent, title="NexusView Log", size=(760, 420),
                         style=wx.DEFAULT_DIALOG_STYLE | wx.RESIZE_BORDER)
        self.log = log
        self.text = wx.TextCtrl(self, style=wx.TE_MULTILINE | wx.TE_READONLY | wx.HSCROLL)
        self.text.SetFont(wx.Font(wx.FontInfo(9).Family(wx.FONTFAMILY_TELETYPE)))
        self.text.SetBackgroundColour((0, 0, 0))
        self.text.SetForegroundColour((128, 192, 128))
        self.reload()

        box_main = wx.BoxSizer(wx.VERTICAL)
        box_main.Add(self.text, 1, wx.EXPAND | wx.ALL, 4)
        box_main.Add(self.CreateButtonSizer(wx.CLOSE), 0, wx.EXPAND | wx.ALL, 4)
        self.SetSizer(box_main)
        self.Bind(wx.EVT_BUTTON, lambda evt: self.EndModal(wx.ID_CLOSE), id=wx.ID_CLOSE)

    def reload(self):
        lines = [f"{i:5d} [{ts}] {msg}" for i, (ts, msg) in enumerate(self.log.get())]
        self.text.SetValue("\n".join(lines))
        self.text.ShowPosition(self.text.GetLastPosition())

################################################################################################
class StatusBar(wx.StatusBar):
    def __init__(self, parent):
        super(StatusBar, self).__init__(parent)
        self.SetFieldsCount(2, [-1, 220])
        self.errors = 0
        self.Bind(wx.EVT_RIGHT_DOWN, self.OnRightDown)
        Log.add("Create StatusBar")
        return

    def SetSummary(self, text: str):
        if self.errors:
            text = f"{text}, {self.errors} error(s)"
        self.SetStatusText(text, 1)

    def ReportError(self, summary: str):
        """Show an unhandled error in the message field and keep a count in the summary."""
        self.errors += 1
        self.SetStatusText(f"Error: {summary} (right-click for log)", 0)

    def OnRightDown(self, event):
        """Handle right-click to show context menu with log options."""
        menu = wx.Menu()
        item_show_log = menu.Append(wx.ID_ANY, "Show Log")
        menu.AppendSeparator()
        item_save = menu.Append(wx.ID_SAVE, "Save Log to File...")
        item_clear = menu.Append(wx.ID_CLEAR, "Clear Log")

        self.Bind(wx.EVT_MENU, self.OnShowLog, item_show_log)
        self.Bind(wx.EVT_MENU, self.OnSaveLogToFile, item_save)
        self.Bind(wx.EVT_MENU, self.OnClearLog, item_clear)

        self.PopupMenu(menu)
        menu.Destroy()

    def OnShowLog(self, event):
        with LogDialog(self.GetParent(), Log) as dlg:
            dlg.ShowModal()

    def OnSaveLogToFile(self, event):
        with wx.FileDialog(self, "Save Log", wildcard="Log files (*.log)|*.log|All files (*.*)|*.*",
                           style=wx.FD_SAVE | wx.FD_OVERWRITE_PROMPT) as dlg:
            if dlg.ShowModal() != wx.ID_OK:
                return
            Log.write_to_file(dlg.GetPath())
            self.SetStatusText(f"Log saved to {dlg.GetPath()}")

    def OnClearLog(self, event):
        Log.clear()
        self.errors = 0
        self.SetStatusText("Log cleared")

################################################################################################
