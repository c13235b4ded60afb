# app.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import traceback
import wx

from nexusview.core.log import Log

MIN_WX = (4, 2, 3)

def error_summary(exc_type, exc_value) -> str:
    """One status bar line for an exception: type and first line of its message."""
    text = str(exc_value).strip().splitlines()
    return f"{exc_type.__name__}: {text[0]}" if text else exc_type.__name__

def on_exception(exc_type, exc_value, exc_traceback):
    """Log unhandled exceptions and report them on the status bar; the GUI keeps running."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    Log.debug(f"!ERROR! Unhandled Exception:\n{tb_text}", 0)

    app = wx.GetApp()
    frame = app.GetTopWindow() if app else None
    status = frame.GetStatusBar() if frame is not None else None
    if status is not None and hasattr(status, 'ReportError'):
        status.ReportError(error_summary(exc_type, exc_value))
    else:
        print(tb_text, file=sys.stderr)

def check_wx_version():
    found = tuple(getattr(wx, 'VERSION', (0, 0, 0))[:3])
    if found < MIN_WX:
        need = '.'.join(str(v) for v in MIN_WX)
        raise RuntimeError(f"NexusView's window needs wxPython {need} or newer, found {wx.__version__}")

def main(source, settings, verbosity: int = 0, stdexp: bool = False, snapshot_path=None):
    check_wx_version()
    from nexusview.ui.main_frame import MainFrame

    if not stdexp:
        sys.excepthook = on_exception

    app = wx.App(False)
    frame = MainFrame(source, settings, verbosity=verbosity, snapshot_path=snapshot_path)
    frame.Show()
    return app.MainLoop()
