################################################################################################

'''

Copyright 2025 Aaron Vose (avose@aaronvose.net)

Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the info / debug logger used by the renderer,
the data loaders and the wx front end.

'''

################################################################################################

import inspect
from datetime import datetime

################################################################################################

def _now() -> str:
    return datetime.now().strftime("%m/%d/%Y %H:%M:%S")

def _caller_file(depth: int) -> str:
    stack = inspect.stack()
    if len(stack) > depth:
        # Just filename, not full path
        return stack[depth].filename.replace('\\', '/').split('/')[-1]
    return "unknown"

################################################################################################

class LogManager():
    __log = None
    __seen = None

    def __init__(self, verbosity: int = 0):
        if LogManager.__log is None:
            LogManager.__log = [(_now(), "Begin NexusView Log")]
            LogManager.__seen = set()
        self.verbosity = verbosity

    def add(self, text: str):
        LogManager.__log.append((_now(), text))

    def debug(self, text: str, level: int = 0):
        if self.verbosity >= level:
            self.add(f"[{_caller_file(2)}] {text}")

    def once(self, key, text: str, level: int = 0) -> bool:
        """
        Log `text` only the first time `key` is seen since the last reset_once().
        Returns True when the message was recorded.
        """
        if key in LogManager.__seen:
            return False
        LogManager.__seen.add(key)
        if self.verbosity >= level:
            self.add(f"[{_caller_file(2)}] {text}")
        return True

    def reset_once(self):
        LogManager.__seen.clear()

    def get(self, index: int = None):
        if index is not None:
            return LogManager.__log[index]
        return LogManager.__log.copy()

    def count(self):
        return len(LogManager.__log)

    def set_verbosity(self, verbosity: int = 0):
        self.verbosity = verbosity

    def clear(self):
        """Clear all log entries."""
        if LogManager.__log is not None:
            LogManager.__log.clear()
            LogManager.__log.append((_now(), "Log cleared"))
            LogManager.__seen.clear()

    def write_to_file(self, filepath: str):
        """Write all log entries to a file."""
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                for timestamp, message in LogManager.__log:
                    f.write(f"[{timestamp}] {message}\n")
            self.add(f"Log written to file: {filepath}")
        except OSError as e:
            self.add(f"Failed to write log to file '{filepath}': {e}")

################################################################################################

Log = LogManager()

################################################################################################
