'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

# Shared layout constants (pixels)
ROW_HEIGHT = 26
ROW_SPACING = 28
HEADER_HEIGHT = 32
HEADER_SPACING = 38
SECTION_SPACING = 25
CHARACTER_GAP = 5
TOP_PADDING = 8
EMPTY_STATE_HEIGHT = 100
INDENT_W = 20
LEFT_MARGIN = 10
RIGHT_MARGIN = 20

SEARCH_DEBOUNCE_MS = 300

PLACEHOLDER_ICON = "Interface\\Icons\\INV_Misc_QuestionMark"

# Colours are "#rrggbb" strings so the core stays toolkit free.
ROW_BG_EVEN = "#121217"
ROW_BG_ODD = "#0d0d0f"
ROW_BG_HOVER = "#262633"
HEADER_BG = "#1a1a1f"
TEXT_NORMAL = "#ffffff"
TEXT_DIM = "#808080"
TEXT_MUTED = "#b3b3b3"

EMPTY_TITLE = {
    "currency": "No currencies found",
    "items": "No items cached",
    "storage": "No items in storage",
    "reputation": "No reputations found",
}
EMPTY_HINT = {
    "currency": "Log in to your characters to scan their currencies.",
    "items": "Open your bank to let Warband Nexus scan its contents.",
    "storage": "Open your banks to let Warband Nexus scan their contents.",
    "reputation": "Log in to your characters to scan their reputations.",
}
NO_RESULTS_TITLE = "No results"
