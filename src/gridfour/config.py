# src/gridfour/config.py

from __future__ import annotations

import os

ROWS = 6
COLS = 7
CONNECT_N = 4

# UI toggles
USE_COLOR = os.environ.get("NO_COLOR") is None
CLEAR_SCREEN = True

# Search defaults (fixed depth, no time budget)
SEARCH_DEPTH = 5
SEARCH_EXECUTOR = "thread"  # "thread" | "process" | "serial"
SEARCH_MAX_WORKERS = COLS

# Game loop: consecutive rejected columns before the controller gives up
MAX_INVALID_ATTEMPTS = 10

LOG_LEVEL = os.environ.get("GRIDFOUR_LOG_LEVEL", "WARNING")

RESULTS_DIR = "data/results"
FIGURES_DIR = "data/figures"
