#!/usr/bin/env python3
from __future__ import annotations

import os

from constants import DEFAULT_FENCE_LANGUAGE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEBUG = os.getenv("STRUCT_HELP_DEBUG", "").lower() in ("1", "true", "yes")
# Default level for the CLI; --log-level wins over it.
LOG_LEVEL = "DEBUG" if DEBUG else os.getenv("STRUCT_HELP_LOG_LEVEL", "WARNING").strip().upper()
if LOG_LEVEL not in LOG_LEVELS:
    LOG_LEVEL = "WARNING"
# Fence tag the description parser restricts itself to.
FENCE_LANGUAGE = os.getenv("STRUCT_HELP_FENCE_LANGUAGE", DEFAULT_FENCE_LANGUAGE).strip() or DEFAULT_FENCE_LANGUAGE
