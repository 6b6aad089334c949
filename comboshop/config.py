"""Runtime configuration defaults for the catalog, logging and combo rules."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("COMBOSHOP_DB_PATH", "data/catalog.db")

DEBUG_LOG_PATH = os.environ.get("COMBOSHOP_DEBUG_LOG", "/tmp/comboshop-debug.log")
LOG_LEVEL = os.environ.get("COMBOSHOP_LOG_LEVEL", "DEBUG").upper()

# Combo shape. The ice slot count is also the stock gate for standard ice units.
ICE_SLOT_COUNT = 4
CAN_PACK_SIZE = 4
DISCOUNT_PERCENT = 5

# "keyword" matches spirit categories by substring, "allow_list" by exact name.
SPIRIT_RULE = os.environ.get("COMBOSHOP_SPIRIT_RULE", "keyword").strip().lower()

CURRENCY_SYMBOL = "R$"
