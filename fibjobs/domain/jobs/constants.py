"""
Jobs Domain Constants

Bounds of the accepted input domain and the names of the shared storage
locations that the gateway and the worker agree on.
"""

from typing import Final


# ============================================================================
# INPUT DOMAIN
# ============================================================================

MIN_INDEX: Final[int] = 0
MAX_INDEX: Final[int] = 40


# ============================================================================
# SHARED STATE
# ============================================================================

# Sentinel stored at submission time, before the worker writes the result
PLACEHOLDER_VALUE: Final[str] = "Nothing yet!"

# Redis hash holding index -> placeholder/result
STATE_HASH_NAME: Final[str] = "values"

# Redis pub/sub channel carrying accepted indices
EVENT_CHANNEL_NAME: Final[str] = "insert"

# PostgreSQL table holding one row per accepted submission
JOB_LOG_TABLE_NAME: Final[str] = "values"
