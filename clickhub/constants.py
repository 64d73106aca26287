"""
Application-level constants for hardcoded protocol behavior.

These values define the wire protocol and should NEVER be changed via
environment variables. For configurable values (bind address, log level,
shutdown timeout), see clickhub/settings.py.
"""

# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# Path the click counter endpoint is mounted on
WS_CLICKS_PATH = "/"


# ============================================================================
# Logging
# ============================================================================

# Upper bound for a single JSON log line written to the error file
MAX_LOG_SIZE_BYTES = 64 * 1024

# Maximum number of characters of a dropped inbound frame echoed to debug logs
DROPPED_FRAME_LOG_PREVIEW = 120
