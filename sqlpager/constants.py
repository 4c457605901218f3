"""
Library-level constants for hardcoded pagination behavior.

These values define core behavior and should NEVER be changed via
environment variables. For configurable values (default page size,
caps, parameter names), see sqlpager/settings.py.
"""

# ============================================================================
# Page Numbering
# ============================================================================

# Pages are 1-indexed; anything below is clamped to this value
FIRST_PAGE = 1


# ============================================================================
# Logging
# ============================================================================

# Maximum size of a single JSON log line before the message is truncated
MAX_LOG_SIZE_BYTES = 64 * 1024

# Name of the package logger
LOGGER_NAME = "sqlpager"
