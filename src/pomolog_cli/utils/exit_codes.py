"""
Exit codes for PomoLog CLI.

Semantic exit codes so scripts can tell what went wrong.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Reading or writing the session log failed
ERROR_IO = 4

# Resource not found (preset, config key)
ERROR_NOT_FOUND = 5
