"""
Exit codes for quickdo.

Semantic exit codes so scripts can tell what went wrong without parsing
the error text.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, blank task text, bad config value
ERROR_INVALID_ARGS = 2

# Task (or subtask) id not found or ambiguous
ERROR_NOT_FOUND = 5

# Import payload rejected
ERROR_IMPORT = 6

# Task file unreadable or unwritable
ERROR_STORAGE = 7
