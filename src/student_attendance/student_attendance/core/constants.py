"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOTE_MAX_LENGTH = 100

DEFAULT_TRAINING_START = "09:00"
DEFAULT_TRAINING_END = "18:00"

BLANK_TIME_STEP_MINUTES = 15
BLANK_TIME_MAX_MINUTES = 8 * 60

# Empty string is how an unentered punch time is stored.
EMPTY_TIME = ""
