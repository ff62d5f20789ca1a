"""Common application-wide constants."""

SWIM_STYLES = ("Freestyle", "Backstroke", "Breaststroke", "Butterfly")
LESSON_TYPES = ("private", "group")
LESSON_PREFERENCES = ("private", "group", "both")

# Style offered by a manually created slot when neither the caller nor the
# instructor provides any
DEFAULT_SWIM_STYLE = "Freestyle"

PRIVATE_LESSON_CAPACITY = 1

# Display values used when joined records are missing
UNKNOWN_INSTRUCTOR = "Unknown instructor"
UNKNOWN_SWIMMER = "Unknown swimmer"

DAYS_IN_WEEK = 7


__all__ = [
    "SWIM_STYLES",
    "LESSON_TYPES",
    "LESSON_PREFERENCES",
    "DEFAULT_SWIM_STYLE",
    "PRIVATE_LESSON_CAPACITY",
    "UNKNOWN_INSTRUCTOR",
    "UNKNOWN_SWIMMER",
    "DAYS_IN_WEEK",
]
