"""
Error taxonomy shared by the analytics, store and generator layers.
"""


class MoodHomeError(Exception):
    error_code = "MOODHOME_ERROR"


class InvalidInput(MoodHomeError, ValueError):
    """Malformed or missing fields in a snapshot handed to analytics/ranking."""
    error_code = "INVALID_INPUT"


class StoreUnavailable(MoodHomeError):
    """The persistent store could not be reached; nothing was written."""
    error_code = "STORE_UNAVAILABLE"


class GeneratorFailure(MoodHomeError):
    """The suggestion generator failed or returned data we could not parse."""
    error_code = "GENERATOR_FAILURE"
