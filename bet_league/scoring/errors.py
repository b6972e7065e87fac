"""
Exceptions raised by the scoring engine and the evaluation service.

Rules never raise when they simply do not apply; they return False or 0.
These exceptions are reserved for broken data and broken league setup.
"""


class ScoringError(Exception):
    """Base class for evaluation failures"""

    code = "SCORING_ERROR"

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ValidationError(ScoringError):
    """Required prediction or result data is missing"""

    code = "VALIDATION_ERROR"


class ConfigurationError(ScoringError):
    """League rule configuration is unknown, missing or malformed"""

    code = "CONFIGURATION_ERROR"


class NotFoundError(ScoringError):
    """Event to evaluate does not exist"""

    code = "NOT_FOUND"
