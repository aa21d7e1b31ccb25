"""
Custom exceptions for the application.
"""


class LearnflowException(Exception):
    """Base exception for all Learnflow application exceptions."""
    pass


class ValidationError(LearnflowException):
    """Raised when input is rejected before any state is changed."""
    pass


class NotFoundError(LearnflowException):
    """Raised when a requested record is not found."""
    pass


class RemoteStoreError(LearnflowException):
    """Raised when the remote card/paraphrase store cannot complete a call."""
    pass
