"""
Error kinds raised by the stores.

The core never picks status codes itself; the HTTP layer maps each kind
in :mod:`socialfeed.core.error_handlers`.
"""


class SocialFeedError(Exception):
    """Base class for all errors raised by the core."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ValidationError(SocialFeedError):
    """Malformed id, empty text after trimming, or page/limit out of range."""


class SelfReferenceError(ValidationError):
    """A user tried to follow themselves."""

    def __init__(self, message: str = "Cannot follow yourself"):
        super().__init__(message)


class NotFoundError(SocialFeedError):
    """Referenced entity is absent or hidden by soft deletion."""


class ForbiddenError(SocialFeedError):
    """Entity is visible but the invoked rule is not satisfied."""


class StoreError(SocialFeedError):
    """Unclassified datastore failure. Details stay in the logs."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
