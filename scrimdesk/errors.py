"""Exception types raised by the import pipeline."""


class ScrimDeskError(Exception):
    """Base class for every error the importer raises on purpose."""


class ConfigurationError(ScrimDeskError):
    """A credential or setting is missing. Caller's fault, not retryable."""


class RemoteError(ScrimDeskError):
    """Upstream (Sheets, relay, GRID) failed or answered with an unexpected shape.

    `status` is the HTTP status code when there was a response, None when the
    request never completed (DNS, refused connection, timeout, bad JSON).
    """

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class ParseError(ScrimDeskError):
    """A tab name or cell grid deviates from the scrim sheet convention."""
