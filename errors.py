from typing import Optional


class SIAError(Exception):
    """Base class for bootstrap failures."""


class EvidenceUnavailable(SIAError):
    """The identity document or its signature could not be obtained."""


class ConfigError(SIAError):
    """A single resolution strategy could not produce a service identity."""


class ArnError(SIAError, ValueError):
    pass


class ConfigResolutionFailed(SIAError):
    """Every resolution strategy failed; ``cause`` is the last one's error."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
