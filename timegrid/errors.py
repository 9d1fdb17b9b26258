from __future__ import annotations


class TimegridError(Exception):
    """Base class for every error the grid engine reports to its callers."""


class ValidationError(TimegridError):
    """Malformed manual or bulk-import input."""


class RangeError(TimegridError):
    """A block span runs past the end of the day or across a Break/Lunch slot."""


class MalformedResponse(TimegridError):
    """A generated or stored grid is missing a day or has wrong-length days."""


class ServiceUnavailable(TimegridError):
    """The generation service failed before producing a payload."""


class UnknownFailure(TimegridError):
    pass
