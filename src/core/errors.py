"""Feed errors.

Both kinds are shown to the user as one generic failure; the distinction
is kept for logging.
"""


class FetchError(Exception):
    """Base class for anything that makes a feed refresh fail."""

    kind = "fetch"


class NetworkError(FetchError):
    """Transport failure or a non-2xx response status."""

    kind = "network"


class ParseError(FetchError):
    """Payload could not be decoded into earthquake events."""

    kind = "parse"
