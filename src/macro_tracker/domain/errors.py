"""Error types raised by the tracker core."""


class TrackerError(Exception):
    """Base class for recoverable tracker failures."""


class ValidationError(TrackerError):
    """Bad user input or an imported entry with the wrong structure."""


class ParseError(TrackerError):
    """Imported content is not well-formed JSON."""


class ProviderError(TrackerError):
    """The nutrition provider failed or returned an unusable payload."""


class AddInProgressError(TrackerError):
    """Another add-food lookup is still in flight."""
