class UpstreamError(Exception):
    """Base exception for failures talking to a NOAA data feed."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source

class UpstreamTransportError(UpstreamError):
    """Raised when a feed can't be reached or answers with a non-2xx status."""
    pass

class UpstreamParseError(UpstreamError):
    """Raised when a feed answers with a payload we can't interpret."""
    pass
