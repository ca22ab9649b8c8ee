class MovieHelperError(Exception):
    pass


class ConfigurationError(MovieHelperError):
    pass


class UpstreamError(MovieHelperError):
    """A discovery or generative-text call failed (transport, status, or timeout)."""
