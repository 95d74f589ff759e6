class TwitchTuiError(RuntimeError):
    pass


class TransportError(TwitchTuiError):
    """The API or manifest server could not be reached, or answered with an error status."""


class MalformedResponseError(TwitchTuiError):
    """A response could not be decoded into any of the shapes we know about."""


class PlaybackError(TwitchTuiError):
    """The external player (or streamlink) could not be started."""
