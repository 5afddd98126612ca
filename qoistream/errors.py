class QoiError(ValueError):
    """Base class for every format error raised while decoding a QOI stream."""


class TruncatedHeader(QoiError, EOFError):
    """Fewer than 14 header bytes were available."""


class BadMagic(QoiError):
    """The header does not start with the ``qoif`` signature."""


class TruncatedStream(QoiError, EOFError):
    """The source ran out of bytes in the middle of a chunk."""


class UnsupportedChannels(QoiError):
    """The header declares a channel count other than 3 or 4."""
