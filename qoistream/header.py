import logging
import struct
from dataclasses import dataclass

from .errors import BadMagic, TruncatedHeader, UnsupportedChannels

logger = logging.getLogger(__name__)

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14

CHANNELS_RGB = 3
CHANNELS_RGBA = 4

# > : Big Endian
# 4s: 4-byte string (magic)
# I : unsigned int (4 bytes)
# B : unsigned char (1 byte)
_HEADER_FORMAT = ">4sIIBB"


@dataclass(frozen=True)
class QoiHeader:
    """
    The fixed 14-byte preamble of a QOI file.

    ``channels`` and ``colorspace`` are stored as found; the decoder only
    distinguishes 4 channels (RGBA) from everything else (RGB).
    """

    width: int
    height: int
    channels: int
    colorspace: int
    magic: bytes = QOI_MAGIC

    @property
    def is_rgba(self) -> bool:
        return self.channels == CHANNELS_RGBA

    @property
    def stride(self) -> int:
        """Bytes per decoded pixel."""
        return CHANNELS_RGBA if self.is_rgba else CHANNELS_RGB

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def parse_header(data: bytes, strict_channels: bool = False) -> QoiHeader:
    """
    Parse the header from the first 14 bytes of ``data``.

    :param data: Bytes-like object starting with the QOI header. Anything past
                 the 14th byte is ignored.
    :param strict_channels: Reject channel counts other than 3 or 4.
    :return: The parsed header.
    :raises TruncatedHeader: Fewer than 14 bytes were given.
    :raises BadMagic: The signature is not ``qoif``.
    """
    if len(data) < QOI_HEADER_SIZE:
        raise TruncatedHeader(
            f"QOI.decode: File too short for header ({len(data)} of {QOI_HEADER_SIZE} bytes)"
        )

    magic, width, height, channels, colorspace = struct.unpack_from(_HEADER_FORMAT, data)

    if magic != QOI_MAGIC:
        raise BadMagic(f"QOI.decode: The signature of the QOI file is invalid: {magic!r}")

    if strict_channels and channels not in (CHANNELS_RGB, CHANNELS_RGBA):
        raise UnsupportedChannels(
            f"QOI.decode: The number of channels declared in the file is invalid: {channels}"
        )

    header = QoiHeader(width, height, channels, colorspace, magic)
    logger.debug(
        "parsed QOI header: %dx%d channels=%d colorspace=%d",
        width,
        height,
        channels,
        colorspace,
    )
    return header


def read_exact(source, size: int) -> bytes:
    """
    Read ``size`` bytes from ``source``, retrying short reads.

    Stops at the first empty read, so the result is shorter than ``size`` only
    when the stream has ended. Callers decide which error that is.
    """
    data = b""
    while len(data) < size:
        more = source.read(size - len(data))
        # None: a non-blocking stream with nothing available yet
        if not more:
            break
        data += more
    return data


def read_header(source, strict_channels: bool = False) -> QoiHeader:
    """Read exactly 14 bytes from the binary stream ``source`` and parse them."""
    return parse_header(read_exact(source, QOI_HEADER_SIZE), strict_channels)
