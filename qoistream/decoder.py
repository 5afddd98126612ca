import io
import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from .config import DecoderConfig, get_default_config
from .errors import TruncatedStream
from .header import CHANNELS_RGB, CHANNELS_RGBA, QoiHeader, read_header
from .reader import QoiReader

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class ColorFormat(Enum):
    """Pixel layout of the decoded bytes."""

    RGB = CHANNELS_RGB
    RGBA = CHANNELS_RGBA

    @property
    def channels(self) -> int:
        return self.value

    @property
    def mode(self) -> str:
        """Pillow mode name."""
        return self.name


class ImageDecoder(Protocol):
    """
    The capabilities an image-loading framework needs from a decoder.

    Kept separate from the decode engine so ``QoiReader`` can be used on its
    own, outside any one framework.
    """

    def dimensions(self) -> tuple[int, int]: ...

    def color_format(self) -> ColorFormat: ...

    def total_bytes(self) -> int: ...

    def scanline_bytes(self) -> int: ...

    def into_reader(self) -> io.RawIOBase: ...

    def read_image(self, buf, progress: Optional[ProgressCallback] = None) -> None: ...


class QoiDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw pixel data.

    The header is read on construction; pixels are only decoded once
    ``into_reader``, ``read_image`` or ``decode`` is called. A decoder is
    single-use: it owns the position of the underlying stream.
    """

    def __init__(self, source, config: Optional[DecoderConfig] = None) -> None:
        """
        :param source: Binary stream positioned at the start of a QOI file, or a
                       bytes-like object holding the whole file.
        :param config: Decoder settings; defaults are used when omitted.
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(source)
        self.config = config or get_default_config()
        self._source = source
        self.header: QoiHeader = read_header(source, self.config.strict_channels)
        self._consumed = False

    def dimensions(self) -> tuple[int, int]:
        return self.header.width, self.header.height

    def color_format(self) -> ColorFormat:
        return ColorFormat.RGBA if self.header.is_rgba else ColorFormat.RGB

    def total_bytes(self) -> int:
        return self.header.pixel_count * self.color_format().channels

    def scanline_bytes(self) -> int:
        """Bytes per pixel, the preferred read granularity."""
        return self.color_format().channels

    def into_reader(self) -> QoiReader:
        """Hand over the stream to a streaming reader."""
        if self._consumed:
            raise RuntimeError("QOI.decode: The decoder has already been consumed")
        self._consumed = True
        return QoiReader(self.header, self._source)

    def read_image(self, buf, progress: Optional[ProgressCallback] = None) -> None:
        """
        Decode the whole image into ``buf``.

        :param buf: Writable bytes-like object of exactly ``total_bytes()`` bytes.
        :param progress: Called as ``progress(done, total)`` after every step.
        :raises TruncatedStream: The source ended before the last pixel. ``buf``
                                 is then only partially filled and must be
                                 discarded.
        """
        total = self.total_bytes()
        if len(buf) != total:
            raise ValueError(
                f"QOI.decode: Buffer holds {len(buf)} bytes, the image needs {total}"
            )

        reader = self.into_reader()
        view = memoryview(buf).cast("B")
        step = self.config.chunk_size
        done = 0

        while done < total:
            n = reader.readinto(view[done : done + step])
            if n == 0:
                raise TruncatedStream(
                    f"QOI.decode: Incomplete image ({done} of {total} bytes decoded)"
                )
            done += n
            if progress is not None:
                progress(done, total)

        logger.debug("decoded %d bytes of %s pixel data", total, self.color_format().name)

    def decode(self, progress: Optional[ProgressCallback] = None) -> bytearray:
        """Decode the whole image into a new buffer."""
        result = bytearray(self.total_bytes())
        self.read_image(result, progress)
        return result
