import io
import logging

from .errors import TruncatedStream
from .header import QoiHeader, read_exact
from .pixel import PixelCache, wrapping_add
from .remainder import Remainder

logger = logging.getLogger(__name__)

# QOI Constants
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0


class QoiReader(io.RawIOBase):
    """
    Pull-based reader producing the raw pixel bytes of a QOI stream.

    The header must already have been consumed from ``source``; every read
    decodes at most one chunk, so memory use does not depend on the image
    size. Exactly ``width * height`` pixels are produced, after which reads
    return no data.

    >>> reader = QoiReader(header, source)
    >>> first_pixel = reader.read(header.stride)
    """

    def __init__(self, header: QoiHeader, source) -> None:
        super().__init__()
        self.header = header
        self._source = source
        self._cache = PixelCache()
        self._remain = Remainder.empty()
        self._stride = header.stride
        self.bytes_remaining = header.pixel_count * self._stride

    @property
    def latest(self):
        return self._cache.latest

    @property
    def pixels_remaining(self) -> int:
        """Pixels not yet fully delivered to the caller."""
        return -(-self.bytes_remaining // self._stride)

    def readable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        if self.bytes_remaining == 0 or len(buf) == 0:
            return 0

        if not self._remain:
            remain = self.decode_chunk()
            # a run may not carry the stream past width * height pixels
            remain.count = min(remain.count, self.bytes_remaining)
            self._remain = remain

        n = self._remain.readinto(buf)
        self.bytes_remaining -= n
        if self.bytes_remaining == 0:
            logger.debug(
                "decoded all %d pixels of a %dx%d image",
                self.header.pixel_count,
                self.header.width,
                self.header.height,
            )
        return n

    def decode_chunk(self) -> Remainder:
        """
        Read one chunk from the source and return the pixel bytes it stands for.

        Updates the pixel cache and the latest pixel as a side effect.
        """
        cache = self._cache
        tag = self._read_exact(1)[0]

        if tag == QOI_OP_RGBA:
            r, g, b, a = self._read_exact(4)
            return self._emit(cache.save((r, g, b, a)))

        if tag == QOI_OP_RGB:
            r, g, b = self._read_exact(3)
            return self._emit(cache.save((r, g, b, cache.latest[3])))

        op = tag & QOI_MASK_2

        if op == QOI_OP_RUN:
            # the latest pixel is repeated, nothing new enters the cache
            run = (tag & 0x3F) + 1
            return self._emit(cache.latest, run)

        if op == QOI_OP_LUMA:
            dg = (tag & 0x3F) - 32
            byte2 = self._read_exact(1)[0]
            dr_dg = (byte2 >> 4) - 8
            db_dg = (byte2 & 0x0F) - 8
            pixel = wrapping_add(cache.latest, dr_dg + dg, dg, db_dg + dg)
            return self._emit(cache.save(pixel))

        if op == QOI_OP_DIFF:
            dr = ((tag >> 4) & 0x03) - 2
            dg = ((tag >> 2) & 0x03) - 2
            db = (tag & 0x03) - 2
            return self._emit(cache.save(wrapping_add(cache.latest, dr, dg, db)))

        # QOI_OP_INDEX
        return self._emit(cache.save(cache.get(tag & 0x3F)))

    def _emit(self, pixel, repeat: int = 1) -> Remainder:
        stride = self._stride
        return Remainder(bytes(pixel[:stride]), stride * repeat)

    def _read_exact(self, size: int) -> bytes:
        data = read_exact(self._source, size)
        if len(data) < size:
            raise TruncatedStream(
                f"QOI.decode: Stream ended inside a chunk "
                f"({len(data)} of {size} bytes, "
                f"{self.pixels_remaining} pixels still expected)"
            )
        return data
