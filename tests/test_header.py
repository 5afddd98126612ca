import io
import struct

import pytest
from conftest import Trickle

from qoistream.errors import BadMagic, QoiError, TruncatedHeader, UnsupportedChannels
from qoistream.header import QOI_HEADER_SIZE, QoiHeader, parse_header, read_exact, read_header


def _header(magic=b"qoif", width=640, height=480, channels=4, colorspace=0) -> bytes:
    return struct.pack(">4sIIBB", magic, width, height, channels, colorspace)


class TestParseHeader:
    def test_fields_are_big_endian(self) -> None:
        header = parse_header(_header(width=0x01020304, height=0x0A0B0C0D, channels=3, colorspace=1))
        assert header == QoiHeader(width=0x01020304, height=0x0A0B0C0D, channels=3, colorspace=1)
        assert header.magic == b"qoif"

    def test_trailing_bytes_are_ignored(self) -> None:
        header = parse_header(_header(width=2, height=1) + b"\xfe\x0a\x14\x1e")
        assert (header.width, header.height) == (2, 1)

    @pytest.mark.parametrize(
        "data",
        [
            pytest.param(b"", id="empty"),
            pytest.param(b"qoif", id="magic only"),
            pytest.param(_header()[:13], id="one byte short"),
        ],
    )
    def test_truncated(self, data: bytes) -> None:
        with pytest.raises(TruncatedHeader):
            parse_header(data)

    @pytest.mark.parametrize(
        "magic",
        [
            pytest.param(b"QOIF", id="upper case"),
            pytest.param(b"\x89PNG", id="png signature"),
            pytest.param(b"qoi\x00", id="nul terminated"),
        ],
    )
    def test_bad_magic(self, magic: bytes) -> None:
        with pytest.raises(BadMagic):
            parse_header(_header(magic=magic))

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_header(_header(magic=b"nope"))
        assert issubclass(TruncatedHeader, EOFError)
        assert issubclass(BadMagic, QoiError)

    @pytest.mark.parametrize("channels", [0, 1, 5, 255])
    def test_unusual_channels_are_stored(self, channels: int) -> None:
        header = parse_header(_header(channels=channels))
        assert header.channels == channels
        assert not header.is_rgba
        assert header.stride == 3

    @pytest.mark.parametrize("channels", [0, 5])
    def test_strict_channels(self, channels: int) -> None:
        with pytest.raises(UnsupportedChannels):
            parse_header(_header(channels=channels), strict_channels=True)

    @pytest.mark.parametrize("colorspace", [0, 1, 7])
    def test_colorspace_is_not_interpreted(self, colorspace: int) -> None:
        assert parse_header(_header(colorspace=colorspace)).colorspace == colorspace


class TestHeaderProperties:
    @pytest.mark.parametrize(
        "channels, is_rgba, stride",
        [
            pytest.param(3, False, 3, id="rgb"),
            pytest.param(4, True, 4, id="rgba"),
        ],
    )
    def test_layout(self, channels: int, is_rgba: bool, stride: int) -> None:
        header = QoiHeader(width=3, height=5, channels=channels, colorspace=0)
        assert header.is_rgba is is_rgba
        assert header.stride == stride
        assert header.pixel_count == 15


class TestReadHeader:
    def test_consumes_exactly_fourteen_bytes(self) -> None:
        source = io.BytesIO(_header(width=2, height=1) + b"\xc0rest")
        header = read_header(source)
        assert header.width == 2
        assert source.tell() == QOI_HEADER_SIZE
        assert source.read() == b"\xc0rest"

    def test_short_stream(self) -> None:
        with pytest.raises(TruncatedHeader):
            read_header(io.BytesIO(b"qoif\x00\x00"))

    @pytest.mark.parametrize("limit", [1, 5, 13])
    def test_short_reads_are_retried(self, limit: int) -> None:
        source = Trickle(_header(width=2, height=1) + b"\xc0", limit=limit)
        header = read_header(source)
        assert (header.width, header.height, header.channels) == (2, 1, 4)
        assert source.read() == b"\xc0"

    def test_short_reads_then_end(self) -> None:
        with pytest.raises(TruncatedHeader, match="6 of 14"):
            read_header(Trickle(b"qoif\x00\x00", limit=4))


class TestReadExact:
    def test_collects_short_reads(self) -> None:
        assert read_exact(Trickle(b"abcdefg", limit=2), 5) == b"abcde"

    def test_stops_at_end(self) -> None:
        source = Trickle(b"abc", limit=2)
        assert read_exact(source, 8) == b"abc"
        # two reads with data, one empty read
        assert source.reads == 3
