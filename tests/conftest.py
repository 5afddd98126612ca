import io
import struct

import numpy as np
import pytest

END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"


def make_qoi(
    width: int,
    height: int,
    channels: int,
    body: bytes,
    colorspace: int = 0,
    end_marker: bool = True,
) -> bytes:
    """Build a QOI file from a hand-written chunk stream."""
    header = struct.pack(">4sIIBB", b"qoif", width, height, channels, colorspace)
    return header + body + (END_MARKER if end_marker else b"")


class Trickle(io.RawIOBase):
    """A raw stream that hands out at most ``limit`` bytes per read."""

    def __init__(self, data: bytes, limit: int = 1) -> None:
        self._data = io.BytesIO(data)
        self._limit = limit
        self.reads = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        self.reads += 1
        chunk = self._data.read(min(len(buf), self._limit))
        buf[: len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def sample_rgba(rng: np.random.Generator) -> np.ndarray:
    """An RGBA image mixing flat runs, gradients and noise so every opcode shows up."""
    img = np.zeros((24, 32, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:8, :, :3] = 200
    img[8:16, :, 0] = np.arange(32, dtype=np.uint8)[None, :] * 3
    img[8:16, :, 1] = np.arange(8, dtype=np.uint8)[:, None] * 2
    img[16:, :, :] = rng.integers(0, 256, size=(8, 32, 4), dtype=np.uint8)
    img[20:, :16, 3] = 128
    return img
