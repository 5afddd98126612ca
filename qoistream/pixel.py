"""Pixel values and the 64-slot lookback table used by the chunk decoder."""

Pixel = tuple[int, int, int, int]

ZERO: Pixel = (0, 0, 0, 0)
INIT: Pixel = (0, 0, 0, 255)

CACHE_SIZE = 64


def pixel_hash(pixel: Pixel) -> int:
    """Calculates the index position for the color array."""
    r, g, b, a = pixel
    # 64 divides 256, so wrapping each term at 8 bits first gives the same slot
    return (r * 3 + g * 5 + b * 7 + a * 11) % CACHE_SIZE


def wrapping_add(pixel: Pixel, dr: int, dg: int, db: int) -> Pixel:
    """
    Add a per-channel delta to ``pixel`` with 8-bit wraparound.

    Alpha is carried over untouched.
    """
    r, g, b, a = pixel
    return ((r + dr) & 0xFF, (g + dg) & 0xFF, (b + db) & 0xFF, a)


class PixelCache:
    """
    Fixed table of previously seen pixels plus the ``latest`` register.

    Slots are overwritten unconditionally; two pixels sharing a hash simply
    displace each other.
    """

    __slots__ = ("slots", "latest")

    def __init__(self) -> None:
        self.slots: list[Pixel] = [ZERO] * CACHE_SIZE
        self.latest: Pixel = INIT

    def get(self, index: int) -> Pixel:
        return self.slots[index]

    def save(self, pixel: Pixel) -> Pixel:
        """Store ``pixel`` in its hash slot and make it the latest pixel."""
        self.slots[pixel_hash(pixel)] = pixel
        self.latest = pixel
        return pixel
