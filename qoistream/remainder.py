class Remainder:
    """
    Decoded pixel bytes that the caller has not consumed yet.

    One chunk can stand for many identical pixels (a run) while callers may
    read a single byte at a time, so decoding produces this token and output
    delivery drains it separately.

    ``pattern`` holds one pixel (``stride`` bytes). ``count`` is the number of
    bytes still owed. ``offset`` is where in the pattern the next byte comes
    from, so a read that stops mid-pixel resumes at the right channel.
    """

    __slots__ = ("pattern", "count", "offset")

    def __init__(self, pattern: bytes = b"", count: int = 0) -> None:
        if count and not pattern:
            raise ValueError("Remainder: a non-empty remainder needs a pattern")
        self.pattern = bytes(pattern)
        self.count = count
        self.offset = 0

    @classmethod
    def empty(cls) -> "Remainder":
        return cls()

    @property
    def stride(self) -> int:
        return len(self.pattern)

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return self.count > 0

    def __repr__(self) -> str:
        return (
            f"Remainder(pattern={self.pattern!r}, count={self.count}, offset={self.offset})"
        )

    def readinto(self, buf) -> int:
        """
        Copy up to ``len(buf)`` owed bytes into ``buf``.

        :param buf: Writable bytes-like object (bytearray, memoryview, ...).
        :return: Number of bytes written, at most ``count``.
        """
        n = min(len(buf), self.count)
        if n == 0:
            return 0

        stride = self.stride
        rotated = self.pattern[self.offset :] + self.pattern[: self.offset]
        # one extra repetition covers a tail that ends mid-pixel
        repeats = n // stride + 1

        memoryview(buf).cast("B")[:n] = (rotated * repeats)[:n]

        self.offset = (self.offset + n) % stride
        self.count -= n
        return n

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = self.count
        out = bytearray(min(size, self.count))
        self.readinto(out)
        return bytes(out)
