import numpy as np
from PIL import Image

from .config import DecoderConfig
from .decoder import ImageDecoder, QoiDecoder


def to_image(decoder: ImageDecoder) -> Image.Image:
    """Decode a whole image into a Pillow image."""
    width, height = decoder.dimensions()
    data = bytearray(decoder.total_bytes())
    decoder.read_image(data)
    return Image.frombytes(decoder.color_format().mode, (width, height), bytes(data))


def to_array(decoder: ImageDecoder) -> np.ndarray:
    """Decode a whole image into a ``(height, width, channels)`` uint8 array."""
    width, height = decoder.dimensions()
    channels = decoder.color_format().channels
    pixels = np.empty((height, width, channels), dtype=np.uint8)
    # read straight into the array's memory, no intermediate copy
    decoder.read_image(pixels.reshape(-1))
    return pixels


def load_image(filepath: str, config: DecoderConfig = None) -> tuple[np.ndarray, dict]:
    """Load a QOI image and return pixel data as numpy array + description."""

    with open(filepath, "rb") as f:
        decoder = QoiDecoder(f, config)
        pixels = to_array(decoder)

    header = decoder.header
    return pixels, {
        "width": header.width,
        "height": header.height,
        "channels": decoder.color_format().channels,
        "colorspace": header.colorspace,
    }


def qoi_to_png(qoi_path, png_path, config: DecoderConfig = None) -> tuple[int, int]:
    """
    Convert a QOI file to PNG (or whatever format ``png_path``'s suffix names).

    :return: The image dimensions.
    """
    with open(qoi_path, "rb") as f:
        decoder = QoiDecoder(f, config)
        img = to_image(decoder)

    img.save(png_path)
    return img.size
