"""qoistream - constant-memory streaming decoder for QOI images."""

from .config import DecoderConfig, load_config
from .decoder import ColorFormat, ImageDecoder, QoiDecoder
from .errors import BadMagic, QoiError, TruncatedHeader, TruncatedStream, UnsupportedChannels
from .header import QoiHeader, parse_header, read_header
from .reader import QoiReader
from .utils import load_image, qoi_to_png, to_array, to_image

__version__ = "0.1.0"

__all__ = [
    "BadMagic",
    "ColorFormat",
    "DecoderConfig",
    "ImageDecoder",
    "QoiDecoder",
    "QoiError",
    "QoiHeader",
    "QoiReader",
    "TruncatedHeader",
    "TruncatedStream",
    "UnsupportedChannels",
    "load_config",
    "load_image",
    "parse_header",
    "qoi_to_png",
    "read_header",
    "to_array",
    "to_image",
]
