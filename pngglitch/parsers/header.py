import math
import struct
from enum import IntEnum

from pngglitch.parsers.chunk import ChunkKind
from pngglitch.parsers.png_error import InvalidChunkType, InvalidColorType, TooShortInput


class ColorType(IntEnum):
    GRAYSCALE = 0
    TRUECOLOR = 2
    INDEX_COLOR = 3
    GRAYSCALE_ALPHA = 4
    TRUECOLOR_ALPHA = 6

    @classmethod
    def from_code(cls, code):
        try:
            return cls(code)
        except ValueError:
            raise InvalidColorType(f"Unknown color type code {code}") from None

    @property
    def channels(self):
        return _CHANNELS[self]

    def bit_per_pixel(self, bit_depth):
        return self.channels * bit_depth


_CHANNELS = {
    ColorType.GRAYSCALE: 1,
    ColorType.TRUECOLOR: 3,
    ColorType.INDEX_COLOR: 1,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.TRUECOLOR_ALPHA: 4,
}


class Header:
    """
    The IHDR chunk (13 bytes):
    - width (4 bytes)
    - height (4 bytes)
    - bit_depth (1 byte)
    - color_type (1 byte)
    - compression, filter_method, interlace (1 byte each)

    Only the first four fields are modelled. The raw chunk is kept so the
    remaining bytes are written back exactly as they were read.
    """

    def __init__(self, width, height, bit_depth, color_type, inner):
        self.width = width
        self.height = height
        self.bit_depth = bit_depth
        self.color_type = color_type
        self.inner = inner
        self.scan_line_width = math.ceil(self.bits_per_scanline / 8) + 1

    @classmethod
    def from_chunk(cls, chunk):
        if chunk.chunk_type != ChunkKind.START:
            raise InvalidChunkType(chunk, "IHDR is expected")
        if chunk.length < 13:
            raise TooShortInput(f"IHDR has only {chunk.length} bytes, while 13 bytes are expected")

        width, height, bit_depth, color_code = struct.unpack(">IIBB", chunk.data[:10])
        color_type = ColorType.from_code(color_code)
        return cls(width, height, bit_depth, color_type, chunk)

    @property
    def bit_per_pixel(self):
        return self.color_type.bit_per_pixel(self.bit_depth)

    @property
    def bits_per_scanline(self):
        return self.bit_per_pixel * self.width

    @property
    def decoded_size(self):
        return self.scan_line_width * self.height

    def to_dict(self):
        compression, filter_method, interlace = self.inner.data[10:13]
        return {
            'width': self.width,
            'height': self.height,
            'bit_depth': self.bit_depth,
            'color_type': self.color_type.name,
            'compression': compression,
            'filter_method': filter_method,
            'interlace': interlace,
            'scan_line_width': self.scan_line_width,
        }

    def encode(self, writer):
        self.inner.encode(writer)

    def __repr__(self):
        return (f"Header(width={self.width}, height={self.height}, bit_depth={self.bit_depth}, "
                f"color_type={self.color_type.name}, scan_line_width={self.scan_line_width})")
