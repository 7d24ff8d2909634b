import struct
import zlib
from dataclasses import dataclass
from enum import Enum

from pngglitch.parsers.png_error import TooShortInput

SIGNATURE = b'\x89PNG\r\n\x1a\n'


class ChunkKind(Enum):
    START = "IHDR"
    DATA = "IDAT"
    END = "IEND"
    OTHER = "other"


class ChunkType:
    """
    Type of a PNG chunk, derived purely from its 4-byte tag.
    IHDR, IDAT and IEND get their own kind, every other tag is OTHER and
    keeps the raw bytes so the chunk can be written back unchanged.
    """

    IHDR = b'IHDR'
    IDAT = b'IDAT'
    IEND = b'IEND'

    _KINDS = {
        IHDR: ChunkKind.START,
        IDAT: ChunkKind.DATA,
        IEND: ChunkKind.END,
    }

    def __init__(self, tag):
        if len(tag) < 4:
            raise TooShortInput(f"Input has only {len(tag)} bytes, while 4 bytes input is expected")
        self.tag = bytes(tag[:4])
        self.kind = self._KINDS.get(self.tag, ChunkKind.OTHER)

    def __eq__(self, other):
        if isinstance(other, ChunkType):
            return self.tag == other.tag
        if isinstance(other, ChunkKind):
            return self.kind == other
        return NotImplemented

    def __hash__(self):
        return hash(self.tag)

    def __repr__(self):
        return f"chunk type = {self.tag.decode('ascii', 'replace')}"

    def encode(self, writer):
        writer.write(self.tag)


@dataclass
class Chunk:
    chunk_type: ChunkType
    data: bytes
    crc: bytes

    @property
    def length(self):
        return len(self.data)

    @property
    def consumed_size(self):
        # length field + tag + payload + CRC
        return self.length + 12

    @classmethod
    def create(cls, chunk_type, data):
        """Build a chunk whose CRC is computed over tag + payload."""
        data = bytes(data)
        crc = zlib.crc32(chunk_type.tag + data) & 0xFFFFFFFF
        return cls(chunk_type, data, struct.pack(">I", crc))

    @classmethod
    def parse(cls, buffer, offset=0):
        """
        Read a single chunk starting at 'offset':
        1) 4 bytes chunk length (big-endian)
        2) 4 bytes chunk type
        3) 'length' bytes of chunk data
        4) 4 bytes CRC, kept as raw bytes
        """
        remaining = len(buffer) - offset
        if remaining < 4:
            raise TooShortInput("Failed to retrieve data size of a chunk")
        length = struct.unpack(">I", buffer[offset:offset+4])[0]

        chunk_type = ChunkType(buffer[offset+4:offset+8])

        if remaining - 8 < length:
            raise TooShortInput("Failed to parse payload of a chunk")
        data = bytes(buffer[offset+8:offset+8+length])

        crc = bytes(buffer[offset+8+length:offset+12+length])
        if len(crc) < 4:
            raise TooShortInput("Failed to retrieve CRC")

        return cls(chunk_type, data, crc)

    def encode(self, writer):
        writer.write(struct.pack(">I", self.length))
        self.chunk_type.encode(writer)
        writer.write(self.data)
        writer.write(self.crc)
