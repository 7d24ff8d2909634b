from pngglitch.parsers.chunk import ChunkKind
from pngglitch.parsers.png_error import InvalidChunkType


class Terminator:
    """The IEND chunk, validated on parse and written back as read."""

    def __init__(self, inner):
        self.inner = inner

    @classmethod
    def from_chunk(cls, chunk):
        if chunk.chunk_type != ChunkKind.END:
            raise InvalidChunkType(chunk, "IEND is expected")
        return cls(chunk)

    def encode(self, writer):
        self.inner.encode(writer)
