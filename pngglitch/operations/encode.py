import io
import logging
import zlib

from pngglitch.parsers.chunk import SIGNATURE, Chunk, ChunkType

log = logging.getLogger(__name__)

COMPRESSION_LEVEL = 6


def create_idat_chunk(png, level=COMPRESSION_LEVEL):
    """Compress the whole decoded data into a single IDAT chunk with a fresh CRC."""
    compressed = zlib.compress(bytes(png.data.data), level)
    log.debug("compressed %d bytes of decoded data into %d bytes", len(png.data), len(compressed))
    return Chunk.create(ChunkType(ChunkType.IDAT), compressed)


def encode(png, writer=None, level=None):
    """
    Serialize signature, IHDR, the ancillary chunks in their original order,
    one IDAT and IEND. Returns the bytes when no writer is given.
    """
    if writer is None:
        buffer = io.BytesIO()
        encode(png, buffer, level)
        return buffer.getvalue()

    writer.write(SIGNATURE)
    png.header.encode(writer)
    for chunk in png.misc_chunks:
        chunk.encode(writer)
    create_idat_chunk(png, COMPRESSION_LEVEL if level is None else level).encode(writer)
    png.terminator.encode(writer)
    return None
