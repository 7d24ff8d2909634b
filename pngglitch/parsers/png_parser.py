import logging
import zlib

from pngglitch.parsers.chunk import SIGNATURE, Chunk, ChunkKind
from pngglitch.parsers.header import Header
from pngglitch.parsers.png_error import (
    DeflateFailure,
    DuplicateIENDFound,
    DuplicateIHDRFound,
    InvalidFilterType,
    InvalidSignature,
    NoIDATFound,
    NoIHDRFound,
    NOIENDFound,
)
from pngglitch.parsers.terminator import Terminator
from pngglitch.png.decoded_data import DecodedData
from pngglitch.png.filter_type import FilterType
from pngglitch.png.png import Png

log = logging.getLogger(__name__)


class PNGParser:
    def __init__(self, data):
        self.data = data
        self.offset = 0
        self.header = None
        self.terminator = None
        self.idat_chunks = []   # Raw IDAT payloads, in stream order
        self.misc_chunks = []   # Every other chunk, kept verbatim

    def parse(self):
        """
        Parse the entire PNG file data. This method orchestrates:
        1) Checking the PNG signature.
        2) Iterating through the chunks until IEND (or the end of data).
        3) Decompressing the concatenated IDAT payloads into one buffer.
        4) Building the Png aggregate that owns that buffer.
        """
        self._parse_signature()

        while self.offset < len(self.data):
            chunk = Chunk.parse(self.data, self.offset)
            self.offset += chunk.consumed_size
            log.debug("found %r with %d bytes of payload", chunk.chunk_type, chunk.length)

            self._found_chunk(chunk)
            if self.terminator is not None:
                break

        return self._build()

    def _parse_signature(self):
        if bytes(self.data[:8]) != SIGNATURE:
            raise InvalidSignature("Invalid signature found on parsing png file.")
        self.offset = len(SIGNATURE)

    def _found_chunk(self, chunk):
        kind = chunk.chunk_type.kind
        if kind == ChunkKind.START:
            self._parse_ihdr(chunk)
        elif kind == ChunkKind.DATA:
            self._parse_idat(chunk)
        elif kind == ChunkKind.END:
            self._parse_iend(chunk)
        else:
            self._parse_unknown(chunk)

    def _parse_ihdr(self, chunk):
        if self.header is not None:
            raise DuplicateIHDRFound("IHDR should appear only once.")
        self.header = Header.from_chunk(chunk)

    def _parse_idat(self, chunk):
        """
        Collect IDAT chunks (compressed image data).
        The data stream may be split across several chunks, so they are
        only decompressed once the whole stream has been read.
        """
        self.idat_chunks.append(chunk.data)

    def _parse_iend(self, chunk):
        if self.terminator is not None:
            raise DuplicateIENDFound("IEND should appear only once.")
        self.terminator = Terminator.from_chunk(chunk)

    def _parse_unknown(self, chunk):
        """Ancillary chunks are not interpreted, only preserved in order."""
        self.misc_chunks.append(chunk)

    def _build(self):
        data = self._inflate_idat()
        if self.terminator is None:
            raise NOIENDFound()

        return Png(self.header, self.terminator, self.misc_chunks, data)

    def _inflate_idat(self):
        """
        Combine all IDAT chunks and decompress them using zlib into a buffer
        of exactly scan_line_width * height bytes.
        """
        all_idat_data = b''.join(self.idat_chunks)
        if not all_idat_data:
            raise NoIDATFound("Failed on parsing a PNG file.")
        if self.header is None:
            raise NoIHDRFound()

        expected = self.header.decoded_size
        try:
            decompressor = zlib.decompressobj()
            decompressed = decompressor.decompress(all_idat_data, expected)[:expected]
        except zlib.error as e:
            raise DeflateFailure("Deflate failure while parsing consolidated IDAT chunks.") from e
        if len(decompressed) < expected and not decompressor.eof:
            raise DeflateFailure(f"IDAT stream ended after {len(decompressed)} of {expected} bytes.")

        log.debug("inflated %d bytes of IDAT into %d bytes", len(all_idat_data), len(decompressed))
        if len(decompressed) < expected:
            log.warning("decoded data has %d bytes, %d expected; padding with zeros",
                        len(decompressed), expected)

        buffer = bytearray(expected)
        buffer[:len(decompressed)] = decompressed
        self._check_filter_types(buffer)
        return DecodedData(buffer, self.header.scan_line_width)

    def _check_filter_types(self, buffer):
        width = self.header.scan_line_width
        for index in range(self.header.height):
            tag = buffer[index * width]
            if not FilterType.is_valid(tag):
                raise InvalidFilterType(f"Scan line #{index} has filter type {tag}")


def parse_png(data):
    return PNGParser(data).parse()
