from pngglitch.operations import encode as png_encode
from pngglitch.operations import region
from pngglitch.operations import transpose as png_transpose
from pngglitch.operations.operation import Encode, Scan, Transpose
from pngglitch.png.filter_type import FilterType
from pngglitch.png.scan_line import ScanLine


class Png(Encode, Scan, Transpose):
    """
    A parsed PNG image: the header, the terminator, every ancillary chunk in
    the order it was found, and the decoded data all scan lines share.
    Mutations always happen in place on the decoded data.
    """

    def __init__(self, header, terminator, misc_chunks, data):
        self.header = header
        self.terminator = terminator
        self.misc_chunks = list(misc_chunks)
        self.data = data

    @property
    def width(self):
        return self.header.width

    @property
    def height(self):
        return self.header.height

    @property
    def scan_line_width(self):
        return self.header.scan_line_width

    def scan_line_range(self, scan_line_index, lines=1):
        return self.data.line_range(scan_line_index, lines)

    # Scan

    def scan_line(self, index):
        if not 0 <= index < self.height:
            return None
        return ScanLine.from_range(self.data, self.scan_line_range(index),
                                   self.header.color_type, self.header.bit_depth)

    def scan_lines(self):
        return self.scan_lines_from(0, self.height)

    def scan_lines_from(self, from_, lines):
        end = min(from_ + lines, self.height)
        return [self.scan_line(index) for index in range(max(from_, 0), end)]

    # Filters

    def remove_filter(self):
        self.remove_filter_from(0, self.height)

    def remove_filter_from(self, from_, lines):
        region.remove_filter_from(self, from_, lines)

    def apply_filter(self, filter_type):
        self.apply_filter_from(filter_type, 0, self.height)

    def apply_filter_from(self, filter_type, from_, lines):
        region.apply_filter_from(self, FilterType(filter_type), from_, lines)

    # Transpose

    def transpose(self, src, dst, lines):
        png_transpose.transpose(self, src, dst, lines)

    # Encode

    def encode(self, writer=None, level=None):
        return png_encode.encode(self, writer, level)

    def save(self, path, level=None):
        with open(path, 'wb') as f:
            self.encode(f, level)
