import numpy as np


class DecodedData:
    """
    The inflated IDAT stream: every scan line back to back, each one
    starting with its filter tag. This is the one allocation that all
    ScanLine views alias.
    """

    def __init__(self, data, scan_line_width):
        self.data = data if isinstance(data, bytearray) else bytearray(data)
        self.scan_line_width = scan_line_width

    def __len__(self):
        return len(self.data)

    @property
    def lines(self):
        return len(self.data) // self.scan_line_width if self.scan_line_width else 0

    def index_of(self, scan_line_index):
        return scan_line_index * self.scan_line_width

    def line_range(self, scan_line_index, lines=1):
        start = self.index_of(scan_line_index)
        return range(start, start + self.scan_line_width * lines)

    def as_array(self):
        """
        Return a (lines, scan_line_width) uint8 array sharing memory with the
        buffer. Writes through the array land in the decoded data.
        """
        array = np.frombuffer(self.data, dtype=np.uint8)
        return array.reshape(self.lines, self.scan_line_width)

    def snapshot(self):
        return bytes(self.data)
