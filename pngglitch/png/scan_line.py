import math

from bitstring import BitStream

from pngglitch.filters import filter as png_filter
from pngglitch.png.filter_type import FilterType


class ScanLine:
    """
    A window over one scan line of the decoded data.

    The view does not own any bytes: it holds the shared DecodedData and the
    range [start, end) of its line, the first byte of which is the filter tag.
    Pixel data is [start + 1, end). Reads outside the pixel data return None
    and writes outside it are ignored.

    Several views may point into the same buffer at once. Running two
    mutation passes over overlapping lines at the same time is not supported.
    """

    def __init__(self, filter_type, decoded_data, line_range, color_type, bit_depth):
        self.filter_type = filter_type
        self.decoded_data = decoded_data
        self.range = line_range
        self.color_type = color_type
        self.bit_depth = bit_depth
        self.position = 0

    @classmethod
    def from_range(cls, decoded_data, line_range, color_type, bit_depth):
        """Build a view whose filter type is read from the tag byte at line_range.start."""
        if not len(line_range) or line_range.stop > len(decoded_data):
            raise IndexError(f"Invalid memory range {line_range.start}..{line_range.stop} is specified")
        filter_type = FilterType.from_code(decoded_data.data[line_range.start])
        return cls(filter_type, decoded_data, line_range, color_type, bit_depth)

    @property
    def buffer(self):
        return self.decoded_data.data

    @property
    def pixel_data_offset(self):
        return self.range.start + 1

    def pixel_data_range(self):
        return range(self.pixel_data_offset, self.range.stop)

    def bytes_per_pixel(self):
        return max(1, math.ceil(self.color_type.bit_per_pixel(self.bit_depth) / 8))

    def size(self):
        return len(self.range) - 1

    def __len__(self):
        return self.size()

    def set_filter_type(self, filter_type):
        filter_type = FilterType(filter_type)
        self.filter_type = filter_type
        self.buffer[self.range.start] = filter_type

    def apply_filter(self, filter_type, previous=None):
        """Filter the pixel data with filter_type, using previous as the line above."""
        filter_type = FilterType(filter_type)
        png_filter.apply(filter_type, self, previous)
        self.set_filter_type(filter_type)

    def remove_filter(self, previous=None):
        """Reconstruct the raw pixel data; previous must already be reconstructed."""
        png_filter.remove(self, previous)
        self.set_filter_type(FilterType.NONE)

    def index(self, index):
        if 0 <= index < self.size():
            return self.buffer[self.pixel_data_offset + index]
        return None

    def update(self, index, value):
        if 0 <= index < self.size():
            self.buffer[self.pixel_data_offset + index] = value & 0xFF

    def __getitem__(self, index):
        value = self.index(index)
        if value is None:
            raise IndexError(f"scan line index {index} out of range")
        return value

    def __setitem__(self, index, value):
        self.update(index, value)

    def __iter__(self):
        for index in self.pixel_data_range():
            yield self.buffer[index]

    # Stream-style access over the pixel data

    def tell(self):
        return self.position

    def seek(self, position):
        self.position = min(max(0, position), self.size())
        return self.position

    def read(self, size=-1):
        start = self.pixel_data_offset + self.position
        end = self.range.stop if size is None or size < 0 else min(start + size, self.range.stop)
        data = bytes(self.buffer[start:end])
        self.position += len(data)
        return data

    def read_to_end(self):
        return self.read()

    def write(self, data):
        """Write as many bytes as fit before the end of the line, return the count."""
        start = self.pixel_data_offset + self.position
        count = min(len(data), self.range.stop - start)
        self.buffer[start:start + count] = data[:count]
        self.position += count
        return count

    def samples(self, count=None):
        """
        Unpack the pixel data into samples of bit_depth bits each (big-endian,
        as PNG stores them). Without count, the padding bits at the end of a
        sub-byte line are unpacked as well.
        """
        bs = BitStream(bytes(self.buffer[self.pixel_data_offset:self.range.stop]))
        available = bs.len // self.bit_depth
        count = available if count is None else min(count, available)
        return [bs.read(f'uint:{self.bit_depth}') for _ in range(count)]

    def __repr__(self):
        return (f"ScanLine(filter_type={self.filter_type.name}, range={self.range.start}..{self.range.stop}, "
                f"color_type={self.color_type.name}, bit_depth={self.bit_depth})")
