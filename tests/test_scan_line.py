"""
Tests for pngglitch/png/scan_line.py and pngglitch/png/decoded_data.py
"""
import numpy as np
import pytest

from pngglitch.parsers.header import ColorType
from pngglitch.parsers.png_error import InvalidFilterType
from pngglitch.png.decoded_data import DecodedData
from pngglitch.png.filter_type import FilterType
from pngglitch.png.scan_line import ScanLine


def make_scan_line(buffer=(0, 1, 2, 3, 4, 5), color_type=ColorType.TRUECOLOR_ALPHA, bit_depth=8):
    data = DecodedData(bytearray(buffer), len(buffer))
    return ScanLine.from_range(data, range(0, len(buffer)), color_type, bit_depth), data


class TestScanLine:
    """Tests for the ScanLine view"""

    def test_filter_type_comes_from_tag_byte(self):
        line, _ = make_scan_line((3, 9, 9))
        assert line.filter_type == FilterType.AVERAGE

    def test_invalid_tag(self):
        with pytest.raises(InvalidFilterType):
            make_scan_line((5, 9, 9))

    def test_range_outside_buffer(self):
        data = DecodedData(bytearray(4), 4)
        with pytest.raises(IndexError):
            ScanLine.from_range(data, range(4, 8), ColorType.GRAYSCALE, 8)

    def test_size_excludes_tag(self):
        line, _ = make_scan_line()
        assert line.size() == 5
        assert len(line) == 5

    def test_index(self):
        line, data = make_scan_line()
        assert line.index(0) == data.data[1]
        assert line.index(4) == 5
        assert line[2] == 3

    def test_index_out_of_range(self):
        line, _ = make_scan_line()
        assert line.index(5) is None
        assert line.index(-1) is None
        with pytest.raises(IndexError):
            line[5]

    def test_update(self):
        line, data = make_scan_line()
        line.update(0, 10)
        line[1] = 300
        assert data.data[1] == 10
        assert data.data[2] == 300 & 0xFF

    def test_update_out_of_range_is_ignored(self):
        line, data = make_scan_line()
        line.update(5, 99)
        line.update(-1, 99)
        assert data.snapshot() == bytes([0, 1, 2, 3, 4, 5])

    def test_set_filter_type_writes_tag(self):
        line, data = make_scan_line()
        line.set_filter_type(FilterType.PAETH)
        assert line.filter_type == FilterType.PAETH
        assert data.data[0] == 4

    def test_views_alias_the_same_buffer(self):
        data = DecodedData(bytearray([0, 1, 2, 0, 3, 4]), 3)
        first = ScanLine.from_range(data, data.line_range(0), ColorType.GRAYSCALE, 8)
        again = ScanLine.from_range(data, data.line_range(0), ColorType.GRAYSCALE, 8)
        second = ScanLine.from_range(data, data.line_range(1), ColorType.GRAYSCALE, 8)

        first.update(0, 42)
        assert again.index(0) == 42
        assert second.index(0) == 3

    def test_read(self):
        line, data = make_scan_line()
        assert line.read() == bytes(data.data[1:])
        assert line.read() == b''

    def test_read_in_steps(self):
        line, _ = make_scan_line()
        assert line.read(2) == b'\x01\x02'
        assert line.tell() == 2
        assert line.read_to_end() == b'\x03\x04\x05'

    def test_write(self):
        line, data = make_scan_line()
        assert line.write(bytes([10] * 5)) == 5
        assert data.data[1:] == bytearray([10] * 5)
        assert data.data[0] == 0

    def test_write_stops_at_line_end(self):
        line, data = make_scan_line()
        line.seek(3)
        assert line.write(b'abcdef') == 2
        assert data.snapshot() == bytes([0, 1, 2, 3]) + b'ab'
        assert line.write(b'z') == 0

    def test_iteration(self):
        line, _ = make_scan_line()
        assert list(line) == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("color_type, bit_depth, expected", [
        (ColorType.GRAYSCALE, 1, 1),
        (ColorType.GRAYSCALE, 8, 1),
        (ColorType.GRAYSCALE, 16, 2),
        (ColorType.INDEX_COLOR, 2, 1),
        (ColorType.INDEX_COLOR, 8, 1),
        (ColorType.GRAYSCALE_ALPHA, 8, 2),
        (ColorType.GRAYSCALE_ALPHA, 16, 4),
        (ColorType.TRUECOLOR, 8, 3),
        (ColorType.TRUECOLOR, 16, 6),
        (ColorType.TRUECOLOR_ALPHA, 8, 4),
        (ColorType.TRUECOLOR_ALPHA, 16, 8),
    ])
    def test_bytes_per_pixel(self, color_type, bit_depth, expected):
        line, _ = make_scan_line((0, 0), color_type, bit_depth)
        assert line.bytes_per_pixel() == expected

    def test_samples_sub_byte(self):
        line, _ = make_scan_line((0, 0b10110100, 0b11000000), ColorType.GRAYSCALE, 2)
        assert line.samples() == [2, 3, 1, 0, 3, 0, 0, 0]
        assert line.samples(5) == [2, 3, 1, 0, 3]

    def test_samples_sixteen_bit(self):
        line, _ = make_scan_line((0, 0x01, 0x02, 0xff, 0xfe), ColorType.GRAYSCALE, 16)
        assert line.samples() == [0x0102, 0xfffe]


class TestDecodedData:
    """Tests for the shared decoded buffer"""

    def test_line_range(self):
        data = DecodedData(bytearray(12), 4)
        assert data.lines == 3
        assert data.line_range(1) == range(4, 8)
        assert data.line_range(1, 2) == range(4, 12)

    def test_as_array_shares_memory(self):
        data = DecodedData(bytearray(range(6)), 3)
        array = data.as_array()
        assert array.shape == (2, 3)
        assert array.dtype == np.uint8

        array[1, 2] = 200
        assert data.data[5] == 200

    def test_snapshot_is_a_copy(self):
        data = DecodedData(bytearray(3), 3)
        snapshot = data.snapshot()
        data.data[1] = 7
        assert snapshot == bytes(3)
