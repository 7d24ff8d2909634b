"""
Tests for pngglitch/png_glitch.py
"""
import io
import os
import random
import tempfile

import pytest
from PIL import Image

from pngglitch.parsers.png_error import DuplicateIHDRFound, InvalidSignature
from pngglitch.parsers.png_parser import parse_png
from pngglitch.png.filter_type import FilterType
from pngglitch.png_glitch import (
    PngGlitch,
    apply_filter,
    count_scanlines,
    default_glitch,
    filter_type_from_code,
    random_copy,
    remove_filter,
    transpose,
)
from png_samples import SIGNATURE, build_png, ihdr_payload, make_chunk, minimal_png, random_decoded


def sample_bytes(height=12, filter_types=(0, 1, 2, 3, 4), seed=0):
    decoded = random_decoded(6, height, filter_types=filter_types, seed=seed)
    return build_png(6, height, decoded), decoded


class TestPngGlitch:
    """Tests for the PngGlitch class"""

    def test_minimal(self):
        glitch = PngGlitch(minimal_png())
        assert glitch.width == 1
        assert glitch.height == 1
        assert len(glitch.scan_lines()) == 1

    def test_bad_input(self):
        with pytest.raises(InvalidSignature):
            PngGlitch(b'\x00' * 40)

        ihdr = make_chunk(b'IHDR', ihdr_payload(1, 1))
        with pytest.raises(DuplicateIHDRFound):
            PngGlitch(SIGNATURE + ihdr + ihdr + make_chunk(b'IEND', b''))

    def test_open_and_save(self):
        data, decoded = sample_bytes()
        with tempfile.NamedTemporaryFile(delete=False, suffix='.png') as f:
            f.write(data)
            temp_path = f.name

        try:
            glitch = PngGlitch.open(temp_path)
            glitch.remove_filter()
            glitch.save(temp_path)

            again = PngGlitch.open(temp_path)
            assert all(line.filter_type == FilterType.NONE for line in again.scan_lines())
            again.apply_filter(FilterType.SUB)
            assert again.height == 12
        finally:
            os.unlink(temp_path)

    def test_foreach_scanline(self):
        data, _ = sample_bytes(height=4)
        glitch = PngGlitch(data)

        def halve(scan_line):
            scan_line.set_filter_type(FilterType.NONE)
            scan_line.update(4, (scan_line.index(4) or 0) // 2)

        before = [line.index(4) for line in glitch.scan_lines()]
        glitch.foreach_scanline(halve)
        assert [line.index(4) for line in glitch.scan_lines()] == [value // 2 for value in before]

    def test_region_operations(self):
        data, decoded = sample_bytes(height=10, filter_types=(2,))
        glitch = PngGlitch(data)
        glitch.remove_filter_from(0, 10)
        glitch.apply_filter_from(FilterType.UP, 0, 10)
        glitch.transpose(0, 5, 5)
        glitch.transpose(5, 0, 5)
        assert parse_png(glitch.encode()).data.snapshot() == bytes(decoded)

    def test_scan_lines_from(self):
        data, _ = sample_bytes(height=10)
        glitch = PngGlitch(data)
        assert len(glitch.scan_lines_from(2, 3)) == 3

    def test_summary(self):
        data = build_png(1, 2, bytes(10), ancillary=[(b'tEXt', b'a\x00b')])
        summary = PngGlitch(data).summary()
        assert summary['header']['width'] == 1
        assert summary['header']['color_type'] == 'TRUECOLOR_ALPHA'
        assert summary['chunks'][0]['type'] == 'tEXt'
        assert [line['filter_type'] for line in summary['scan_lines']] == ['NONE', 'NONE']

    def test_to_image(self):
        image = PngGlitch(minimal_png()).to_image()
        assert image.size == (1, 1)
        assert image.mode == "RGBA"
        assert image.getpixel((0, 0)) == (255, 0, 0, 255)

    def test_default_glitch(self):
        data, _ = sample_bytes(height=30)
        glitch = default_glitch(PngGlitch(data))
        again = parse_png(glitch.encode())
        assert again.height == 30
        # lines 20-26 were refiltered with Paeth and their first byte zeroed
        for line in again.scan_lines_from(20, 7):
            assert line.filter_type == FilterType.PAETH
            assert line.index(0) == 0


class TestByteOperations:
    """Tests for the bytes-in, bytes-out operations"""

    def test_filter_type_from_code(self):
        assert filter_type_from_code(4) == FilterType.PAETH
        assert filter_type_from_code(9) == FilterType.NONE
        assert filter_type_from_code(-1) == FilterType.NONE

    def test_count_scanlines(self):
        data, _ = sample_bytes(height=7)
        assert count_scanlines(data) == 7

    def test_remove_filter(self):
        data, _ = sample_bytes(height=6)
        out = remove_filter(data, 2, 3)
        tags = [line.filter_type for line in parse_png(out).scan_lines()]
        assert tags == [0, 1, 0, 0, 0, 0]

    def test_apply_filter(self):
        data, _ = sample_bytes(height=6, filter_types=(0,))
        out = apply_filter(data, 3, 1, 2)
        tags = [line.filter_type for line in parse_png(out).scan_lines()]
        assert tags == [0, 3, 3, 0, 0, 0]

    def test_apply_unknown_filter_code(self):
        data, decoded = sample_bytes(height=3, filter_types=(0,))
        out = apply_filter(data, 42, 0, 3)
        assert parse_png(out).data.snapshot() == bytes(decoded)

    def test_transpose(self):
        data, decoded = sample_bytes(height=6)
        width = 6 * 4 + 1
        out = parse_png(transpose(data, 0, 3, 3)).data.snapshot()
        assert out == bytes(decoded[3 * width:] + decoded[:3 * width])

    def test_random_copy(self):
        data, decoded = sample_bytes(height=8)
        out = parse_png(random_copy(data, 5, random.Random(1)))
        width = out.scan_line_width
        original_lines = {bytes(decoded[i * width:(i + 1) * width]) for i in range(8)}
        for index in range(8):
            line = bytes(out.data.data[index * width:(index + 1) * width])
            assert line in original_lines

    def test_random_copy_zero_times(self):
        data, decoded = sample_bytes(height=4)
        out = parse_png(random_copy(data, 0))
        assert out.data.snapshot() == bytes(decoded)

    def test_output_opens_in_pillow(self):
        data, _ = sample_bytes(height=5)
        out = remove_filter(data, 0, 5)
        image = Image.open(io.BytesIO(out))
        assert image.size == (6, 5)
