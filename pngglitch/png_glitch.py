import io
import logging
import random

from PIL import Image

from pngglitch.parsers.png_parser import PNGParser
from pngglitch.png.filter_type import FilterType
from pngglitch.utils.file_utils import read_file_bytes

log = logging.getLogger(__name__)


class PngGlitch:
    """
    Glitch a PNG image by editing its decoded scan lines directly.

    Example:

        glitch = PngGlitch.open("sample.png")

        def halve(scan_line):
            scan_line.set_filter_type(FilterType.NONE)
            scan_line.update(4, (scan_line.index(4) or 0) // 2)

        glitch.foreach_scanline(halve)
        glitch.save("glitched.png")
    """

    def __init__(self, buffer):
        self.png = PNGParser(buffer).parse()

    @classmethod
    def open(cls, path):
        log.debug("loading %s", path)
        return cls(read_file_bytes(path))

    @property
    def width(self):
        return self.png.width

    @property
    def height(self):
        return self.png.height

    def scan_lines(self):
        return self.png.scan_lines()

    def scan_lines_from(self, from_, lines):
        return self.png.scan_lines_from(from_, lines)

    def foreach_scanline(self, modifier):
        self.png.foreach_scanline(modifier)

    def remove_filter(self):
        self.png.remove_filter()

    def remove_filter_from(self, from_, lines):
        self.png.remove_filter_from(from_, lines)

    def apply_filter(self, filter_type):
        self.png.apply_filter(filter_type)

    def apply_filter_from(self, filter_type, from_, lines):
        self.png.apply_filter_from(filter_type, from_, lines)

    def transpose(self, src, dst, lines):
        self.png.transpose(src, dst, lines)

    def encode(self, writer=None):
        return self.png.encode(writer)

    def save(self, path):
        self.png.save(path)

    def summary(self):
        header = self.png.header
        return {
            'header': header.to_dict(),
            'chunks': [
                {
                    'type': chunk.chunk_type.tag.decode('ascii', 'replace'),
                    'length': chunk.length,
                    'data': chunk.data,
                    'crc': chunk.crc,
                }
                for chunk in self.png.misc_chunks
            ],
            'scan_lines': [
                {'index': index, 'filter_type': line.filter_type.name, 'size': line.size()}
                for index, line in enumerate(self.scan_lines())
            ],
        }

    def to_image(self):
        """Decode the current state with Pillow, e.g. to preview a glitch."""
        image = Image.open(io.BytesIO(self.encode()))
        image.load()
        return image


def filter_type_from_code(code):
    """Integer filter code to FilterType; unknown codes fall back to None."""
    return FilterType(code) if FilterType.is_valid(code) else FilterType.NONE


def random_copy(data, times, rng=None):
    """Copy a random scan line over another one, 'times' times. Returns PNG bytes."""
    glitch = PngGlitch(data)
    rng = rng or random.Random()
    scan_lines = glitch.scan_lines()
    if not scan_lines:
        return glitch.encode()

    for _ in range(int(times)):
        src = scan_lines[rng.randrange(len(scan_lines))]
        dst = scan_lines[rng.randrange(len(scan_lines))]

        src.seek(0)
        buffer = src.read_to_end()
        dst.seek(0)
        dst.write(buffer)
        dst.set_filter_type(src.filter_type)

    return glitch.encode()


def remove_filter(data, from_, lines):
    glitch = PngGlitch(data)
    glitch.remove_filter_from(int(from_), int(lines))
    return glitch.encode()


def transpose(data, src, dst, lines):
    glitch = PngGlitch(data)
    glitch.transpose(int(src), int(dst), int(lines))
    return glitch.encode()


def apply_filter(data, filter_type, from_, lines):
    glitch = PngGlitch(data)
    glitch.apply_filter_from(filter_type_from_code(int(filter_type)), int(from_), int(lines))
    return glitch.encode()


def count_scanlines(data):
    return len(PngGlitch(data).scan_lines())


def default_glitch(glitch):
    """
    Raw-swap two blocks of lines, refilter them with Paeth and Sub, and
    poke the filtered bytes so the damage shows up when the image decodes.
    """
    glitch.remove_filter()
    height = glitch.height

    src = height // 3
    dst = src * 2
    lines = height // 4
    glitch.transpose(src, dst, lines)
    glitch.apply_filter_from(FilterType.PAETH, dst, lines)
    for line in glitch.scan_lines_from(dst, lines):
        line.update(0, 0)

    src = height // 5 * 2
    glitch.apply_filter_from(FilterType.SUB, src, lines)
    for line in glitch.scan_lines_from(src, lines):
        for i in range(line.size()):
            if line[i] == 0:
                line[i] = 1
    return glitch
