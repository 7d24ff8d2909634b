"""
Byte arithmetic and neighbour lookups shared by the filter algorithms.

Indexes passed to the lookups are absolute offsets into the decoded data.
A neighbour that falls outside the pixel data of its line reads as 0.
"""


def add_without_overflow(a, b):
    return (a + b) & 0xFF


def sub_without_overflow(a, b):
    return (a - b) & 0xFF


def byte_at(line, index):
    if line.pixel_data_offset <= index < line.range.stop:
        return line.buffer[index]
    return 0


def byte_in_previous_pixel(line, index, bpp):
    """The 'left' byte: same channel, one pixel earlier on the same line."""
    if index - bpp < line.pixel_data_offset:
        return 0
    return line.buffer[index - bpp]


def byte_in_previous_line(previous, position):
    """The 'up' byte. position is relative to the start of the pixel data."""
    if previous is None:
        return 0
    return byte_at(previous, previous.pixel_data_offset + position)


def byte_in_previous_pixel_in_previous_line(previous, position, bpp):
    """The 'up-left' byte."""
    if position < bpp:
        return 0
    return byte_in_previous_line(previous, position - bpp)


def scan(line, previous, callback):
    """
    Reconstruction pass: left to right, so every byte read as 'left' has
    already been reconstructed. previous must hold reconstructed bytes too.
    callback(current, left, up, up_left) returns the new byte.
    """
    bpp = line.bytes_per_pixel()
    buffer = line.buffer
    offset = line.pixel_data_offset
    for index in line.pixel_data_range():
        position = index - offset
        left = byte_in_previous_pixel(line, index, bpp)
        up = byte_in_previous_line(previous, position)
        up_left = byte_in_previous_pixel_in_previous_line(previous, position, bpp)
        buffer[index] = callback(buffer[index], left, up, up_left)


def scan_rev(line, previous, callback):
    """
    Filtering pass: right to left, so every byte read as 'left' is still the
    unfiltered sample when it is used.
    """
    bpp = line.bytes_per_pixel()
    buffer = line.buffer
    offset = line.pixel_data_offset
    for index in reversed(line.pixel_data_range()):
        position = index - offset
        left = byte_in_previous_pixel(line, index, bpp)
        up = byte_in_previous_line(previous, position)
        up_left = byte_in_previous_pixel_in_previous_line(previous, position, bpp)
        buffer[index] = callback(buffer[index], left, up, up_left)
