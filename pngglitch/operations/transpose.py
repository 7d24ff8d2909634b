def transpose(png, src, dst, lines):
    """
    Swap two blocks of 'lines' scan lines in place: copy the source block
    aside, move the destination block onto the source, then write the copy
    onto the destination. Overlapping blocks are allowed.
    """
    src_range = png.scan_line_range(src, lines)
    dst_range = png.scan_line_range(dst, lines)

    assert len(src_range) == len(dst_range), \
        "Source and destination ranges must have the same length for transpose."
    assert min(src_range.start, dst_range.start) >= 0, \
        "Source and destination ranges must lie inside the decoded data."
    assert max(src_range.stop, dst_range.stop) <= len(png.data), \
        "Source and destination ranges must lie inside the decoded data."

    data = png.data.data
    tmp = bytes(data[src_range.start:src_range.stop])
    data[src_range.start:src_range.stop] = data[dst_range.start:dst_range.stop]
    data[dst_range.start:dst_range.stop] = tmp
