from pngglitch.filters.byte import add_without_overflow, scan, scan_rev, sub_without_overflow


def remove(line, previous=None):
    """
    Paeth filter (4): use the Paeth predictor to choose among left, up,
    and upper-left.
    """
    scan(line, previous, recon)


def apply(line, previous=None):
    scan_rev(line, previous, filter)


def predict(left, up, up_left):
    p = left + up - up_left

    pa = abs(p - left)
    pb = abs(p - up)
    pc = abs(p - up_left)

    # ties go to left, then up
    if pa <= pb and pa <= pc:
        return left
    elif pb <= pc:
        return up
    else:
        return up_left


def recon(current, left, up, up_left):
    return add_without_overflow(current, predict(left, up, up_left))


def filter(current, left, up, up_left):
    return sub_without_overflow(current, predict(left, up, up_left))
