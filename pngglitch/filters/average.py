from pngglitch.filters.byte import add_without_overflow, scan, scan_rev, sub_without_overflow


def remove(line, previous=None):
    """Average filter (3): add floor((left + up) / 2) to each byte."""
    scan(line, previous, recon)


def apply(line, previous=None):
    scan_rev(line, previous, filter)


def average(left, up):
    return (left + up) >> 1


def recon(current, left, up, up_left):
    return add_without_overflow(current, average(left, up))


def filter(current, left, up, up_left):
    return sub_without_overflow(current, average(left, up))
