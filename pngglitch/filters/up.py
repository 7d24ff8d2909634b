from pngglitch.filters.byte import add_without_overflow, scan, scan_rev, sub_without_overflow


def remove(line, previous=None):
    scan(line, previous, recon)


def apply(line, previous=None):
    scan_rev(line, previous, filter)


def recon(current, left, up, up_left):
    return add_without_overflow(current, up)


def filter(current, left, up, up_left):
    return sub_without_overflow(current, up)
