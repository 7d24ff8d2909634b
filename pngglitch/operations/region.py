import logging

log = logging.getLogger(__name__)


def remove_filter_from(png, from_, lines):
    """
    Reconstruct scan lines [from_, from_ + lines) top to bottom.

    Line from_ - 1 is read as the predecessor of the first line but is not
    modified. Each reconstructed line then serves as the predecessor of the
    next one, so the whole span ends up holding raw bytes tagged None.
    """
    targets = png.scan_lines_from(from_, lines)
    previous = png.scan_line(from_ - 1) if from_ > 0 else None
    log.debug("removing filter from %d scan lines starting at %d", len(targets), from_)

    for line in targets:
        line.remove_filter(previous)
        previous = line


def apply_filter_from(png, filter_type, from_, lines):
    """
    Filter scan lines [from_, from_ + lines) bottom to top.

    Every line is filtered against the line physically above it, which has
    not been touched yet by this pass when it is read.
    """
    targets = png.scan_lines_from(from_, lines)
    above = png.scan_line(from_ - 1) if from_ > 0 else None
    log.debug("applying %s filter to %d scan lines starting at %d",
              filter_type.name, len(targets), from_)

    for index in range(len(targets) - 1, -1, -1):
        previous = targets[index - 1] if index > 0 else above
        targets[index].apply_filter(filter_type, previous)
