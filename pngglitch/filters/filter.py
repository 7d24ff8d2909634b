from pngglitch.filters import average, paeth, sub, up
from pngglitch.png.filter_type import FilterType

_ALGORITHMS = {
    FilterType.SUB: sub,
    FilterType.UP: up,
    FilterType.AVERAGE: average,
    FilterType.PAETH: paeth,
}


def remove(line, previous=None):
    """Undo the filter recorded in line.filter_type; None leaves the bytes untouched."""
    algorithm = _ALGORITHMS.get(line.filter_type)
    if algorithm is not None:
        algorithm.remove(line, previous)


def apply(filter_type, line, previous=None):
    algorithm = _ALGORITHMS.get(filter_type)
    if algorithm is not None:
        algorithm.apply(line, previous)
