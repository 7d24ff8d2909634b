class PNGError(ValueError):
    """Base class for every error raised while parsing a PNG stream."""

    message = "Failed to parse PNG data."

    def __init__(self, detail=None):
        self.detail = detail
        super().__init__(f"{self.message} {detail}" if detail else self.message)


class InvalidSignature(PNGError):
    message = "Invalid signature found."


class TooShortInput(PNGError):
    message = "The input buffer is shorter than expectation."


class NoIHDRFound(PNGError):
    message = "No IHDR chunk found."


class NOIENDFound(PNGError):
    message = "No IEND chunk found."


class NoIDATFound(PNGError):
    message = "No IDAT chunk found."


class DuplicateIHDRFound(PNGError):
    message = "Another IHDR chunk found."


class DuplicateIENDFound(PNGError):
    message = "Another IEND chunk found."


class InvalidChunkType(PNGError):
    message = "Invalid chunk type."

    def __init__(self, chunk, detail=None):
        self.chunk = chunk
        super().__init__(detail or f"Unexpected {chunk.chunk_type}")


class InvalidColorType(PNGError):
    message = "Invalid color type."


class InvalidFilterType(PNGError):
    message = "Invalid filter type."


class DeflateFailure(PNGError):
    message = "Failed to deflate data."
