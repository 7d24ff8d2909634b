class Encode:
    def encode(self, writer=None, level=None):
        """Write the image in PNG format to writer, or return the bytes when writer is None."""
        raise NotImplementedError("Subclasses should implement this method")


class Scan:
    def scan_lines(self):
        raise NotImplementedError("Subclasses should implement this method")

    def scan_lines_from(self, from_, lines):
        """Return at most 'lines' ScanLine views starting at line 'from_'."""
        raise NotImplementedError("Subclasses should implement this method")

    def foreach_scanline(self, modifier):
        for scan_line in self.scan_lines():
            modifier(scan_line)


class Transpose:
    def transpose(self, src, dst, lines):
        """Swap the 'lines' scan lines starting at src with those starting at dst."""
        raise NotImplementedError("Subclasses should implement this method")
