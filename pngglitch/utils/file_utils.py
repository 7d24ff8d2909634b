import os

PNG_EXTENSIONS = {".png"}


def read_file_bytes(file_path):
    with open(file_path, "rb") as f:
        return f.read()


def is_png_path(file_path):
    return os.path.splitext(file_path)[1].lower() in PNG_EXTENSIONS
