import os
import sys
import random
import logging
import argparse
from datetime import datetime

from pngglitch.export.export_to_csv import export_to_csv
from pngglitch.export.export_to_json import export_to_json
from pngglitch.parsers.png_error import PNGError
from pngglitch.png.filter_type import FilterType
from pngglitch.png_glitch import PngGlitch, default_glitch, random_copy
from pngglitch.utils.file_utils import is_png_path, read_file_bytes

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

FILTER_NAMES = [filter_type.name.lower() for filter_type in FilterType]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="pngglitch", description="Glitch PNG images by editing their scan lines")
    parser.add_argument("-v", "--verbose", action='store_true', help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Show the structure of PNG files")
    info.add_argument("input", help="PNG file or directory containing PNG files")
    info.add_argument("-e", "--export", choices=['csv', 'json'], help="Export parsed data to CSV or JSON")
    info.add_argument("-o", "--output", default=".", help="Output directory")

    remove = commands.add_parser("remove-filter", help="Remove filters from scan lines")
    _add_io_arguments(remove)
    _add_region_arguments(remove)

    apply = commands.add_parser("apply-filter", help="Apply a filter to scan lines")
    _add_io_arguments(apply)
    apply.add_argument("-f", "--filter", required=True, choices=FILTER_NAMES, help="Filter to apply")
    _add_region_arguments(apply)

    transpose = commands.add_parser("transpose", help="Swap two blocks of scan lines")
    _add_io_arguments(transpose)
    transpose.add_argument("--src", type=_non_negative, required=True, help="First line of the source block")
    transpose.add_argument("--dst", type=_non_negative, required=True, help="First line of the destination block")
    transpose.add_argument("--lines", type=_non_negative, required=True, help="Number of lines in each block")

    glitch = commands.add_parser("glitch", help="Run the default glitch recipe")
    _add_io_arguments(glitch)

    copy = commands.add_parser("random-copy", help="Copy random scan lines over each other")
    _add_io_arguments(copy)
    copy.add_argument("-t", "--times", type=int, default=10, help="Number of copies")
    copy.add_argument("--seed", type=int, help="Seed for the random generator")

    return parser.parse_args(argv)


def _add_io_arguments(parser):
    parser.add_argument("input", help="Input PNG file")
    parser.add_argument("output", help="Output PNG file")


def _add_region_arguments(parser):
    parser.add_argument("--from", dest="from_", type=_non_negative, default=0, help="First scan line")
    parser.add_argument("--lines", type=_non_negative, help="Number of scan lines (default: to the last line)")


def _non_negative(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def _lines(args, glitch):
    return args.lines if args.lines is not None else glitch.height - args.from_


def run_info(args, now):
    png_files = []
    if os.path.isdir(args.input):
        for root, dirs, files in os.walk(args.input):
            for file in files:
                if is_png_path(file):
                    png_files.append(os.path.join(root, file))
    else:
        png_files.append(args.input)

    summaries = []
    for png_file in png_files:
        print(f"Parsing image file: {png_file}")
        glitch = PngGlitch.open(png_file)
        summary = {'file_path': png_file, **glitch.summary()}
        header = summary['header']
        print(f"  {header['width']}x{header['height']} {header['color_type']} bit depth {header['bit_depth']}, "
              f"{len(summary['scan_lines'])} scan lines, {len(summary['chunks'])} ancillary chunks")
        summaries.append(summary)

    if args.export:
        output_file = os.path.join(args.output, f"{now.strftime('%Y-%m-%d-%H.%M.%S')}-output.{args.export}")
        if args.export == 'csv':
            export_to_csv(summaries, output_file)
        elif args.export == 'json':
            export_to_json(summaries, output_file)
        print(f"Exported data to {output_file}")


def run_command(args):
    if args.command == "random-copy":
        data = random_copy(read_file_bytes(args.input), args.times, random.Random(args.seed))
        with open(args.output, 'wb') as f:
            f.write(data)
        print(f"Saved {args.output}")
        return 0

    glitch = PngGlitch.open(args.input)
    if args.command == "remove-filter":
        glitch.remove_filter_from(args.from_, _lines(args, glitch))
    elif args.command == "apply-filter":
        glitch.apply_filter_from(FilterType.from_name(args.filter), args.from_, _lines(args, glitch))
    elif args.command == "transpose":
        if max(args.src, args.dst) + args.lines > glitch.height:
            print(f"Error: blocks of {args.lines} lines at {args.src} and {args.dst} "
                  f"do not fit in {glitch.height} scan lines", file=sys.stderr)
            return 1
        glitch.transpose(args.src, args.dst, args.lines)
    elif args.command == "glitch":
        default_glitch(glitch)
    glitch.save(args.output)
    print(f"Saved {args.output}")
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    now = datetime.now()
    print(f"[{now.strftime('%Y-%m-%d-%H.%M.%S')}] Start {args.command}.")
    try:
        if args.command == "info":
            run_info(args, now)
        elif run_command(args):
            return 1
    except (PNGError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    end = datetime.now()
    print(f"[{end.strftime('%Y-%m-%d-%H.%M.%S')}] Finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
