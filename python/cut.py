#!/usr/bin/env python3
"""
Name: cut
Description: select portions of each line of a file
Author: Rich Lafferty, rich@alcor.concordia.ca (Original Perl Author)
License: perl
"""

import sys
import os
import argparse
import re
from enum import Enum

# An endpoint may carry a '+' so that a signed endpoint is reported on its own
# rather than as a malformed range.
RANGE_RE = re.compile(r'(\+?[0-9]+)-(\+?[0-9]+)')
INDEX_RE = re.compile(r'[0-9]+')


class Mode(Enum):
    BYTES = 'bytes'
    CHARS = 'chars'
    FIELDS = 'fields'


class ListError(ValueError):
    """Base class for errors in a byte/character/field list."""

    def __eq__(self, other):
        return type(self) is type(other) and self.args == other.args

    def __hash__(self):
        return hash((type(self), self.args))


class IllegalListValue(ListError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f'illegal list value: "{value}"')


class InvalidRangeOrder(ListError):
    def __init__(self, first: int, second: int):
        self.first = first
        self.second = second
        super().__init__(
            f"First number in range ({first}) must be lower than second number ({second})"
        )


def parse_index(token: str) -> int:
    """
    Converts a 1-based position like "3" into a 0-based index.
    Zero, a leading '+', or anything that is not a plain number is rejected.
    """
    if not INDEX_RE.fullmatch(token) or int(token) == 0:
        raise IllegalListValue(token)
    return int(token) - 1


def parse_range(token: str) -> range:
    """
    Converts an inclusive 1-based range like "5-8" into range(4, 8).
    Each endpoint is validated on its own before the two are compared.
    """
    match = RANGE_RE.fullmatch(token)
    if not match:
        raise IllegalListValue(token)

    start = parse_index(match.group(1))
    end = parse_index(match.group(2))
    if start >= end:
        raise InvalidRangeOrder(start + 1, end + 1)
    return range(start, end + 1)


def parse_selection(list_str: str) -> tuple:
    """
    Parses a cut-style list string (e.g., "1,3,5-8") into a tuple of
    half-open, 0-based ranges.

    The ranges keep the order they were written in; they are never sorted
    or merged, so "3,1" selects the third item before the first. The first
    bad token aborts the whole parse.
    """
    selection = []
    for token in list_str.split(','):
        if RANGE_RE.fullmatch(token):
            selection.append(parse_range(token))
        else:
            index = parse_index(token)
            selection.append(range(index, index + 1))
    return tuple(selection)


def flatten(selection, length: int):
    """Yields every index in the selection, in order, that is below `length`."""
    for span in selection:
        yield from range(span.start, min(span.stop, length))


def extract_chars(selection, line: str) -> str:
    """Selects characters (code points, not bytes) from a line."""
    return ''.join(line[i] for i in flatten(selection, len(line)))


def extract_bytes(selection, line) -> str:
    """
    Selects bytes from a line. A selection that cuts a multi-byte character
    in half decodes to U+FFFD instead of failing.
    """
    if isinstance(line, str):
        line = line.encode('utf-8')
    selected = bytes(line[i] for i in flatten(selection, len(line)))
    return selected.decode('utf-8', errors='replace')


def extract_fields(selection, record, delimiter: str = '\t') -> list:
    """
    Selects fields from a record. `record` may be an already split sequence
    of fields or a raw line, which is split on `delimiter` first. Quote
    characters get no special treatment.
    """
    if isinstance(record, str):
        record = record.split(delimiter)
    return [record[i] for i in flatten(selection, len(record))]


def extract(selection, unit, mode: Mode, delimiter: str = '\t'):
    """
    Applies a parsed selection to one line of input.

    Returns a string for byte and character mode, and a list of fields for
    field mode. Positions past the end of the line are skipped, so this never
    fails because a line is short.
    """
    if mode is Mode.CHARS:
        return extract_chars(selection, unit)
    if mode is Mode.BYTES:
        return extract_bytes(selection, unit)
    if mode is Mode.FIELDS:
        return extract_fields(selection, unit, delimiter)
    raise ValueError(f"unknown extraction mode: {mode!r}")


def chomp(line: bytes) -> bytes:
    """Removes a trailing '\\n' or '\\r\\n', like Perl's chomp."""
    if line.endswith(b'\n'):
        line = line[:-1]
        if line.endswith(b'\r'):
            line = line[:-1]
    return line


def process_stream(stream, selection, mode: Mode, delimiter: str):
    """Reads binary lines from a stream and prints the selected portion of each."""
    for raw_line in stream:
        raw_line = chomp(raw_line)
        if mode is Mode.BYTES:
            print(extract(selection, raw_line, mode))
            continue

        line = raw_line.decode('utf-8', errors='replace')
        if mode is Mode.FIELDS:
            print(delimiter.join(extract(selection, line, mode, delimiter)))
        else:
            print(extract(selection, line, mode))


def main():
    """Parses arguments and dispatches to the extraction engine."""
    parser = argparse.ArgumentParser(
        description="Select portions of each line of a file.",
        usage="%(prog)s [-b list | -c list | -f list] [-d delim] [file ...]"
    )
    # The main modes are mutually exclusive.
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument('-b', '--bytes', dest='byte_list', help='Select only these bytes.')
    mode_group.add_argument('-c', '--chars', dest='char_list', help='Select only these characters.')
    mode_group.add_argument('-f', '--fields', dest='field_list', help='Select only these fields.')

    parser.add_argument('-d', '--delim', dest='delimiter', default='\t',
                        help="Field delimiter (default: TAB).")
    parser.add_argument('files', nargs='*', default=['-'],
                        help='Files to process. Reads from stdin if none are given.')

    args = parser.parse_args()
    program_name = os.path.basename(sys.argv[0])

    if len(args.delimiter.encode('utf-8')) != 1:
        print(f'{program_name}: --delim "{args.delimiter}" must be a single byte', file=sys.stderr)
        sys.exit(1)

    if args.byte_list is not None:
        mode, list_str = Mode.BYTES, args.byte_list
    elif args.char_list is not None:
        mode, list_str = Mode.CHARS, args.char_list
    else:
        mode, list_str = Mode.FIELDS, args.field_list

    try:
        selection = parse_selection(list_str)
    except ListError as e:
        print(f"{program_name}: {e}", file=sys.stderr)
        sys.exit(1)

    exit_status = 0
    for filename in args.files:
        if filename == '-':
            process_stream(sys.stdin.buffer, selection, mode, args.delimiter)
            continue

        if os.path.isdir(filename):
            print(f"{program_name}: '{filename}' is a directory", file=sys.stderr)
            exit_status = 1
            continue

        try:
            with open(filename, 'rb') as f:
                process_stream(f, selection, mode, args.delimiter)
        except OSError as e:
            print(f"{program_name}: {filename}: {e.strerror}", file=sys.stderr)
            exit_status = 1

    sys.exit(exit_status)

if __name__ == "__main__":
    main()
