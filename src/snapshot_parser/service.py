"""
Snapshot parsing service.

Selects the format adapter for a dump and runs it. Both adapters take
the dump as a sequence of lines and return a BundleExportSnapshot.
"""

import re
from typing import Callable, Optional, Sequence

from .header_block import (
    DEFAULT_EXCLUDED_PREFIX,
    DEFAULT_UNVERSIONED_SENTINEL,
    parse_header_block_dump,
)
from .models import BundleExportSnapshot, DumpFormat
from .tabular import COLUMN_SEPARATOR, parse_tabular_dump

_RULE_CHARACTERS = set("-─┼+|│ ")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_dump_lines(text: str) -> list[str]:
    """
    Split dump text into lines on CR, LF or CRLF only.

    A final line break does not start an extra empty line.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def detect_format(lines: Sequence[str]) -> DumpFormat:
    """
    Guess the layout of a dump from its first two lines.

    A dump is tabular when its first line contains a column separator
    and its second line is a rule made of dashes and box-drawing glyphs.
    Anything else is treated as a header-block dump.
    """
    if len(lines) < 2:
        return DumpFormat.HEADER_BLOCK

    title, rule = lines[0], lines[1].strip()
    if COLUMN_SEPARATOR.search(title) and rule and set(rule) <= _RULE_CHARACTERS:
        return DumpFormat.TABULAR
    return DumpFormat.HEADER_BLOCK


def parse_snapshot(
    lines: Sequence[str],
    dump_format: Optional[DumpFormat] = None,
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX,
    unversioned_sentinel: str = DEFAULT_UNVERSIONED_SENTINEL,
) -> BundleExportSnapshot:
    """
    Parse a dump with the adapter for its format.

    Args:
        lines: Dump lines in order
        dump_format: Layout of the dump (detected when None)
        excluded_prefix: Package prefix left out of header-block dumps
        unversioned_sentinel: Version text treated as unversioned in
            header-block dumps

    Returns:
        BundleExportSnapshot for the dump

    Raises:
        SnapshotParseError: If the dump cannot be parsed
    """
    if dump_format is None:
        dump_format = detect_format(lines)

    adapters: dict[DumpFormat, Callable[[Sequence[str]], BundleExportSnapshot]] = {
        DumpFormat.HEADER_BLOCK: lambda dump: parse_header_block_dump(
            dump,
            excluded_prefix=excluded_prefix,
            unversioned_sentinel=unversioned_sentinel,
        ),
        DumpFormat.TABULAR: parse_tabular_dump,
    }
    return adapters[DumpFormat(dump_format)](lines)
