"""Address stream reader.

The address file holds decimal logical addresses separated by whitespace
(usually one per line), scanned the way `%hu` scans them: an optional
sign, then ASCII digits, with the value wrapped to 16 bits (so `-1` reads
as 65535). A number ends at the first non-digit, and reading stops at the
first position where no number starts, so `1_000` yields 1 and then ends
the stream.
"""
import re
from typing import Iterator, List

from vmsim.core.address import LOGICAL_ADDRESS_SPACE_SIZE

_MASK = LOGICAL_ADDRESS_SPACE_SIZE - 1
_NUMBER = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)
_BLANK = re.compile(r"\s*", re.ASCII)


def iter_addresses(lines) -> Iterator[int]:
    for line in lines:
        pos = 0
        while True:
            if _BLANK.match(line, pos).end() == len(line):
                break
            match = _NUMBER.match(line, pos)
            if match is None:
                return
            yield int(match.group(1), 10) & _MASK
            pos = match.end()


def read_addresses(path: str) -> List[int]:
    with open(path, 'r', encoding='utf-8') as fh:
        return list(iter_addresses(fh))
