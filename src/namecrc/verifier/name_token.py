"""Checksum tokens embedded in file names.

Release files often carry their CRC32 in the name, e.g.
``[Group] Title - 01 [1A2B3C4D].mkv``. A token is exactly eight hex
digits with a non-hex character directly on each side; the start and
end of the string do not count as boundaries. When several tokens
qualify, the rightmost one wins: checksums sit next to the extension,
while hex-looking directory names or commit hashes sit further left.
"""

import re
from typing import Optional

TOKEN_LENGTH = 8

# Lookahead keeps matches zero-width so overlapping windows are all seen
_TOKEN_PATTERN = re.compile(
    r"(?=[^0-9A-Fa-f]([0-9A-Fa-f]{%d})[^0-9A-Fa-f])" % TOKEN_LENGTH
)


def find_crc_in_name(path: str) -> Optional[int]:
    """Find the rightmost checksum token in a path string.

    Args:
        path: File path as given by the user; the filesystem is not touched

    Returns:
        Embedded CRC32 value, or None if the path carries no valid token
    """
    last = None
    for match in _TOKEN_PATTERN.finditer(path):
        last = match
    if last is None:
        return None
    return int(last.group(1), 16)
