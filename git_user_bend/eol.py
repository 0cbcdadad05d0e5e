"""
End-of-line sequence detection.

Appending to a hand-edited configuration file should not introduce a
foreign line ending, so the writer asks this module which sequence the
file already uses.
"""

from __future__ import annotations

from typing import Tuple

LF = "\n"
CR = "\r"
LF_CR = "\n\r"
CR_LF = "\r\n"

DEFAULT_EOL = LF

# Later entries win ties.
CANDIDATES: Tuple[str, ...] = (LF, CR, LF_CR, CR_LF)


def detect_eol(content: str) -> str:
    """
    Return the most frequent line-ending sequence in content.

    Each candidate is counted independently, so a CRLF file also counts
    towards LF and CR; with the tie rule CRLF still wins for such files.
    Empty content yields DEFAULT_EOL; other content without any line
    ending ties at zero and yields CR_LF.
    """

    if not content:
        return DEFAULT_EOL

    max_count = 0
    preferred = DEFAULT_EOL

    for eol in CANDIDATES:
        count = content.count(eol)
        if count >= max_count:
            max_count = count
            preferred = eol

    return preferred
