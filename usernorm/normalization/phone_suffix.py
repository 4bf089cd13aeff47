"""Phone suffix extractor.

Only the trailing characters of a phone number are used, to disambiguate
colliding usernames.  The value is taken verbatim: no digit check, no
E.164 parsing.

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

SUFFIX_LENGTH = 4


def phone_last_four(phone: str) -> str:
    """Return the last four characters of the whitespace-trimmed *phone*.

    Returns ``""`` when the trimmed value is shorter than four characters,
    including empty input.
    """
    trimmed = phone.strip()
    if len(trimmed) < SUFFIX_LENGTH:
        logger.debug("phone_last_four: phone too short (length=%d)", len(trimmed))
        return ""
    return trimmed[-SUFFIX_LENGTH:]
