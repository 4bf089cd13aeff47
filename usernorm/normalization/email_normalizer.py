"""Email normalizer.

Coerces a user's email into an address that is safe to persist.  The
policy is a strict fallback chain: the local part is sanitized, the
reassembled address is syntax-checked, and any failure collapses to
``<username>@<default_domain>``.  There is no partial repair beyond
sanitizing the local part, and no case folding.

Grammar accepted by ``is_valid_email`` (ASCII only)::

    email  = local "@" domain "." tld
    local  = 1*(ALPHA / DIGIT / "." / "_" / "%" / "-")
    domain = 1*(ALPHA / DIGIT / "." / "-")
    tld    = 2*ALPHA

``sanitize_local_part`` keeps only ``ALPHA / DIGIT / "." / "-" / "_"``,
so ``%`` passes validation but never survives sanitizing.

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# Everything outside the accepted local-part alphabet
_LOCAL_PART_STRIP_RE = re.compile(r"[^A-Za-z0-9.\-_]")


def default_email(username: str, default_domain: str) -> str:
    """Return the fallback address ``username@default_domain``."""
    return f"{username}@{default_domain}"


def split_email(email: str) -> tuple[str, str] | None:
    """Split *email* on ``@`` into ``(local, domain)``.

    Returns ``None`` unless the address contains exactly one ``@``.  Either
    half may be empty.
    """
    parts = email.split("@")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def sanitize_local_part(local_part: str) -> str:
    """Delete every character of *local_part* outside ``[A-Za-z0-9._-]``.

    Non-ASCII letters, symbols and whitespace are removed, not replaced.
    The result may be empty.
    """
    return _LOCAL_PART_STRIP_RE.sub("", local_part)


def is_valid_email(email: str) -> bool:
    """Return ``True`` if the whole of *email* matches the accepted grammar."""
    return _EMAIL_RE.fullmatch(email) is not None


def normalize_email(email: str, username: str, default_domain: str) -> str:
    """Return a persistable address for *email*.

    Parameters
    ----------
    email:
        Candidate address from the upstream source, possibly empty or
        malformed.
    username:
        Final username, used as the fallback local part.
    default_domain:
        Domain of the fallback address.

    Returns
    -------
    str
        The sanitized address when it validates, otherwise
        ``username@default_domain``.  Never raises.
    """
    if not email:
        return default_email(username, default_domain)

    parts = split_email(email)
    if parts is None:
        logger.debug("normalize_email: expected exactly one '@' (length=%d)", len(email))
        return default_email(username, default_domain)

    local, domain = parts
    cleaned_local = sanitize_local_part(local)

    if not cleaned_local:
        logger.debug("normalize_email: local part empty after sanitizing")
        cleaned_local = username
        domain = default_domain

    normalized = f"{cleaned_local}@{domain}"

    if not is_valid_email(normalized):
        logger.debug("normalize_email: sanitized address failed validation")
        return default_email(username, default_domain)

    return normalized
