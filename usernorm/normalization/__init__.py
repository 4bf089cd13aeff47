"""Normalization package.

Account-identifier normalizers applied to a user record before it is
written to the directory or database.  Every function here is pure apart
from the injected existence predicate, never raises on string input, and
never logs raw values.

Modules
-------
``phone_suffix``      trailing-digit extraction used for username suffixes
``email_normalizer``  local-part sanitizing, syntax check, fallback chain
``username``          lowercase / de-space / collision suffixing
``user_validator``    orchestration that mutates a user record in place
"""
