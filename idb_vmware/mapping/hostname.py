"""Host name normalization for FQDNs."""

import string

_PASSTHROUGH = frozenset(string.ascii_lowercase + string.digits + ".-")


def _map_char(ch: str) -> str:
    if "A" <= ch <= "Z":
        return ch.lower()
    if ch in _PASSTHROUGH:
        return ch
    return ""


def normalize_hostname(name: str) -> str:
    """
    Lowercase ASCII letters and drop everything except a-z, 0-9, '.' and '-'.

    Non-ASCII characters are removed, not transliterated.
    """
    return "".join(_map_char(ch) for ch in name)
