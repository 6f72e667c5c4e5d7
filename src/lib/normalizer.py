"""
Value normalizer for multi-valued record fields

Multi-valued fields (projects, phabtasks, ...) are stored in wikitext as one
delimiter-joined string. These helpers convert between that form and a list,
trimming entries, dropping empty ones and removing duplicates.

Example:
    >>> values_toList(" wikipedia, ,commons,wikipedia ")
    ['wikipedia', 'commons']
    >>> values_fromList(["wikipedia ", "", "commons"])
    'wikipedia,commons'
"""

from typing import Iterable, List

DEFAULT_DELIMITER = ','


def values_normalize(values: Iterable[str]) -> List[str]:
    """
    Trim every value, drop empty ones, and drop repeats (first one wins)

    Args:
        values: Raw values

    Returns:
        Normalized list, in first-occurrence order
    """
    seen = set()
    normalized: List[str] = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


def values_toList(raw: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a stored value into its normalized list of entries"""
    return values_normalize(raw.split(delimiter))


def values_fromList(values: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Join entries into the stored form, normalizing them first"""
    return delimiter.join(values_normalize(values))
