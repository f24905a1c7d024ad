"""Naming convention inference.

Photo managers that batch-rename files typically produce names like::

    Something.JPG
    Something-1.JPG
    Something-2.JPG

This module splits such names into a base token and an embedded number so
that the number strategy can order them numerically instead of
alphanumerically.
"""

import re
from typing import Optional

from renamepics.models.core import NamingConvention

# Base is non-greedy so that a trailing digit run is always claimed by the
# number group rather than the base.
CONVENTION_PATTERN = re.compile(
    r"^(?P<base>[a-z0-9_]+?)[ _-]?(?P<number>\d*)"
    r"\.(?P<extension>[a-z0-9]+)\Z",
    re.IGNORECASE | re.ASCII,
)


def match_convention(filename: str) -> Optional[NamingConvention]:
    """Extract the naming convention of *filename*.

    Args:
        filename: A bare filename, without directory components.

    Returns:
        The convention, or None if the filename does not follow the
        ``base[separator]digits.extension`` pattern.

    Example:
        >>> match_convention("Something-3.JPG").embedded_number
        3
        >>> match_convention("Something.JPG").embedded_number
        0
        >>> match_convention("Some-thing-3.jpg") is None
        True
    """
    match = CONVENTION_PATTERN.match(filename)
    if match is None:
        return None
    number = match.group("number")
    return NamingConvention(
        base_token=match.group("base").lower(),
        display_base=match.group("base"),
        embedded_number=int(number) if number else 0,
    )

