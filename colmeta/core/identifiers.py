"""
Identifier case handling and quoting.
"""

import re

from colmeta.core.types import RESERVED_WORDS

_PLAIN_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_$#]*$')


def preserve_case(native_case: str, name: str) -> bool:
    """
    Decide whether an identifier's case differs from the engine's native case.

    Args:
        native_case: 'upper', 'lower' or 'preserve'
        name: Identifier as reported by the catalog

    Returns:
        True if the identifier must keep its case (and therefore be quoted)
    """
    if native_case == 'upper':
        return name != name.upper()
    if native_case == 'lower':
        return name != name.lower()
    return True


def should_quote(preserve: bool, name: str) -> bool:
    """Check whether an identifier needs quoting."""
    if preserve:
        return True
    if name.lower() in RESERVED_WORDS:
        return True
    return not _PLAIN_IDENTIFIER.match(name)


def quote_identifier(name: str, quote_chars: tuple[str, str], preserve: bool = False) -> str:
    """
    Quote an identifier if needed.

    Args:
        name: Identifier to quote
        quote_chars: Tuple of (open_quote, close_quote)
        preserve: Whether the identifier's case must be preserved

    Returns:
        The identifier, quoted when required
    """
    if not should_quote(preserve, name):
        return name
    open_quote, close_quote = quote_chars
    escaped = name.replace(close_quote, close_quote * 2)
    return f"{open_quote}{escaped}{close_quote}"
