"""Identifier string parsing."""

from bookdedupe.models.identifiers import IdentifierSet


def parse_identifiers(raw: str | None) -> IdentifierSet:
    """Parse a calibre identifier string into a token set.

    Splits on commas, trims and lower-cases each token, and drops empty
    tokens and the literal ``null``.

    Parameters
    ----------
    raw : str | None
        Identifier string such as ``"isbn:0345339681, asin:B000FC1PJI"``.

    Returns
    -------
    IdentifierSet
        Normalized tokens (``{"isbn:0345339681", "asin:b000fc1pji"}``).
    """
    return IdentifierSet.parse(raw)
