"""Author key normalization."""


def author_key(authors: str) -> str:
    """Build the bucket key for author-scoped matching.

    Only case-folding and trimming are applied; multi-author strings are
    compared as a whole, so ``"A & B"`` and ``"B & A"`` are different keys.

    Parameters
    ----------
    authors : str
        Raw author string.

    Returns
    -------
    str
        Case-folded, trimmed author string.
    """
    if not authors:
        return ""
    return authors.casefold().strip()
