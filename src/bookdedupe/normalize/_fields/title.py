"""Title normalization."""

from .._helpers import (
    LEADING_ARTICLE_RE,
    NON_WORD_RE,
    SUBTITLE_RE,
    TRAILING_ARTICLE_RE,
    collapse_whitespace,
)


def normalize_title(title: str) -> str:
    """Canonicalize a free-text title for comparison.

    Steps, in order: lower-case, drop one leading article, drop the
    subtitle (from the first ``:`` or ``;``), drop a trailing inverted
    article (``"Hobbit, The"``), remove punctuation, collapse whitespace.

    Parameters
    ----------
    title : str
        Raw title.

    Returns
    -------
    str
        Normalized title, ``""`` for empty input.

    Examples
    --------
        >>> normalize_title("The Hobbit: An Unexpected Journey")
        'hobbit'
        >>> normalize_title("Hobbit, The")
        'hobbit'
    """
    if not title:
        return ""
    text = title.lower()
    text = LEADING_ARTICLE_RE.sub("", text, count=1)
    text = SUBTITLE_RE.sub("", text)
    text = TRAILING_ARTICLE_RE.sub("", text, count=1)
    text = NON_WORD_RE.sub("", text)
    return collapse_whitespace(text)
