"""Compiled regex patterns shared by the field normalizers.

Patterns are compiled once at import time; every normalizer in
``_fields`` reuses them.
"""

import re

# "the hobbit" -> "hobbit"; only one leading article is removed
LEADING_ARTICLE_RE = re.compile(r"^(the|a|an)\s+", re.IGNORECASE)

# "dune: messiah" -> "dune"; the subtitle runs to the end of the string
SUBTITLE_RE = re.compile(r"\s*[:;].*$", re.DOTALL)

# "hobbit, the" -> "hobbit"; catalogue-style inverted article
TRAILING_ARTICLE_RE = re.compile(r",\s*(the|a|an)\s*$", re.IGNORECASE)

NON_WORD_RE = re.compile(r"[^\w\s]")

WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim.

    Parameters
    ----------
    text : str
        Input text.

    Returns
    -------
    str
        Text with single spaces and no leading/trailing whitespace.
    """
    return WHITESPACE_RE.sub(" ", text).strip()
