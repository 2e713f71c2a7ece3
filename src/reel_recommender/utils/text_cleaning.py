import re

_QUOTES = '"'
_ASTERISKS = "*"
_LEADING_NUMBERING = re.compile(r"^(\d+)\. ", re.MULTILINE)
# Rank/score annotations such as "(1)"; four-digit years are kept on purpose.
_TRAILING_NUMBER_NOTE = re.compile(r"[ \t]*\(\d{1,3}\)(?=[ \t\r]*$)", re.MULTILINE)
_TRAILING_WHITESPACE = re.compile(r"[ \t\r\f\v]+$", re.MULTILINE)
_YEAR_ANNOTATION = re.compile(r"\s\(\d{4}\)")


def parse_title_list(text: str) -> list[str]:
    """
    Turn a free-form LLM answer into an ordered list of movie titles.

    The transformations run in a fixed order, and reordering them changes
    the output:

    1. strip double quotes
    2. strip asterisks (markdown emphasis)
    3. strip a leading ``"<number>. "`` list marker on each line
    4. strip a trailing ``"(<number>)"`` annotation of up to three digits
    5. trim trailing whitespace on each line
    6. split into lines
    7. drop empty lines

    Duplicates are kept and nothing is enforced about the count.

    Example:
        '1. The Matrix\\n2. Up (2009)\\n3. "Her"\\n' -> ["The Matrix", "Up (2009)", "Her"]
    """
    text = text.replace(_QUOTES, "")
    text = text.replace(_ASTERISKS, "")
    text = _LEADING_NUMBERING.sub("", text)
    text = _TRAILING_NUMBER_NOTE.sub("", text)
    text = _TRAILING_WHITESPACE.sub("", text)
    return [line for line in text.splitlines() if line]


def strip_release_year(title: str) -> str:
    """
    Remove the first " (YYYY)" annotation from a title.

    Example:
        "Up (2009)" -> "Up"
    """
    if "(" not in title:
        return title
    return _YEAR_ANNOTATION.sub("", title, count=1)


def title_cache_key(title: str) -> str:
    """Cache key fragment for a title: spaces become underscores, nothing else changes."""
    return title.replace(" ", "_")
