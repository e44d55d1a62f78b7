"""Text helpers for DOIs, summaries and citation-file field values."""

import html
import re
import unicodedata
from typing import Optional

from bs4 import BeautifulSoup


def doi_url(doi: Optional[str]) -> Optional[str]:
    """Return the resolver link for *doi*, or None."""
    if not doi:
        return None
    return f"https://doi.org/{doi}"


def clean_summary(text: Optional[str]) -> str:
    """Strip markup from a summary and collapse whitespace.

    Summaries from the citation index often carry JATS or HTML tags
    (``<jats:p>``, ``<i>``) and entities. MathML blocks are dropped.
    """
    if not text:
        return ""
    if "<" in text:
        soup = BeautifulSoup(text, "html.parser")
        for math_tag in soup.find_all(["math", "mml:math"]):
            math_tag.decompose()
        text = soup.get_text(" ")
    text = html.unescape(text)
    # Strip leading "Abstract" prefix
    text = re.sub(r"^\s*abstract[\s.:;—–-]*", "", text, flags=re.IGNORECASE)
    return " ".join(text.split())


def single_line(value: object) -> str:
    """Render *value* on one line (RIS tags cannot span lines)."""
    return " ".join(str(value).split())


_BIBTEX_SPECIAL = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def escape_bibtex(value: object) -> str:
    """Escape LaTeX special characters in a BibTeX field value."""
    text = single_line(value)
    return "".join(_BIBTEX_SPECIAL.get(ch, ch) for ch in text)


def citation_key(first_author: Optional[str], year: Optional[int], title: Optional[str]) -> str:
    """Build a BibTeX key like ``smith2020cancer``.

    Uses the first word of the author name (surname-first, as the search
    service reports it), the year and the first title word longer than
    three letters, reduced to ASCII letters and digits.
    """
    author = (first_author or "").replace(",", " ").split()
    last = author[0] if author else "anon"
    word = next((w for w in (title or "").split() if len(w) > 3), "")
    raw = f"{last}{year if year is not None else ''}{word}"
    ascii_only = unicodedata.normalize("NFKD", raw).encode("ascii", "ignore").decode()
    key = re.sub(r"[^a-zA-Z0-9]", "", ascii_only).lower()[:40]
    return key or "record"
