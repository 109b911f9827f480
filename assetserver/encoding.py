"""Accept-Encoding negotiation for pre-compressed asset variants."""

from typing import NamedTuple, Optional


class Encoding(NamedTuple):
    name: str
    suffix: str


BROTLI = Encoding("br", ".br")
GZIP = Encoding("gzip", ".gz")

# Preference order: brotli wins over gzip when both are accepted.
SUPPORTED_ENCODINGS = (BROTLI, GZIP)


def accepted_codings(accept_encoding: Optional[str]) -> set[str]:
    """Return the content-codings a client accepts, lowercased.

    Parameters are ignored, except that ``q=0`` removes the coding.
    """
    codings = set()
    for item in (accept_encoding or "").split(","):
        name, _, params = item.partition(";")
        name = name.strip().lower()
        if not name:
            continue
        refused = False
        for param in params.split(";"):
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    refused = float(value.strip()) == 0
                except ValueError:
                    refused = False
        if not refused:
            codings.add(name)
    return codings


def negotiate(accept_encoding: Optional[str]) -> Optional[Encoding]:
    """Pick the pre-compressed variant to serve, or ``None`` for the original file."""
    codings = accepted_codings(accept_encoding)
    for encoding in SUPPORTED_ENCODINGS:
        if encoding.name in codings:
            return encoding
    return None
