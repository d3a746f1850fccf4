"""Text normalization helpers shared by the field comparators."""

import re


# Street and compass abbreviations expanded before address comparison
ADDRESS_ABBREVIATIONS = {
    "st": "street",
    "ave": "avenue",
    "blvd": "boulevard",
    "dr": "drive",
    "ln": "lane",
    "rd": "road",
    "ct": "court",
    "pl": "place",
    "sq": "square",
    "pkwy": "parkway",
    "hwy": "highway",
    "ste": "suite",
    "apt": "apartment",
    "fl": "floor",
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "ne": "northeast",
    "nw": "northwest",
    "se": "southeast",
    "sw": "southwest",
}

COUNTRY_PREFIX_PATTERN = re.compile(
    r"^(product of|made in|produced in|imported from)\s+", re.IGNORECASE
)

_WHITESPACE = re.compile(r"\s+")
_ADDRESS_PUNCTUATION = re.compile(r"[.,;]")
_DIGIT_LETTER_BOUNDARY = re.compile(r"(\d)([a-z])")


def normalize_whitespace(text: str) -> str:
    """Trim and collapse whitespace runs, preserving case."""
    return _WHITESPACE.sub(" ", text.strip())


def normalize(text: str) -> str:
    """Trim, lowercase and collapse whitespace."""
    return normalize_whitespace(text).lower()


def normalize_address(address: str) -> str:
    """
    Normalize an address for comparison.

    Strips ``. , ;``, then expands street and compass abbreviations
    token by token:
    - "123 Main St." -> "123 main street"
    - "100 N Main St" -> "100 north main street"
    """
    text = _ADDRESS_PUNCTUATION.sub(" ", normalize(address))
    text = normalize_whitespace(text)

    words = []
    for word in text.split(" "):
        clean = word.replace(".", "")
        words.append(ADDRESS_ABBREVIATIONS.get(clean, word))
    return " ".join(words)


def normalize_net_contents(text: str) -> str:
    """Normalize net contents so "750ml" and "750 mL" compare equal."""
    return _DIGIT_LETTER_BOUNDARY.sub(r"\1 \2", normalize(text))


def extract_country(text: str) -> str:
    """Strip "Product of" / "Made in" style prefixes to isolate the country."""
    return COUNTRY_PREFIX_PATTERN.sub("", normalize(text)).strip()
