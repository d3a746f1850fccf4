"""Alcohol content parsing: ABV and proof from free label text."""

import re
import logging
from typing import Callable, List, Optional, Tuple

from ..config import get_settings
from ..models import NormalizationNote, NoteLevel, ParsedAlcoholContent

logger = logging.getLogger(__name__)

_NUMBER = r"(\d+(?:\.\d+)?)"
_ALC_VOL = r"(?:\.?\s*(?:/\s*|by\s+)?vol(?:ume)?\.?)?"

# "40% Alc./Vol. (80 Proof)"
COMBINED_PATTERN = re.compile(
    _NUMBER + r"\s*%\s*(?:alc" + _ALC_VOL + r")?[^(]*\(" + _NUMBER + r"\s*proof\)",
    re.IGNORECASE,
)
# "80 Proof"
PROOF_PATTERN = re.compile(_NUMBER + r"\s*proof", re.IGNORECASE)
# "40%", "40% ABV", "40% alc. by vol.", "40 percent alcohol by volume"
PERCENT_PATTERN = re.compile(
    _NUMBER + r"\s*(?:%|percent)\s*(?:alc(?:ohol)?" + _ALC_VOL + r"|abv)?",
    re.IGNORECASE,
)
# "40"
BARE_NUMBER_PATTERN = re.compile(_NUMBER)


def _parse_combined(raw: str, match: re.Match) -> ParsedAlcoholContent:
    abv = float(match.group(1))
    proof = float(match.group(2))
    notes = []
    expected_proof = abv * 2
    if abs(proof - expected_proof) > get_settings().proof_consistency_tolerance:
        notes.append(NormalizationNote(
            text=f"Proof ({proof:g}) doesn't match expected 2×ABV ({expected_proof:g})",
            level=NoteLevel.CAUTION,
        ))
    return ParsedAlcoholContent(raw_text=raw, abv=abv, proof=proof, notes=notes)


def _parse_proof(raw: str, match: re.Match) -> ParsedAlcoholContent:
    proof = float(match.group(1))
    abv = proof / 2
    note = NormalizationNote(
        text=f"Converted {proof:g} Proof to {abv:g}% ABV (US standard: proof = 2 × ABV)",
        level=NoteLevel.INFO,
    )
    return ParsedAlcoholContent(raw_text=raw, abv=abv, proof=proof, notes=[note])


def _parse_percent(raw: str, match: re.Match) -> ParsedAlcoholContent:
    return ParsedAlcoholContent(raw_text=raw, abv=float(match.group(1)))


def _parse_bare_number(raw: str, match: re.Match) -> ParsedAlcoholContent:
    abv = float(match.group(1))
    note = NormalizationNote(
        text=f"Interpreted '{raw}' as {abv:g}% ABV (no unit specified)",
        level=NoteLevel.CAUTION,
    )
    return ParsedAlcoholContent(
        raw_text=raw, abv=abv, inferred_from_bare_number=True, notes=[note]
    )


Matcher = Callable[[str], Optional[re.Match]]
Handler = Callable[[str, re.Match], ParsedAlcoholContent]

# Order matters: the first matcher that hits wins
ALCOHOL_MATCHERS: List[Tuple[str, Matcher, Handler]] = [
    ("combined", COMBINED_PATTERN.search, _parse_combined),
    ("proof", PROOF_PATTERN.search, _parse_proof),
    ("percent", PERCENT_PATTERN.search, _parse_percent),
    ("bare_number", BARE_NUMBER_PATTERN.fullmatch, _parse_bare_number),
]


def parse_alcohol_content(text: str) -> ParsedAlcoholContent:
    """
    Parse alcohol content from free text.

    Recognized formats, tried in order:
    - "40% Alc./Vol. (80 Proof)" -> abv=40, proof=80
    - "80 Proof" -> proof=80, abv=40 (derived)
    - "40% ABV", "40 percent alcohol by volume" -> abv=40
    - "40" -> abv=40, flagged as inferred from a bare number

    Unrecognized text yields abv=None and proof=None so callers can fall
    back to text comparison.
    """
    raw = text.strip()

    for name, matcher, handler in ALCOHOL_MATCHERS:
        match = matcher(raw)
        if match:
            parsed = handler(raw, match)
            logger.debug(f"Alcohol content '{raw}' parsed as {name}: abv={parsed.abv}, proof={parsed.proof}")
            return parsed

    logger.debug(f"Alcohol content '{raw}' not recognized")
    return ParsedAlcoholContent(raw_text=raw)
