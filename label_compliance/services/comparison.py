"""Per-field comparators: expected application text vs. extracted label text."""

import logging
from typing import Optional

from rapidfuzz import fuzz

from ..config import get_settings
from ..models import FieldNormalization, FieldResult, FieldStatus
from .alcohol import parse_alcohol_content
from .normalization import (
    extract_country,
    normalize,
    normalize_address,
    normalize_net_contents,
    normalize_whitespace,
)

logger = logging.getLogger(__name__)


def _is_missing(extracted: Optional[str]) -> bool:
    return extracted is None or not extracted.strip()


def _result(
    name: str,
    key: str,
    expected: str,
    extracted: Optional[str],
    status: FieldStatus,
    explanation: str,
    normalization: Optional[FieldNormalization] = None,
) -> FieldResult:
    logger.debug(f"{name}: '{extracted}' vs '{expected}' -> {status.value}")
    return FieldResult(
        name=name,
        key=key,
        expected=expected,
        extracted=extracted,
        status=status,
        explanation=explanation,
        normalization=normalization,
    )


def _not_found(name: str, key: str, expected: str, extracted: Optional[str]) -> FieldResult:
    return _result(
        name, key, expected, extracted,
        FieldStatus.NOT_FOUND,
        f"{name} not found on label",
    )


def _found_instead(expected: str, extracted: str) -> str:
    return f'Expected "{expected}", found "{extracted}"'


def _compare_normalized_text(name: str, key: str, expected: str, extracted: Optional[str]) -> FieldResult:
    """Case-insensitive equality, no partial-match tier."""
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    if normalize(expected) == normalize(extracted):
        return _result(name, key, expected, extracted, FieldStatus.MATCH, f"{name} matches")
    return _result(
        name, key, expected, extracted,
        FieldStatus.MISMATCH,
        _found_instead(expected, extracted),
    )


def compare_brand_name(expected: str, extracted: Optional[str]) -> FieldResult:
    """
    Compare brand names.

    - Exact (whitespace-normalized) -> match
    - Same apart from case -> warning
    - One contains the other -> warning
    - Otherwise -> mismatch
    """
    name, key = "Brand Name", "brand_name"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    norm_expected = normalize(expected)
    norm_extracted = normalize(extracted)

    if normalize_whitespace(expected) == normalize_whitespace(extracted):
        return _result(name, key, expected, extracted, FieldStatus.MATCH, "Brand name matches")

    if norm_expected == norm_extracted:
        return _result(
            name, key, expected, extracted,
            FieldStatus.WARNING,
            "Brand name matches but has case differences",
        )

    if norm_expected in norm_extracted or norm_extracted in norm_expected:
        return _result(
            name, key, expected, extracted,
            FieldStatus.WARNING,
            "Partial match: one contains the other",
        )

    # Similarity is shown to the reviewer only; it never upgrades the status
    similarity = fuzz.token_set_ratio(norm_expected, norm_extracted) / 100.0
    return _result(
        name, key, expected, extracted,
        FieldStatus.MISMATCH,
        f"{_found_instead(expected, extracted)} (similarity {similarity:.0%})",
    )


def compare_class_type(expected: str, extracted: Optional[str]) -> FieldResult:
    return _compare_normalized_text("Class/Type", "class_type", expected, extracted)


def compare_producer_name(expected: str, extracted: Optional[str]) -> FieldResult:
    return _compare_normalized_text("Producer Name", "producer_name", expected, extracted)


def compare_beverage_type(expected: str, extracted: Optional[str]) -> FieldResult:
    return _compare_normalized_text("Beverage Type", "beverage_type", expected, extracted)


def compare_alcohol_content(expected: str, extracted: Optional[str]) -> FieldResult:
    """
    Compare alcohol content numerically when both sides parse.

    ABV and proof are interchangeable ("80 Proof" equals "40% ABV").
    When either side only parsed as a bare number, a numeric match is
    downgraded to a warning because the unit was guessed.
    """
    name, key = "Alcohol Content", "alcohol_content"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    expected_parsed = parse_alcohol_content(expected)
    extracted_parsed = parse_alcohol_content(extracted)

    if expected_parsed.abv is None or extracted_parsed.abv is None:
        if normalize(expected) == normalize(extracted):
            return _result(
                name, key, expected, extracted,
                FieldStatus.MATCH,
                "Alcohol content matches (text comparison)",
            )
        return _result(
            name, key, expected, extracted,
            FieldStatus.MISMATCH,
            _found_instead(expected, extracted),
        )

    diff = abs(expected_parsed.abv - extracted_parsed.abv)
    normalization = FieldNormalization(
        expected_parsed=expected_parsed,
        extracted_parsed=extracted_parsed,
        numeric_diff=diff,
        diff_unit="%",
    )

    if diff >= get_settings().abv_match_tolerance:
        return _result(
            name, key, expected, extracted,
            FieldStatus.MISMATCH,
            f"Expected {expected_parsed.abv:g}% ABV, found {extracted_parsed.abv:g}% ABV",
            normalization,
        )

    explanation = f"Alcohol content matches ({extracted_parsed.abv:g}% ABV)"
    if expected_parsed.inferred_from_bare_number or extracted_parsed.inferred_from_bare_number:
        return _result(
            name, key, expected, extracted,
            FieldStatus.WARNING,
            explanation + "; needs review (value inferred from bare number)",
            normalization,
        )
    return _result(name, key, expected, extracted, FieldStatus.MATCH, explanation, normalization)


def compare_net_contents(expected: str, extracted: Optional[str]) -> FieldResult:
    """Text comparison only: "750ml" equals "750 mL", but "750" does not."""
    name, key = "Net Contents", "net_contents"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    if normalize_net_contents(expected) == normalize_net_contents(extracted):
        return _result(name, key, expected, extracted, FieldStatus.MATCH, "Net contents match")
    return _result(
        name, key, expected, extracted,
        FieldStatus.MISMATCH,
        _found_instead(expected, extracted),
    )


def compare_producer_address(expected: str, extracted: Optional[str]) -> FieldResult:
    """
    Compare addresses after abbreviation expansion.

    If the normalized strings differ, every expected word longer than one
    character is looked up in the set of extracted words (whole words
    only, order ignored). A few missing words is a warning; more is a
    mismatch.
    """
    name, key = "Producer Address", "producer_address"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    norm_expected = normalize_address(expected)
    norm_extracted = normalize_address(extracted)

    if norm_expected == norm_extracted:
        return _result(name, key, expected, extracted, FieldStatus.MATCH, "Producer address matches")

    expected_parts = [part for part in norm_expected.split() if len(part) > 1]
    extracted_words = set(norm_extracted.split())
    missing = [part for part in expected_parts if part not in extracted_words]

    if not missing:
        return _result(
            name, key, expected, extracted,
            FieldStatus.MATCH,
            "Address matches (different formatting)",
        )

    if len(missing) <= get_settings().address_review_max_missing:
        missing_list = '", "'.join(missing)
        return _result(
            name, key, expected, extracted,
            FieldStatus.WARNING,
            f'Address mostly matches, minor differences: missing "{missing_list}"',
        )

    return _result(
        name, key, expected, extracted,
        FieldStatus.MISMATCH,
        _found_instead(expected, extracted),
    )


def compare_country_of_origin(expected: str, extracted: Optional[str]) -> FieldResult:
    """Compare countries ignoring "Product of" / "Made in" phrasing on either side."""
    name, key = "Country of Origin", "country_of_origin"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    if extract_country(expected) == extract_country(extracted):
        return _result(name, key, expected, extracted, FieldStatus.MATCH, "Country of origin matches")
    return _result(
        name, key, expected, extracted,
        FieldStatus.MISMATCH,
        _found_instead(expected, extracted),
    )


def compare_government_warning(
    expected: str,
    extracted: Optional[str],
    all_caps: Optional[bool] = None,
    bold: Optional[bool] = None,
) -> FieldResult:
    """
    Compare warning statements exactly (whitespace aside, case preserved).

    A case-only difference is still a mismatch since the prefix must be
    capitalized. Exact text with explicit formatting problems is a warning.
    """
    name, key = "Government Warning", "government_warning"
    if _is_missing(extracted):
        return _not_found(name, key, expected, extracted)

    norm_expected = normalize_whitespace(expected)
    norm_extracted = normalize_whitespace(extracted)

    if norm_expected != norm_extracted:
        if norm_expected.lower() == norm_extracted.lower():
            explanation = "Government warning text has case differences"
        else:
            explanation = (
                f'Government warning text does not match. '
                f'Expected: "{norm_expected}", found: "{norm_extracted}"'
            )
        return _result(name, key, expected, extracted, FieldStatus.MISMATCH, explanation)

    formatting_issues = []
    if all_caps is False:
        formatting_issues.append('"GOVERNMENT WARNING:" prefix should be in ALL CAPS')
    if bold is False:
        formatting_issues.append("Government warning text does not appear to be bold")

    if formatting_issues:
        return _result(
            name, key, expected, extracted,
            FieldStatus.WARNING,
            f"Text matches but formatting issues: {'; '.join(formatting_issues)}",
        )
    return _result(
        name, key, expected, extracted,
        FieldStatus.MATCH,
        "Government warning matches with proper formatting",
    )
