"""Government health warning compliance check (27 CFR § 16.21/16.22)."""

import logging

from ..models import ExtractedRecord, GovernmentWarningCheck
from .normalization import normalize_whitespace

logger = logging.getLogger(__name__)


STANDARD_GOVERNMENT_WARNING = (
    "GOVERNMENT WARNING: (1) According to the Surgeon General, women should not "
    "drink alcoholic beverages during pregnancy because of the risk of birth defects. "
    "(2) Consumption of alcoholic beverages impairs your ability to drive a car or "
    "operate machinery, and may cause health problems."
)

WARNING_NOT_FOUND = "Government warning not found on label"
TEXT_MISMATCH = "Warning text does not match the required TTB standard text"
CASE_DIFFERENCE = (
    'Warning text matches but has case differences; '
    '"GOVERNMENT WARNING" prefix must be in ALL CAPS'
)
NOT_ALL_CAPS = '"GOVERNMENT WARNING:" must appear in ALL CAPS per 27 CFR § 16.22'
NOT_BOLD = (
    '"GOVERNMENT WARNING:" should appear in bold type per 27 CFR § 16.22 '
    "(verify manually; bold detection from images may be imprecise)"
)


def check_government_warning_compliance(extracted: ExtractedRecord) -> GovernmentWarningCheck:
    """
    Check the extracted warning statement against the TTB standard text.

    Runs independently of any expected data. Text is compared with
    whitespace normalized and case ignored; a case-only difference is
    reported as a capitalization issue. Formatting flags only raise
    issues when explicitly False (None means undetermined). A bold issue
    is recorded as an advisory because bold detection from an image is
    unreliable.
    """
    if not extracted.government_warning or not extracted.government_warning.strip():
        return GovernmentWarningCheck(
            text_match=False,
            all_caps_correct=None,
            bold_correct=None,
            extracted_text=None,
            issues=[WARNING_NOT_FOUND],
        )

    issues = []
    advisories = []

    norm_extracted = normalize_whitespace(extracted.government_warning)
    norm_standard = normalize_whitespace(STANDARD_GOVERNMENT_WARNING)

    text_match = norm_extracted.lower() == norm_standard.lower()
    if not text_match:
        issues.append(TEXT_MISMATCH)
    elif norm_extracted != norm_standard:
        issues.append(CASE_DIFFERENCE)

    all_caps_correct = extracted.government_warning_all_caps
    if all_caps_correct is False:
        issues.append(NOT_ALL_CAPS)

    bold_correct = extracted.government_warning_bold
    if bold_correct is False:
        issues.append(NOT_BOLD)
        advisories.append(NOT_BOLD)

    if issues:
        logger.info(f"Government warning compliance issues: {issues}")

    return GovernmentWarningCheck(
        text_match=text_match,
        all_caps_correct=all_caps_correct,
        bold_correct=bold_correct,
        extracted_text=extracted.government_warning,
        issues=issues,
        advisories=advisories,
    )
