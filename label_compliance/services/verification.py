"""Verification service: runs the field comparators and decides the overall status."""

import logging
from typing import Callable, List, Optional, Tuple

from ..models import (
    ExpectedRecord,
    ExtractedRecord,
    FieldResult,
    FieldStatus,
    GovernmentWarningCheck,
    OverallStatus,
    VerificationResult,
)
from .comparison import (
    compare_alcohol_content,
    compare_beverage_type,
    compare_brand_name,
    compare_class_type,
    compare_country_of_origin,
    compare_government_warning,
    compare_net_contents,
    compare_producer_address,
    compare_producer_name,
)
from .warning import check_government_warning_compliance

logger = logging.getLogger(__name__)


def _extracted_beverage_type(extracted: ExtractedRecord) -> Optional[str]:
    return extracted.beverage_type.value if extracted.beverage_type else None


def _compare_warning(expected: str, extracted: ExtractedRecord) -> FieldResult:
    return compare_government_warning(
        expected,
        extracted.government_warning,
        extracted.government_warning_all_caps,
        extracted.government_warning_bold,
    )


def _simple(comparator: Callable[[str, Optional[str]], FieldResult], key: str):
    return lambda expected, extracted: comparator(expected, getattr(extracted, key))


# Fixed display order; each entry is (expected field, comparator)
FIELD_COMPARATORS: List[Tuple[str, Callable[[str, ExtractedRecord], FieldResult]]] = [
    ("beverage_type", lambda expected, extracted: compare_beverage_type(
        expected, _extracted_beverage_type(extracted))),
    ("brand_name", _simple(compare_brand_name, "brand_name")),
    ("class_type", _simple(compare_class_type, "class_type")),
    ("alcohol_content", _simple(compare_alcohol_content, "alcohol_content")),
    ("net_contents", _simple(compare_net_contents, "net_contents")),
    ("producer_name", _simple(compare_producer_name, "producer_name")),
    ("producer_address", _simple(compare_producer_address, "producer_address")),
    ("country_of_origin", _simple(compare_country_of_origin, "country_of_origin")),
    ("government_warning", _compare_warning),
]


class VerificationService:
    """Compares extracted label fields against expected application data."""

    def verify(
        self,
        expected: ExpectedRecord,
        extracted: ExtractedRecord,
        processing_time_ms: int = 0,
    ) -> VerificationResult:
        """
        Verify extracted fields against expected values.

        Args:
            expected: Application data; empty fields are skipped
            extracted: Fields read off the label
            processing_time_ms: Extraction time, passed through unchanged

        Returns:
            VerificationResult with per-field and overall status
        """
        fields = []
        for key, comparator in FIELD_COMPARATORS:
            expected_value = getattr(expected, key)
            if expected_value:
                fields.append(comparator(expected_value, extracted))

        # Compliance check runs regardless of what the application supplied
        warning_check = (
            check_government_warning_compliance(extracted)
            if extracted.is_alcohol_label
            else None
        )

        overall_status = self.decide_overall_status(
            extracted.is_alcohol_label, fields, warning_check
        )

        logger.info(
            f"Verification complete: {overall_status.value} "
            f"({len(fields)} fields compared, alcohol label={extracted.is_alcohol_label})"
        )

        return VerificationResult(
            overall_status=overall_status,
            is_alcohol_label=extracted.is_alcohol_label,
            fields=fields,
            government_warning_check=warning_check,
            image_quality=extracted.image_quality,
            confidence=extracted.confidence,
            notes=list(extracted.notes),
            processing_time_ms=processing_time_ms,
            summary=self._generate_summary(
                overall_status, extracted.is_alcohol_label, fields, warning_check
            ),
        )

    @staticmethod
    def decide_overall_status(
        is_alcohol_label: bool,
        fields: List[FieldResult],
        warning_check: Optional[GovernmentWarningCheck],
    ) -> OverallStatus:
        """
        Fold field results and the compliance check into one status.

        Rules, first match wins:
        1. Not an alcohol label -> rejected
        2. Any field mismatch -> rejected
        3. Any field warning or not found -> needs review
        4. Any compliance issue that is not a manual-verification advisory -> needs review
        5. Nothing was compared -> needs review
        6. Otherwise -> approved
        """
        statuses = {f.status for f in fields}

        if not is_alcohol_label:
            return OverallStatus.REJECTED
        if FieldStatus.MISMATCH in statuses:
            return OverallStatus.REJECTED
        if FieldStatus.WARNING in statuses or FieldStatus.NOT_FOUND in statuses:
            return OverallStatus.NEEDS_REVIEW
        if warning_check is not None and warning_check.hard_issues:
            return OverallStatus.NEEDS_REVIEW
        if not fields:
            return OverallStatus.NEEDS_REVIEW
        return OverallStatus.APPROVED

    def _generate_summary(
        self,
        overall_status: OverallStatus,
        is_alcohol_label: bool,
        fields: List[FieldResult],
        warning_check: Optional[GovernmentWarningCheck],
    ) -> str:
        """Generate human-readable summary."""
        if not is_alcohol_label:
            return "❌ Rejected. The image does not appear to be an alcohol beverage label."

        if overall_status == OverallStatus.APPROVED:
            return "✅ All fields verified successfully. Label matches application data."

        issues = []
        for f in fields:
            if f.status in (FieldStatus.MISMATCH, FieldStatus.NOT_FOUND):
                issues.append(f"❌ {f.name}: {f.explanation}")
            elif f.status == FieldStatus.WARNING:
                issues.append(f"⚠️ {f.name}: {f.explanation}")

        if warning_check is not None:
            for issue in warning_check.hard_issues:
                issues.append(f"⚠️ Government Warning compliance: {issue}")

        if not fields:
            issues.append("⚠️ No application data was provided, so nothing was compared.")

        if overall_status == OverallStatus.REJECTED:
            header = "❌ Rejected. Issues found:"
        else:
            header = "⚠️ Needs review. Potential issues:"

        return header + "\n" + "\n".join(issues)
