"""Shared fixtures: record factories and services."""

import pytest

from label_compliance.models import ExpectedRecord, ExtractedRecord
from label_compliance.services import STANDARD_GOVERNMENT_WARNING, VerificationService


def _make_extracted(**overrides) -> ExtractedRecord:
    data = {
        "brand_name": None,
        "class_type": None,
        "alcohol_content": None,
        "net_contents": None,
        "producer_name": None,
        "producer_address": None,
        "country_of_origin": None,
        "government_warning": None,
        "government_warning_all_caps": None,
        "government_warning_bold": None,
        "beverage_type": "beer",
        "is_alcohol_label": True,
        "image_quality": "good",
        "confidence": 0.95,
        "notes": [],
    }
    data.update(overrides)
    return ExtractedRecord(**data)


@pytest.fixture
def make_extracted():
    """Factory for extracted records; every text field defaults to not detected."""
    return _make_extracted


@pytest.fixture
def make_expected():
    """Factory for expected records; every field defaults to not provided."""
    return lambda **overrides: ExpectedRecord(**overrides)


@pytest.fixture
def compliant_warning():
    """Extraction overrides for a fully compliant government warning."""
    return {
        "government_warning": STANDARD_GOVERNMENT_WARNING,
        "government_warning_all_caps": True,
        "government_warning_bold": True,
    }


@pytest.fixture
def service():
    """Create verification service instance."""
    return VerificationService()
