"""Tests for the government warning compliance check."""

from label_compliance.services.warning import (
    STANDARD_GOVERNMENT_WARNING,
    check_government_warning_compliance,
)


class TestGovernmentWarningCompliance:
    """Test compliance against the TTB standard text."""

    def test_standard_text_with_correct_formatting(self, make_extracted, compliant_warning):
        result = check_government_warning_compliance(make_extracted(**compliant_warning))
        assert result.text_match is True
        assert result.all_caps_correct is True
        assert result.bold_correct is True
        assert result.issues == []
        assert result.hard_issues == []

    def test_missing_warning(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(government_warning=None))
        assert result.text_match is False
        assert result.all_caps_correct is None
        assert result.bold_correct is None
        assert result.extracted_text is None
        assert result.issues == ["Government warning not found on label"]
        assert result.hard_issues == result.issues

    def test_missing_warning_ignores_formatting_flags(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning=None,
            government_warning_all_caps=False,
            government_warning_bold=False,
        ))
        assert result.all_caps_correct is None
        assert len(result.issues) == 1

    def test_different_text(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning="Drink responsibly.",
        ))
        assert result.text_match is False
        assert any("does not match" in i for i in result.hard_issues)

    def test_case_difference_is_advised(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning=STANDARD_GOVERNMENT_WARNING.lower(),
        ))
        assert result.text_match is True
        assert any("case differences" in i for i in result.hard_issues)

    def test_all_caps_issue(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning=STANDARD_GOVERNMENT_WARNING,
            government_warning_all_caps=False,
            government_warning_bold=True,
        ))
        assert any("ALL CAPS" in i for i in result.hard_issues)

    def test_bold_issue_is_manual_advisory(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning=STANDARD_GOVERNMENT_WARNING,
            government_warning_all_caps=True,
            government_warning_bold=False,
        ))
        assert any("bold" in i for i in result.issues)
        assert any("verify manually" in i for i in result.issues)
        assert result.advisories == result.issues
        assert result.hard_issues == []

    def test_undetermined_formatting_raises_nothing(self, make_extracted):
        result = check_government_warning_compliance(make_extracted(
            government_warning=STANDARD_GOVERNMENT_WARNING,
        ))
        assert result.issues == []

    def test_extracted_text_kept_verbatim(self, make_extracted):
        text = "  " + STANDARD_GOVERNMENT_WARNING + "\n"
        result = check_government_warning_compliance(make_extracted(government_warning=text))
        assert result.text_match is True
        assert result.extracted_text == text
