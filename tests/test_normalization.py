"""Tests for text normalization helpers."""

from label_compliance.services.normalization import (
    extract_country,
    normalize,
    normalize_address,
    normalize_net_contents,
    normalize_whitespace,
)


class TestNormalize:
    """Test basic text normalization."""

    def test_trims_lowercases_and_collapses(self):
        assert normalize("  Old   Tom\tDistillery \n") == "old tom distillery"

    def test_whitespace_only_preserves_case(self):
        assert normalize_whitespace("  GOVERNMENT   WARNING: ") == "GOVERNMENT WARNING:"

    def test_keeps_punctuation(self):
        assert normalize("Stone's Throw") == "stone's throw"


class TestNormalizeAddress:
    """Test address normalization."""

    def test_expands_common_abbreviations(self):
        assert normalize_address("123 Main St") == "123 main street"
        assert normalize_address("456 Oak Ave") == "456 oak avenue"
        assert normalize_address("789 Sunset Blvd") == "789 sunset boulevard"

    def test_strips_punctuation_and_normalizes_whitespace(self):
        assert normalize_address("123 Main St., Suite 100") == "123 main street suite 100"

    def test_handles_directional_abbreviations(self):
        assert normalize_address("100 N Main St") == "100 north main street"
        assert normalize_address("9 SW Hwy 7") == "9 southwest highway 7"

    def test_unknown_tokens_pass_through(self):
        assert normalize_address("1 Distillery Row, Louisville, KY") == "1 distillery row louisville ky"


class TestNormalizeNetContents:
    """Test net contents normalization."""

    def test_splits_number_from_unit(self):
        assert normalize_net_contents("750ml") == "750 ml"

    def test_spaced_and_unspaced_compare_equal(self):
        assert normalize_net_contents("750mL") == normalize_net_contents("750 ML")

    def test_bare_number_unchanged(self):
        assert normalize_net_contents("750") == "750"


class TestExtractCountry:
    """Test country prefix stripping."""

    def test_strips_known_prefixes(self):
        assert extract_country("Product of France") == "france"
        assert extract_country("MADE IN Mexico") == "mexico"
        assert extract_country("Produced in  Scotland") == "scotland"
        assert extract_country("Imported from Italy") == "italy"

    def test_plain_country_unchanged(self):
        assert extract_country("France") == "france"

    def test_prefix_only_stripped_at_start(self):
        assert extract_country("Bottled in USA, product of Mexico") == "bottled in usa, product of mexico"
