"""Services for normalization, parsing, field comparison, verification and batch processing."""

from .normalization import (
    normalize,
    normalize_whitespace,
    normalize_address,
    normalize_net_contents,
    extract_country,
)
from .alcohol import parse_alcohol_content
from .warning import STANDARD_GOVERNMENT_WARNING, check_government_warning_compliance
from .verification import VerificationService
from .batch import CSVParser, CSVRow, CSVValidationError, BatchVerifier, generate_results_csv

__all__ = [
    "normalize",
    "normalize_whitespace",
    "normalize_address",
    "normalize_net_contents",
    "extract_country",
    "parse_alcohol_content",
    "STANDARD_GOVERNMENT_WARNING",
    "check_government_warning_compliance",
    "VerificationService",
    "CSVParser",
    "CSVRow",
    "CSVValidationError",
    "BatchVerifier",
    "generate_results_csv",
]
