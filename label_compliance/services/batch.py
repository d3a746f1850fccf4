"""Batch support: CSV import of application data, parallel verification, CSV export."""

import csv
import io
import logging
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor

from ..config import get_settings
from ..models import (
    BatchCompareItem,
    BatchItemResult,
    BeverageType,
    ExpectedRecord,
    OverallStatus,
)
from .verification import VerificationService

logger = logging.getLogger(__name__)


# Header (lowercased, trimmed) -> ExpectedRecord field
COLUMN_ALIASES = {
    "brand_name": "brand_name",
    "brandname": "brand_name",
    "brand name": "brand_name",
    "brand": "brand_name",
    "class_type": "class_type",
    "classtype": "class_type",
    "class type": "class_type",
    "class/type": "class_type",
    "type": "class_type",
    "alcohol_content": "alcohol_content",
    "alcoholcontent": "alcohol_content",
    "alcohol content": "alcohol_content",
    "abv": "alcohol_content",
    "alcohol": "alcohol_content",
    "alc": "alcohol_content",
    "net_contents": "net_contents",
    "netcontents": "net_contents",
    "net contents": "net_contents",
    "volume": "net_contents",
    "size": "net_contents",
    "producer_name": "producer_name",
    "producername": "producer_name",
    "producer name": "producer_name",
    "producer": "producer_name",
    "bottler": "producer_name",
    "producer_address": "producer_address",
    "produceraddress": "producer_address",
    "producer address": "producer_address",
    "address": "producer_address",
    "country_of_origin": "country_of_origin",
    "countryoforigin": "country_of_origin",
    "country of origin": "country_of_origin",
    "country": "country_of_origin",
    "origin": "country_of_origin",
    "government_warning": "government_warning",
    "governmentwarning": "government_warning",
    "government warning": "government_warning",
    "warning": "government_warning",
    "beverage_type": "beverage_type",
    "beveragetype": "beverage_type",
    "beverage type": "beverage_type",
    "beverage": "beverage_type",
}

FILENAME_ALIASES = {"filename", "file_name", "file name", "file", "image"}

# Text fields reported in the results CSV, in column order
RESULT_FIELD_KEYS = [
    "brand_name",
    "class_type",
    "alcohol_content",
    "net_contents",
    "producer_name",
    "producer_address",
    "country_of_origin",
    "government_warning",
]


@dataclass
class CSVRow:
    """Parsed CSV row: expected data for one label image."""
    filename: str
    expected: ExpectedRecord
    row_number: int = 0


@dataclass
class CSVValidationError:
    """Error from CSV validation."""
    row_number: int
    field: str
    message: str


def _strip_extension(name: str) -> str:
    dot = name.rfind(".")
    return name[:dot] if dot > 0 else name


class CSVParser:
    """Parse and validate batch CSV files of application data."""

    def parse(self, csv_content: str) -> Tuple[List[CSVRow], List[CSVValidationError]]:
        """
        Parse CSV content into expected records.

        Headers are matched case-insensitively against known aliases
        ("Brand Name", "brand", "ABV", ...). A filename column is required.

        Args:
            csv_content: CSV file content as string

        Returns:
            Tuple of (valid_rows, errors)
        """
        rows: List[CSVRow] = []
        errors: List[CSVValidationError] = []

        try:
            reader = csv.reader(io.StringIO(csv_content))
            header = next(reader, None)

            if not header or not any(h.strip() for h in header):
                errors.append(CSVValidationError(
                    row_number=0,
                    field="header",
                    message="CSV file is empty or has no header"
                ))
                return rows, errors

            headers = [h.lower().strip() for h in header]
            filename_idx = next(
                (i for i, h in enumerate(headers) if h in FILENAME_ALIASES), None
            )
            if filename_idx is None:
                errors.append(CSVValidationError(
                    row_number=0,
                    field="header",
                    message="Missing required filename column "
                            "(accepted headers: filename, file name, file, image)"
                ))
                return rows, errors

            columns: Dict[int, str] = {}
            unknown = []
            for i, h in enumerate(headers):
                if i == filename_idx:
                    continue
                if h in COLUMN_ALIASES:
                    columns[i] = COLUMN_ALIASES[h]
                elif h:
                    unknown.append(h)
            if unknown:
                logger.warning(f"Unknown CSV columns will be ignored: {unknown}")

            for row_num, values in enumerate(reader, start=2):  # 1-indexed + header
                if not any(v.strip() for v in values):
                    continue

                filename = values[filename_idx].strip() if filename_idx < len(values) else ""
                if not filename:
                    errors.append(CSVValidationError(
                        row_number=row_num,
                        field="filename",
                        message="Filename is required"
                    ))
                    continue

                data = {}
                for i, field in columns.items():
                    value = values[i].strip() if i < len(values) else ""
                    if value:
                        data[field] = value

                beverage = data.get("beverage_type", "").lower().replace(" ", "_")
                if beverage:
                    if beverage in {b.value for b in BeverageType}:
                        data["beverage_type"] = beverage
                    else:
                        errors.append(CSVValidationError(
                            row_number=row_num,
                            field="beverage_type",
                            message=f"Invalid beverage type: '{data['beverage_type']}'. "
                                    "Use beer, wine or distilled_spirits."
                        ))
                        del data["beverage_type"]

                rows.append(CSVRow(
                    filename=filename,
                    expected=ExpectedRecord(**data),
                    row_number=row_num,
                ))

        except csv.Error as e:
            errors.append(CSVValidationError(
                row_number=0,
                field="csv",
                message=f"CSV parsing error: {str(e)}"
            ))

        return rows, errors

    def match_files(
        self,
        csv_rows: List[CSVRow],
        filenames: List[str],
    ) -> Tuple[Dict[str, CSVRow], List[CSVValidationError]]:
        """
        Match CSV rows to supplied filenames.

        Matching ignores case and tolerates a missing extension on either
        side ("label1" matches "Label1.PNG"). The first row matching a
        file wins; later rows for the same file are reported.

        Returns:
            Tuple of (filename -> matched row, errors for unmatched)
        """
        matched: Dict[str, CSVRow] = {}
        errors = []

        for row in csv_rows:
            filename = self._find_file(row.filename, filenames)
            if filename is None:
                errors.append(CSVValidationError(
                    row_number=row.row_number,
                    field="filename",
                    message=f"No matching file for '{row.filename}'"
                ))
            elif filename in matched:
                errors.append(CSVValidationError(
                    row_number=row.row_number,
                    field="filename",
                    message=f"Duplicate CSV data for file '{filename}' "
                            f"(already matched by row {matched[filename].row_number})"
                ))
            else:
                matched[filename] = row

        for filename in filenames:
            if filename not in matched:
                errors.append(CSVValidationError(
                    row_number=0,
                    field="filename",
                    message=f"No CSV data for file '{filename}'"
                ))

        return matched, errors

    @staticmethod
    def _find_file(csv_filename: str, filenames: List[str]) -> Optional[str]:
        wanted = csv_filename.lower().strip()
        wanted_stem = _strip_extension(wanted)
        for filename in filenames:
            candidate = filename.lower()
            candidate_stem = _strip_extension(candidate)
            if wanted in (candidate, candidate_stem) or wanted_stem in (candidate, candidate_stem):
                return filename
        return None


class BatchVerifier:
    """Verify many labels with a bounded worker pool."""

    def __init__(self, verification_service: Optional[VerificationService] = None):
        self.settings = get_settings()
        self.verification_service = verification_service or VerificationService()

    def verify_batch(
        self,
        items: List[BatchCompareItem],
        max_workers: Optional[int] = None,
    ) -> List[BatchItemResult]:
        """
        Verify a batch of labels.

        Items are independent; results come back in input order.
        """
        if not items:
            return []

        if max_workers is None:
            max_workers = self.settings.max_workers
        max_workers = max(1, min(max_workers, len(items)))

        if max_workers == 1:
            return [self._verify_one(item) for item in items]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self._verify_one, items))

    def _verify_one(self, item: BatchCompareItem) -> BatchItemResult:
        try:
            result = self.verification_service.verify(
                item.expected,
                item.extracted,
                processing_time_ms=item.processing_time_ms,
            )
        except Exception as e:
            logger.exception(f"Error verifying {item.filename}: {e}")
            return BatchItemResult(
                filename=item.filename,
                success=False,
                error=f"Verification error: {str(e)}",
            )
        return BatchItemResult(filename=item.filename, success=True, result=result)

    @staticmethod
    def summarize(results: List[BatchItemResult]) -> Dict[str, int]:
        """Count results by overall status; failed items count as errors."""
        counts = {"approved": 0, "needs_review": 0, "rejected": 0, "errors": 0}
        for r in results:
            if not r.success or r.result is None:
                counts["errors"] += 1
            elif r.result.overall_status == OverallStatus.APPROVED:
                counts["approved"] += 1
            elif r.result.overall_status == OverallStatus.NEEDS_REVIEW:
                counts["needs_review"] += 1
            else:
                counts["rejected"] += 1
        return counts


def generate_results_csv(results: List[BatchItemResult]) -> str:
    """Render batch results as CSV: one row per label, three columns per field."""
    headers = ["filename", "overall_status"]
    for key in RESULT_FIELD_KEYS:
        headers.extend([f"{key}_status", f"{key}_extracted", f"{key}_expected"])
    headers.extend(["confidence", "image_quality", "processing_time_ms", "error"])

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)

    for item in results:
        result = item.result
        row = [item.filename, result.overall_status.value if result else "error"]

        fields = {f.key: f for f in result.fields} if result else {}
        for key in RESULT_FIELD_KEYS:
            field = fields.get(key)
            if field is None:
                row.extend(["", "", ""])
            else:
                row.extend([field.status.value, field.extracted or "", field.expected])

        if result:
            row.extend([result.confidence, result.image_quality.value, result.processing_time_ms])
        else:
            row.extend(["", "", ""])
        row.append(item.error or "")
        writer.writerow(row)

    return buffer.getvalue()
