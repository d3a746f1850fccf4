"""API route definitions."""

from fastapi import APIRouter, UploadFile, File, Form, HTTPException
from fastapi.responses import Response
import logging
from typing import List

from ..models import (
    BatchCompareRequest,
    BatchCompareResponse,
    BatchExportRequest,
    CompareRequest,
    CSVImportIssue,
    CSVImportResponse,
    CSVImportRow,
    ErrorResponse,
    HealthResponse,
    VerificationResult,
)
from ..services import (
    BatchVerifier,
    CSVParser,
    VerificationService,
    generate_results_csv,
)
from ..config import get_settings
from .. import __version__

logger = logging.getLogger(__name__)
router = APIRouter()

# Initialize services
verification_service = VerificationService()
batch_verifier = BatchVerifier(verification_service)
csv_parser = CSVParser()


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health."""
    return HealthResponse(status="healthy", version=__version__)


@router.post("/compare", response_model=VerificationResult, tags=["Verification"])
def compare_label(request: CompareRequest):
    """
    Compare one extracted label against its application data.

    Fields left empty in `expected` are not compared. The government
    warning compliance check always runs for alcohol labels.
    """
    return verification_service.verify(
        request.expected,
        request.extracted,
        processing_time_ms=request.processing_time_ms,
    )


@router.post(
    "/compare/batch",
    response_model=BatchCompareResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    tags=["Verification"]
)
def compare_batch(request: BatchCompareRequest):
    """
    Compare many extracted labels against their application data.

    Results are returned in request order with per-status counts.
    """
    settings = get_settings()

    if len(request.items) > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Too many items. Maximum batch size is {settings.max_batch_size} items."
        )

    results = batch_verifier.verify_batch(request.items)
    counts = batch_verifier.summarize(results)
    logger.info(f"Batch of {len(results)} verified: {counts}")

    return BatchCompareResponse(
        success=True,
        total=len(results),
        results=results,
        **counts,
    )


@router.post(
    "/batch/import",
    response_model=CSVImportResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid CSV"},
    },
    tags=["Batch"]
)
async def import_batch_csv(
    csv_file: UploadFile = File(..., description="CSV file with application data"),
    filenames: List[str] = Form([], description="Label image filenames to match CSV rows against"),
):
    """
    Read application data for a batch from CSV.

    A filename column is required (filename, file name, file or image).
    Other columns are matched by name, e.g. "Brand Name", "ABV",
    "Net Contents", "Country", "Beverage Type".

    When `filenames` are supplied, rows are matched to them (case and
    extension insensitive). Only matched rows are returned, named by the
    supplied file, and unmatched rows or files are reported as errors.

    Example CSV:
    ```
    filename,brand_name,alcohol_content,net_contents
    label1.png,OLD TOM DISTILLERY,45% Alc./Vol. (90 Proof),750 mL
    ```
    """
    try:
        csv_content = (await csv_file.read()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=400,
            detail="CSV file must be UTF-8 encoded"
        )

    rows, errors = csv_parser.parse(csv_content)

    if errors and not rows:
        error_messages = [f"Row {e.row_number}: {e.field} - {e.message}" for e in errors[:5]]
        raise HTTPException(
            status_code=400,
            detail=f"CSV validation failed: {'; '.join(error_messages)}"
        )

    if filenames:
        matched_rows, match_errors = csv_parser.match_files(rows, filenames)
        all_errors = errors + match_errors

        if not matched_rows:
            error_messages = [f"Row {e.row_number}: {e.field} - {e.message}" for e in all_errors[:5]]
            raise HTTPException(
                status_code=400,
                detail=f"No valid file/CSV matches: {'; '.join(error_messages)}"
            )

        import_rows = [
            CSVImportRow(filename=name, row_number=r.row_number, expected=r.expected)
            for name, r in matched_rows.items()
        ]
        errors = all_errors
        logger.info(f"CSV import matched {len(import_rows)} of {len(filenames)} files")
    else:
        import_rows = [
            CSVImportRow(filename=r.filename, row_number=r.row_number, expected=r.expected)
            for r in rows
        ]

    return CSVImportResponse(
        success=True,
        rows=import_rows,
        errors=[
            CSVImportIssue(row_number=e.row_number, field=e.field, message=e.message)
            for e in errors
        ],
    )


@router.post("/batch/export", tags=["Batch"])
def export_batch_csv(request: BatchExportRequest):
    """Download batch results as CSV."""
    content = generate_results_csv(request.results)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="verification-results.csv"'},
    )
