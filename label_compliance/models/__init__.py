"""Pydantic models for label records, results and API payloads."""

from .schemas import (
    FieldStatus,
    OverallStatus,
    BeverageType,
    ImageQuality,
    NoteLevel,
    ExpectedRecord,
    ExtractedRecord,
    NormalizationNote,
    ParsedAlcoholContent,
    FieldNormalization,
    FieldResult,
    GovernmentWarningCheck,
    VerificationResult,
    CompareRequest,
    BatchCompareItem,
    BatchCompareRequest,
    BatchItemResult,
    BatchCompareResponse,
    CSVImportRow,
    CSVImportIssue,
    CSVImportResponse,
    BatchExportRequest,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "FieldStatus",
    "OverallStatus",
    "BeverageType",
    "ImageQuality",
    "NoteLevel",
    "ExpectedRecord",
    "ExtractedRecord",
    "NormalizationNote",
    "ParsedAlcoholContent",
    "FieldNormalization",
    "FieldResult",
    "GovernmentWarningCheck",
    "VerificationResult",
    "CompareRequest",
    "BatchCompareItem",
    "BatchCompareRequest",
    "BatchItemResult",
    "BatchCompareResponse",
    "CSVImportRow",
    "CSVImportIssue",
    "CSVImportResponse",
    "BatchExportRequest",
    "ErrorResponse",
    "HealthResponse",
]
