"""Pydantic schemas for label records, comparison results and API payloads."""

from enum import Enum
from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional


class FieldStatus(str, Enum):
    """Verdict for a single compared field."""
    MATCH = "match"
    WARNING = "warning"
    MISMATCH = "mismatch"
    NOT_FOUND = "not_found"


class OverallStatus(str, Enum):
    """Verdict for a whole label."""
    APPROVED = "approved"
    NEEDS_REVIEW = "needs_review"
    REJECTED = "rejected"


class BeverageType(str, Enum):
    """TTB beverage category."""
    BEER = "beer"
    WINE = "wine"
    DISTILLED_SPIRITS = "distilled_spirits"


class ImageQuality(str, Enum):
    """Quality of the label image as judged by the extractor."""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class NoteLevel(str, Enum):
    """Severity of a normalization note."""
    INFO = "info"
    CAUTION = "caution"


class ExpectedRecord(BaseModel):
    """Application data to verify against. Empty string means "not provided"."""
    brand_name: str = ""
    class_type: str = ""
    alcohol_content: str = ""
    net_contents: str = ""
    producer_name: str = ""
    producer_address: str = ""
    country_of_origin: str = ""
    government_warning: str = ""
    beverage_type: str = Field("", description="beer, wine, distilled_spirits or empty")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "brand_name": "OLD TOM DISTILLERY",
                "class_type": "Kentucky Straight Bourbon Whiskey",
                "alcohol_content": "45% Alc./Vol. (90 Proof)",
                "net_contents": "750 mL",
                "beverage_type": "distilled_spirits",
            }
        }

    @field_validator("beverage_type", mode="before")
    @classmethod
    def _check_beverage_type(cls, value):
        if isinstance(value, BeverageType):
            return value.value
        if value is None:
            return ""
        if value and value not in {b.value for b in BeverageType}:
            raise ValueError(
                f"beverage_type must be one of {', '.join(b.value for b in BeverageType)} or empty"
            )
        return value


class ExtractedRecord(BaseModel):
    """Fields read off the label by the extraction step. None means "not detected"."""
    brand_name: Optional[str] = None
    class_type: Optional[str] = None
    alcohol_content: Optional[str] = None
    net_contents: Optional[str] = None
    producer_name: Optional[str] = None
    producer_address: Optional[str] = None
    country_of_origin: Optional[str] = None
    government_warning: Optional[str] = None
    government_warning_all_caps: Optional[bool] = None
    government_warning_bold: Optional[bool] = None
    beverage_type: Optional[BeverageType] = None
    is_alcohol_label: bool
    image_quality: ImageQuality
    confidence: float = Field(ge=0.0, le=1.0)
    notes: list[str] = Field(default_factory=list)

    class Config:
        frozen = True


class NormalizationNote(BaseModel):
    """Note explaining how a raw value was interpreted."""
    text: str
    level: NoteLevel

    class Config:
        frozen = True


class ParsedAlcoholContent(BaseModel):
    """Alcohol content parsed from free text."""
    raw_text: str
    abv: Optional[float] = None
    proof: Optional[float] = None
    inferred_from_bare_number: bool = False
    notes: list[NormalizationNote] = Field(default_factory=list)

    class Config:
        frozen = True


class FieldNormalization(BaseModel):
    """Parsed values behind a numeric field comparison."""
    expected_parsed: ParsedAlcoholContent
    extracted_parsed: ParsedAlcoholContent
    numeric_diff: float
    diff_unit: str

    class Config:
        frozen = True


class FieldResult(BaseModel):
    """Result for a single field comparison."""
    name: str
    key: str
    expected: str
    extracted: Optional[str] = None
    status: FieldStatus
    explanation: str
    normalization: Optional[FieldNormalization] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Brand Name",
                "key": "brand_name",
                "expected": "Old Tom Distillery",
                "extracted": "OLD TOM DISTILLERY",
                "status": "warning",
                "explanation": "Brand name matches but has case differences",
            }
        }


class GovernmentWarningCheck(BaseModel):
    """Compliance of the label's warning statement with the TTB standard text."""
    text_match: bool
    all_caps_correct: Optional[bool] = None
    bold_correct: Optional[bool] = None
    extracted_text: Optional[str] = None
    issues: list[str] = Field(default_factory=list)
    advisories: list[str] = Field(
        default_factory=list,
        description="Subset of issues that only ask for manual verification",
    )

    class Config:
        frozen = True

    @computed_field
    @property
    def hard_issues(self) -> list[str]:
        """Issues that are not manual-verification advisories."""
        return [issue for issue in self.issues if issue not in self.advisories]


class VerificationResult(BaseModel):
    """Overall verification result for a label."""
    overall_status: OverallStatus
    is_alcohol_label: bool
    fields: list[FieldResult]
    government_warning_check: Optional[GovernmentWarningCheck] = None
    image_quality: ImageQuality
    confidence: float
    notes: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0
    summary: str = ""

    class Config:
        frozen = True


class CompareRequest(BaseModel):
    """Request body for a single comparison."""
    expected: ExpectedRecord
    extracted: ExtractedRecord
    processing_time_ms: int = Field(0, ge=0, description="Elapsed extraction time, passed through")


class BatchCompareItem(BaseModel):
    """One label in a batch comparison."""
    filename: str
    expected: ExpectedRecord
    extracted: ExtractedRecord
    processing_time_ms: int = Field(0, ge=0)


class BatchCompareRequest(BaseModel):
    """Request body for batch comparison."""
    items: list[BatchCompareItem]


class BatchItemResult(BaseModel):
    """Result for a single label in a batch."""
    filename: str
    success: bool
    result: Optional[VerificationResult] = None
    error: Optional[str] = None


class BatchCompareResponse(BaseModel):
    """Response for batch comparison."""
    success: bool
    total: int
    approved: int
    needs_review: int
    rejected: int
    errors: int
    results: list[BatchItemResult]


class CSVImportRow(BaseModel):
    """Expected data for one file, read from a batch CSV."""
    filename: str
    row_number: int
    expected: ExpectedRecord


class CSVImportIssue(BaseModel):
    """Problem found while reading a batch CSV."""
    row_number: int
    field: str
    message: str


class CSVImportResponse(BaseModel):
    """Response for batch CSV import."""
    success: bool
    rows: list[CSVImportRow]
    errors: list[CSVImportIssue]


class BatchExportRequest(BaseModel):
    """Request body for exporting batch results as CSV."""
    results: list[BatchItemResult]


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Too many items",
                "detail": "Maximum batch size is 50 items."
            }
        }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
