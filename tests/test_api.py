"""Tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient

from label_compliance.main import app
from label_compliance.services.warning import STANDARD_GOVERNMENT_WARNING


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def extracted_payload(**overrides):
    data = {
        "brand_name": "Test Brand",
        "alcohol_content": "5% ABV",
        "government_warning": STANDARD_GOVERNMENT_WARNING,
        "government_warning_all_caps": True,
        "government_warning_bold": True,
        "beverage_type": "beer",
        "is_alcohol_label": True,
        "image_quality": "good",
        "confidence": 0.93,
        "notes": [],
    }
    data.update(overrides)
    return data


class TestHealthEndpoint:
    """Test /health endpoint."""

    def test_health_response_format(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_contains_version(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "version" in data
        assert "docs" in data


class TestCompareEndpoint:
    """Test /compare endpoint."""

    def test_approved(self, client):
        response = client.post("/api/v1/compare", json={
            "expected": {"brand_name": "Test Brand", "alcohol_content": "5% ABV"},
            "extracted": extracted_payload(),
            "processing_time_ms": 850,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["overall_status"] == "approved"
        assert [f["key"] for f in data["fields"]] == ["brand_name", "alcohol_content"]
        assert data["processing_time_ms"] == 850
        assert data["government_warning_check"]["hard_issues"] == []

    def test_normalization_detail_serialized(self, client):
        response = client.post("/api/v1/compare", json={
            "expected": {"alcohol_content": "80 Proof"},
            "extracted": extracted_payload(alcohol_content="40% ABV"),
        })

        alcohol = response.json()["fields"][0]
        assert alcohol["status"] == "match"
        assert alcohol["normalization"]["expected_parsed"]["proof"] == 80
        assert alcohol["normalization"]["extracted_parsed"]["abv"] == 40

    def test_non_alcohol_label_rejected(self, client):
        response = client.post("/api/v1/compare", json={
            "expected": {"brand_name": "Test Brand"},
            "extracted": extracted_payload(is_alcohol_label=False),
        })

        data = response.json()
        assert data["overall_status"] == "rejected"
        assert data["government_warning_check"] is None

    def test_missing_required_extraction_fields(self, client):
        response = client.post("/api/v1/compare", json={
            "expected": {"brand_name": "Test Brand"},
            "extracted": {"brand_name": "Test Brand"},
        })
        assert response.status_code == 422

    def test_wrong_field_type(self, client):
        response = client.post("/api/v1/compare", json={
            "expected": {"brand_name": "Test Brand"},
            "extracted": extracted_payload(brand_name=["not", "a", "string"]),
        })
        assert response.status_code == 422


class TestBatchEndpoints:
    """Test batch endpoints."""

    def test_compare_batch(self, client):
        response = client.post("/api/v1/compare/batch", json={"items": [
            {
                "filename": "a.png",
                "expected": {"brand_name": "Test Brand"},
                "extracted": extracted_payload(),
            },
            {
                "filename": "b.png",
                "expected": {"brand_name": "Other Brand"},
                "extracted": extracted_payload(),
            },
        ]})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["approved"] == 1
        assert data["rejected"] == 1
        assert [r["filename"] for r in data["results"]] == ["a.png", "b.png"]

    def test_compare_batch_too_large(self, client):
        item = {
            "filename": "a.png",
            "expected": {"brand_name": "Test Brand"},
            "extracted": extracted_payload(),
        }
        response = client.post("/api/v1/compare/batch", json={"items": [item] * 51})
        assert response.status_code == 400
        assert "Maximum batch size" in response.json()["detail"]

    def test_import_csv(self, client):
        content = b"filename,brand name,abv\nlabel1.png,Test Brand,5% ABV\n,Missing,1\n"
        response = client.post(
            "/api/v1/batch/import",
            files={"csv_file": ("data.csv", content, "text/csv")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["rows"][0]["filename"] == "label1.png"
        assert data["rows"][0]["expected"]["alcohol_content"] == "5% ABV"
        assert data["errors"][0]["field"] == "filename"

    def test_import_csv_without_filename_column(self, client):
        response = client.post(
            "/api/v1/batch/import",
            files={"csv_file": ("data.csv", b"brand\nTest", "text/csv")},
        )
        assert response.status_code == 400

    def test_import_csv_not_utf8(self, client):
        response = client.post(
            "/api/v1/batch/import",
            files={"csv_file": ("data.csv", "filename\né.png".encode("utf-16"), "text/csv")},
        )
        assert response.status_code == 400

    def test_export_csv(self, client):
        batch = client.post("/api/v1/compare/batch", json={"items": [{
            "filename": "a.png",
            "expected": {"brand_name": "Test Brand"},
            "extracted": extracted_payload(),
        }]}).json()

        response = client.post("/api/v1/batch/export", json={"results": batch["results"]})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.strip().split("\n")
        assert lines[0].startswith("filename,overall_status")
        assert lines[1].startswith("a.png,approved,match")

    def test_import_csv_matches_filenames(self, client):
        content = b"filename,brand\nlabel1.png,Old Tom\nmissing.png,X\n"
        response = client.post(
            "/api/v1/batch/import",
            files={"csv_file": ("data.csv", content, "text/csv")},
            data={"filenames": ["Label1.PNG", "other.png"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert [r["filename"] for r in data["rows"]] == ["Label1.PNG"]
        assert data["rows"][0]["expected"]["brand_name"] == "Old Tom"
        messages = [e["message"] for e in data["errors"]]
        assert "No matching file for 'missing.png'" in messages
        assert "No CSV data for file 'other.png'" in messages

    def test_import_csv_no_filename_matches(self, client):
        response = client.post(
            "/api/v1/batch/import",
            files={"csv_file": ("data.csv", b"filename,brand\nlabel1.png,Old Tom\n", "text/csv")},
            data={"filenames": ["other.png"]},
        )
        assert response.status_code == 400
        assert "No valid file/CSV matches" in response.json()["detail"]
