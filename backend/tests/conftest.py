"""
Shared fixtures for inspection API tests.
"""
import os
import sys

import pytest
import pytest_asyncio

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Force env vars so Settings doesn't pick up a developer .env
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")


@pytest_asyncio.fixture
async def temp_db(monkeypatch, tmp_path):
    """Use a temporary database for each test."""
    import inspection_api.db as db_module

    db_path = tmp_path / "test.db"
    monkeypatch.setattr(db_module, "DB_PATH", db_path)
    monkeypatch.setattr(db_module, "_db", None)

    yield db_path

    await db_module.close_db()


@pytest.fixture
def sample_inspection():
    """Inspection fields as the review workflow stores them."""
    return {
        "pretty_id": "SOL-05072025-002",
        "status": "ARCHIVED",
        "vehicle_plate_number": "AB 4332 KJ",
        "inspection_date": "2025-07-05T14:30:00+00:00",
        "overall_rating": "8",
        "identity_details": {
            "namaCustomer": "Steve Roger",
            "namaInspektor": "Tony Stark",
            "cabangInspeksi": "Semarang",
        },
        "vehicle_data": {
            "tahun": 2023,
            "odometer": 15000,
            "platNomor": "AB 4332 KJ",
            "merekKendaraan": "Hyundai",
            "tipeKendaraan": "Ioniq 5",
        },
        "equipment_checklist": {"bpkb": False, "toolkit": True, "kunciSerep": False},
        "body_paint_thickness": {"front": "10", "rear": {"trunk": 10, "bumper": 10}},
        "url_pdf": "/pdfarchived/SOL-05072025-002-1747546170449.pdf",
        "nft_asset_id": "030307ee382b62d1c2541b3fc1a706384efce7f405f5c0cbbba2a9b2496e7370656374696f6e",
        "blockchain_tx_hash": "b7ad6576cdfb2a386973f7193b7cd24b32806b31beb5d5bac2d4d77cfd2e5f9f",
        "pdf_file_hash": "ad16c1c1f7a3b9eb41512022ce7b92042795d6aa7a34dce0a44c839fa43b4b5f",
        "archived_at": "2025-05-18T06:01:32.593000+00:00",
        "created_at": "2025-05-17T17:55:34.539000+00:00",
        "updated_at": "2025-05-18T06:01:32.595000+00:00",
    }
