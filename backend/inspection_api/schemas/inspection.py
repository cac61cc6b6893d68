"""
Pydantic schemas for inspection API responses.

Each response is built by an explicit mapping function over an enumerated
field list, so which store columns reach the client is visible here.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class InspectionStatus(str, Enum):
    """Lifecycle status of an inspection. Transitions happen outside this API."""

    NEED_REVIEW = "NEED_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ARCHIVING = "ARCHIVING"
    ARCHIVED = "ARCHIVED"
    FAIL_ARCHIVE = "FAIL_ARCHIVE"
    DEACTIVATED = "DEACTIVATED"


class PhotoResponse(BaseModel):
    """A photo attached to an inspection."""

    id: str = Field(examples=["add815ce-d602-4e49-a360-e6012e23cead"])
    inspection_id: str = Field(examples=["2a2b508c-c0c5-4d41-9341-2cdc88635c8a"])
    path: str = Field(examples=["1748917020710-compressed-1748917126971-729831521.jpg"])
    label: str | None = Field(None, examples=["Foto Tambahan"])
    category: str | None = Field(None, examples=["General Tambahan"])
    is_mandatory: bool | None = None
    original_label: str | None = None
    need_attention: bool | None = None
    display_in_pdf: bool = True  # shown in the PDF report
    created_at: datetime
    updated_at: datetime


class InspectionResponse(BaseModel):
    """A complete inspection record with its photos."""

    id: str = Field(examples=["a1b2c3d4-e5f6-7890-1234-567890abcdef"])
    pretty_id: str = Field(examples=["SOL-05072025-002"])
    status: str = Field(examples=[InspectionStatus.ARCHIVED.value])
    submitted_by_user_id: str | None = None
    reviewer_id: str | None = None
    inspector_id: str | None = None
    vehicle_plate_number: str | None = Field(None, examples=["AB 4332 KJ"])
    inspection_date: datetime | None = None
    overall_rating: str | None = Field(None, examples=["8"])

    # Structured form data, stored as JSON documents
    identity_details: Any = None
    vehicle_data: Any = None
    equipment_checklist: Any = None
    inspection_summary: Any = None
    detailed_assessment: Any = None
    body_paint_thickness: Any = None
    notes_font_sizes: Any = None

    photos: list[PhotoResponse] = Field(default_factory=list)

    # Report archive and ledger anchoring
    url_pdf: str | None = Field(None, examples=["/pdfarchived/SOL-05072025-002-1747546170449.pdf"])
    nft_asset_id: str | None = None
    blockchain_tx_hash: str | None = None
    pdf_file_hash: str | None = None
    archived_at: datetime | None = None
    deactivated_at: datetime | None = None

    created_at: datetime
    updated_at: datetime


class InspectionChangeLogResponse(BaseModel):
    """One recorded edit to a field of an inspection."""

    id: str
    inspection_id: str
    field_name: str = Field(examples=["vehicleData"])
    sub_field_name: str | None = Field(None, examples=["odometer"])
    sub_sub_field_name: str | None = None
    old_value: str | None = Field(None, examples=["15000"])
    new_value: str | None = Field(None, examples=["15500"])
    changed_at: datetime


PHOTO_FIELDS = (
    "id",
    "inspection_id",
    "path",
    "label",
    "category",
    "is_mandatory",
    "original_label",
    "need_attention",
    "display_in_pdf",
    "created_at",
    "updated_at",
)

# "photos" is mapped separately
INSPECTION_FIELDS = (
    "id",
    "pretty_id",
    "status",
    "submitted_by_user_id",
    "reviewer_id",
    "inspector_id",
    "vehicle_plate_number",
    "inspection_date",
    "overall_rating",
    "identity_details",
    "vehicle_data",
    "equipment_checklist",
    "inspection_summary",
    "detailed_assessment",
    "body_paint_thickness",
    "notes_font_sizes",
    "url_pdf",
    "nft_asset_id",
    "blockchain_tx_hash",
    "pdf_file_hash",
    "archived_at",
    "deactivated_at",
    "created_at",
    "updated_at",
)

CHANGE_LOG_FIELDS = (
    "id",
    "inspection_id",
    "field_name",
    "sub_field_name",
    "sub_sub_field_name",
    "old_value",
    "new_value",
    "changed_at",
)


def photo_to_response(photo: Mapping) -> PhotoResponse:
    """Map a store photo row onto the response."""
    return PhotoResponse(**{name: photo.get(name) for name in PHOTO_FIELDS if name in photo})


def inspection_to_response(inspection: Mapping) -> InspectionResponse:
    """Map a store row (with "photos") onto the response. Photos are flattened in."""
    data = {name: inspection.get(name) for name in INSPECTION_FIELDS if name in inspection}
    data["photos"] = [photo_to_response(p) for p in inspection.get("photos") or []]
    return InspectionResponse(**data)


def change_log_to_response(entry: Mapping) -> InspectionChangeLogResponse:
    """Map a store change log row onto the response."""
    return InspectionChangeLogResponse(**{name: entry.get(name) for name in CHANGE_LOG_FIELDS if name in entry})
