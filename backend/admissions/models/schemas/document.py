"""Pydantic schemas for document-related entities."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from admissions.core.enums import DocumentStatus, DocumentType


class DocumentCreate(BaseModel):
    """Schema for registering an uploaded document."""

    type: DocumentType
    file_reference: str = Field(..., min_length=1, max_length=500)
    file_name: Optional[str] = Field(None, max_length=255)
    uploaded_by: str = Field(..., min_length=1, max_length=64)


class DocumentVerify(BaseModel):
    """Schema for approving or rejecting a document."""

    status: DocumentStatus
    verified_by: str = Field(..., min_length=1, max_length=64)
    note: Optional[str] = None


class DocumentResponse(BaseModel):
    """Schema for document response."""

    id: UUID
    application_id: UUID
    type: DocumentType
    status: DocumentStatus
    file_reference: str
    file_name: Optional[str] = None
    uploaded_by: str
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verify_note: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
