"""Pydantic response schemas for the FastAPI endpoints."""

from pydantic import BaseModel


class TextResponse(BaseModel):
    """Response schema for a successful text extraction."""

    text: str


class CnicResponse(BaseModel):
    """Response schema for a CNIC number extraction."""

    text: str
    cnic: str | None = None


class MessageResponse(BaseModel):
    """Response schema for a failed request."""

    message: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
