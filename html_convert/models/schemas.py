"""
Pydantic Schemas
================

Data models for conversion requests, capture options and rendered artifacts.
"""

from typing import Optional, Dict, Any, Literal
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ArtifactKind(str, Enum):
    """Kinds of artifacts the render engine can produce."""

    IMAGE = "image"
    PDF = "pdf"


class ConversionRequest(BaseModel):
    """Source location and substitution data for one converter."""

    model_config = ConfigDict(frozen=True)

    source_location: str = Field(..., description="Path to the HTML source")
    encoding: str = Field("utf-8", description="Text encoding of the source")
    substitutions: Dict[str, str] = Field(
        default_factory=dict, description="Placeholder values keyed by marker name"
    )

    @field_validator("substitutions", mode="before")
    @classmethod
    def coerce_substitution_values(cls, v: Any) -> Any:
        """Coerce substitution values to strings, keeping insertion order."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): str(value) for key, value in v.items()}
        return v


class ScreenshotOptions(BaseModel):
    """Options for capturing a page screenshot."""

    image_type: Literal["png", "jpeg"] = Field("png", description="Image format")
    full_page: bool = Field(True, description="Capture the full scrollable page")
    quality: Optional[int] = Field(None, ge=0, le=100, description="JPEG quality (0-100)")
    omit_background: bool = Field(False, description="Transparent default background")

    @field_validator("quality")
    @classmethod
    def validate_quality(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        """Quality only applies to JPEG screenshots."""
        if v is not None and info.data.get("image_type") != "jpeg":
            raise ValueError("quality is only supported for jpeg screenshots")
        return v


class PDFOptions(BaseModel):
    """Options for exporting a page as PDF. The page format is always A4."""

    format: Literal["A4"] = Field("A4", description="Paper format")
    print_background: bool = Field(True, description="Print background graphics")


class RenderedArtifact(BaseModel):
    """Result of one conversion call."""

    kind: ArtifactKind = Field(..., description="Artifact kind")
    data: bytes = Field(..., description="Artifact binary data", exclude=True)
    base64_data: str = Field(..., description="Base64 encoded artifact data")
    file_size: int = Field(..., description="Artifact size in bytes")
    output_path: Optional[Path] = Field(None, description="Where the artifact was written")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Generation metadata")
