"""
Request schemas for batch import and candidate correction
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadBatchRequest(BaseModel):
    """Batch upload declared by the operator; ``pdf_file`` falls back to the staged source."""

    model_config = ConfigDict(str_strip_whitespace=True)

    exam_year: int
    exam_code: str = Field(min_length=1)
    centre_number: str = Field(min_length=1)
    pdf_file: Optional[bytes] = Field(default=None, repr=False)


class UpdateCandidateRequest(BaseModel):
    """Operator-corrected candidate fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: int
    candidate_name: str = Field(min_length=1)
    candidate_number: str = Field(min_length=1)
    session: int
    centre_code: str = Field(min_length=1)
