from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


ContainerStatus = Literal["sealed", "opened", "empty"]


class Container(BaseModel):
    """One physical bottle/vial/pack. Immutable: updates produce copies."""

    index: int = Field(ge=0)
    status: ContainerStatus = "sealed"
    initial_content: float = Field(ge=0)
    remaining_content: float = Field(ge=0)
    content_unit: str

    @field_validator("content_unit")
    @classmethod
    def _strip_unit(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("content_unit is required")
        return v

    class Config:
        frozen = True


class ContainerSummary(BaseModel):
    sealed_count: int = 0
    opened_count: int = 0
    empty_count: int = 0
    total_units: int = 0
    total_content: float = 0


class DeductRequest(BaseModel):
    containers: List[Container] = []
    amount: float


class ContainersOut(BaseModel):
    containers: List[Container]
    summary: ContainerSummary


class ReceiveRequest(BaseModel):
    containers: List[Container] = []
    count: int = Field(gt=0)
    content_per_unit: float = Field(gt=0)
    content_unit: str
    opened_remaining: Optional[float] = None

    @field_validator("content_unit")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class SummaryRequest(BaseModel):
    containers: List[Container] = []
