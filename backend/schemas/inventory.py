from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.measurement import is_valid_content_unit, uses_containers
from schemas.containers import Container, ContainerSummary


ItemCategory = Literal["chemical", "consumable"]
TrackingType = Literal["SIMPLE_MEASURE", "UNIT_ONLY", "PACK_WITH_CONTENT"]
UsageMode = Literal["CONTENT", "UNITS"]


class ItemState(BaseModel):
    """Snapshot of one inventory item as loaded by the caller."""

    category: ItemCategory
    tracking_type: TrackingType = "SIMPLE_MEASURE"
    content_unit: Optional[str] = None
    unit_type: Optional[str] = None
    total_units: Optional[int] = Field(default=None, ge=0)
    containers: List[Container] = []

    @field_validator("content_unit", "unit_type")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def _validate_tracking(self):
        if not uses_containers(self.tracking_type):
            if self.containers:
                raise ValueError("UNIT_ONLY items do not track containers")
            return self
        if self.content_unit is not None and not is_valid_content_unit(self.category, self.content_unit):
            raise ValueError(f"'{self.content_unit}' is not a valid {self.category} content unit")
        for c in self.containers:
            if not is_valid_content_unit(self.category, c.content_unit):
                raise ValueError(
                    f"container {c.index}: '{c.content_unit}' is not a valid {self.category} content unit"
                )
        return self


class UsageRequest(BaseModel):
    item: ItemState
    # None picks the mode that fits the tracking type
    mode: Optional[UsageMode] = None
    amount: float
    # None means "use the configured default"
    strict: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def _strip_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UsageResult(BaseModel):
    item: ItemState
    summary: ContainerSummary
    mode: UsageMode
    before_quantity: float
    after_quantity: float
    quantity_used: float


class RestockRequest(BaseModel):
    item: ItemState
    count: int = Field(gt=0)
    content_per_unit: Optional[float] = Field(default=None, gt=0)
    opened_remaining: Optional[float] = None
    notes: Optional[str] = None


class RestockResult(BaseModel):
    item: ItemState
    summary: ContainerSummary
    quantity_added: int


class CategoryVocabulary(BaseModel):
    category: str
    content_units: List[str]
    container_types: List[str]
    default_content_unit: str
    default_container_type: str


class UnitCheck(BaseModel):
    category: str
    unit: str
    valid: bool
