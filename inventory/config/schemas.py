from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    ValidationError,
    field_validator,
)


class StoreTable(str, Enum):
    ASSETS = "Assets"
    MODELS = "Models"
    OFFICE_LOCATIONS = "Office Locations"
    ASSET_TYPES = "Asset Types"
    ASSET_STATUS = "Asset Status"


class AnalyticsMode(str, Enum):
    FILTER = "filter"
    SELECTION = "selection"


class StoreRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Asset(StoreRecord):
    id: int | str | None = None
    model: str = Field(default="", alias="Model")
    office_location: str = Field(default="", alias="Office Location")
    asset_type: str = Field(default="", alias="Asset Type")
    status: str = Field(default="", alias="Status")
    quantity: NonNegativeInt | NonNegativeFloat | None = Field(default=None, alias="Quantity")
    assigned_notes: str | None = Field(default=None, alias="Serial Tag")
    company_id: str | None = Field(default=None, alias="Company ID")
    date_added: datetime | None = Field(default=None, alias="Date Added")

    @field_validator("model", "office_location", "asset_type", "status", mode="before")
    @classmethod
    def coerce_missing_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ModelRecord(StoreRecord):
    id: int | None = None
    name: str = Field(alias="Model Name")
    manufacturer: str | None = Field(default=None, alias="Manufacturer")
    description: str | None = Field(default=None, alias="Description")


class OfficeLocation(StoreRecord):
    id: int | None = None
    name: str = Field(alias="Office Name")
    address: str | None = Field(default=None, alias="Address")
    city: str | None = Field(default=None, alias="City")


class AssetTypeRecord(StoreRecord):
    id: int | None = None
    name: str = Field(alias="Type")


class AssetStatusRecord(StoreRecord):
    id: int | None = None
    name: str = Field(alias="Status Type")


REFERENCE_RECORDS: dict[StoreTable, type[StoreRecord]] = {
    StoreTable.MODELS: ModelRecord,
    StoreTable.OFFICE_LOCATIONS: OfficeLocation,
    StoreTable.ASSET_TYPES: AssetTypeRecord,
    StoreTable.ASSET_STATUS: AssetStatusRecord,
}


class ReferenceNames(BaseModel):
    models: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    statuses: list[str] = Field(default_factory=list)


class StoreSettings(BaseModel):
    path: Path = Path("data/inventory.json")


class AnalyticsConfig(BaseModel):
    top_models: int = Field(default=10, ge=1)
    location_top_models: int = Field(default=8, ge=1)


class AppConfig(BaseModel):
    version: int = 1
    store: StoreSettings = Field(default_factory=StoreSettings)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only inventory config version=1 is supported")
        return value


class SeedData(BaseModel):
    version: int = 1
    tables: dict[StoreTable, list[dict[str, Any]]] = Field(default_factory=dict)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only seed file version=1 is supported")
        return value


def raise_config_error(context: str, error: ValidationError) -> ValueError:
    details = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in error.errors())
    return ValueError(f"{context} validation failed: {details}")
