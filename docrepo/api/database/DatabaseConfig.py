"""Database configuration with Pydantic validation."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from ._mongo._Data import _Data as _MongoData
from ._mongomock._Data import _Data as _MongomockData

# Registry: add new backends here (ONLY place backend types are enumerated)
_BACKEND_REGISTRY: dict[str, type[BaseModel]] = {
    "mongo": _MongoData,
    "mongomock": _MongomockData,
}


class DatabaseConfig(BaseModel):
    type: str = Field(..., description="Database backend type")
    prefix: str = Field(..., min_length=1, description="MongoDB database holding the collections")
    data: BaseModel = Field(..., description="Backend-specific configuration data")
    page_size: int = Field(default=100, gt=0, description="Maximum documents per query page")

    @model_validator(mode="before")
    @classmethod
    def validate_and_populate_data(cls, values: Any) -> dict[str, Any]:
        if not isinstance(values, dict):
            raise ValueError(f"database config must be a dict, got {type(values).__name__}")
        database_type = values.get("type")
        if not database_type:
            raise ValueError("database.type is required")
        config_data_class = _BACKEND_REGISTRY.get(database_type)
        if not config_data_class:
            raise ValueError(f"Unknown backend type: {database_type!r} (supported: {list(_BACKEND_REGISTRY.keys())})")
        data = values.get("data")
        if data is None:
            raise ValueError("database.data is required")
        if not isinstance(data, config_data_class):
            # Allow empty dict - backend config classes can have defaults
            data = config_data_class(**data)
        return {**values, "data": data}

    def model_dump(self, **kwargs) -> dict[str, Any]:
        """Override to properly serialize nested data model."""
        result = super().model_dump(**kwargs)
        if isinstance(self.data, BaseModel):
            result["data"] = self.data.model_dump(**kwargs)
        return result
