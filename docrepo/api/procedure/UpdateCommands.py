"""Update command set accepted by the update procedure."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..document.Document import SYSTEM_FIELDS
from ..errors import ProcedureValidationError


class UpdateCommands(BaseModel):
    """Operator groups keyed by their wire names (``$set``, ``$pop``, ``$push``, ``$unshift``).

    Each group maps a field name to the operator payload:

    - ``$set``: new value of the field (created when absent)
    - ``$pop``: direction; negative removes the first element, anything else the last
    - ``$push``: value appended to the array
    - ``$unshift``: value prepended to the array
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    set_fields: dict[str, Any] = Field(default_factory=dict, alias="$set")
    pop_fields: dict[str, int | float | None] = Field(default_factory=dict, alias="$pop")
    push_fields: dict[str, Any] = Field(default_factory=dict, alias="$push")
    unshift_fields: dict[str, Any] = Field(default_factory=dict, alias="$unshift")

    @field_validator("set_fields", "pop_fields", "push_fields", "unshift_fields")
    @classmethod
    def reject_operator_names(cls, v: dict[str, Any]) -> dict[str, Any]:
        reserved = sorted(name for name in v if name.startswith("$"))
        if reserved:
            raise ValueError(f"field names cannot start with '$': {', '.join(reserved)}")
        return v

    @field_validator("set_fields")
    @classmethod
    def reject_system_fields(cls, v: dict[str, Any]) -> dict[str, Any]:
        protected = sorted(SYSTEM_FIELDS.intersection(v))
        if protected:
            raise ValueError(f"$set cannot change system fields: {', '.join(protected)}")
        return v

    @classmethod
    def parse(cls, commands: Any) -> "UpdateCommands":
        """Validate a wire-shaped command mapping.

        Raises:
            ProcedureValidationError: if commands are missing or malformed
        """
        if commands is None:
            raise ProcedureValidationError("The update commands are undefined or null.")
        if isinstance(commands, cls):
            return commands
        try:
            return cls.model_validate(commands)
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first.get("loc", ()))
            detail = f"{loc}: {first['msg']}" if loc else first["msg"]
            raise ProcedureValidationError(f"Invalid update commands: {detail}") from e

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_defaults=True)
