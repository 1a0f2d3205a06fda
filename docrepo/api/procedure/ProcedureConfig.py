"""Execution budget configuration for procedures."""

from pydantic import BaseModel, ConfigDict, Field


class ProcedureConfig(BaseModel):
    """Limits applied to every single procedure invocation."""

    model_config = ConfigDict(extra="forbid")

    timeout_secs: float = Field(default=5.0, gt=0, description="Wall-clock budget of one invocation")
    max_operations: int | None = Field(
        default=None,
        ge=0,
        description="Maximum store operations per invocation (unlimited when omitted)",
    )
