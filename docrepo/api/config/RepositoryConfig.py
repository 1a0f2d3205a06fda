"""Top-level docrepo configuration."""

import json
import os
from contextlib import suppress
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..database.DatabaseConfig import DatabaseConfig
from ..procedure.ProcedureConfig import ProcedureConfig
from .LogConfig import LogConfig
from .RetryConfig import RetryConfig


class RepositoryConfig(BaseModel):
    """Configuration shared by every repository."""

    model_config = ConfigDict(extra="forbid")

    database: DatabaseConfig
    procedure: ProcedureConfig = Field(default_factory=ProcedureConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def get_home_dir(cls) -> Path:
        """Get docrepo home directory based on DOCREPO_HOME or default to ~/.docrepo."""
        home_env = os.environ.get("DOCREPO_HOME")
        if home_env:
            return Path(home_env).expanduser().resolve()
        return Path.home() / ".docrepo"

    @classmethod
    def get_config_path(cls) -> Path:
        return cls.get_home_dir() / "config.json"

    @classmethod
    def load(cls) -> "RepositoryConfig":
        """Load and validate config from file.

        Only the database section is required; the other sections fall back to defaults.

        Raises:
            ValueError: If config file not found, invalid JSON, or validation error
        """
        path = cls.get_config_path()

        if not path.exists():
            raise ValueError(f"Configuration file not found at {path}")

        try:
            with path.open() as fh:
                raw = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        try:
            return cls(**raw)
        except ValidationError as e:
            error_list = e.errors() or [{"msg": str(e), "loc": ()}]
            first = error_list[0]
            error_msg = first.get("msg", str(e))
            loc = first.get("loc", ())
            field = ".".join(str(x) for x in loc) if isinstance(loc, (list, tuple)) else ""
            detail = f"{field}: {error_msg}" if field else error_msg
            raise ValueError(f"Configuration validation error: {detail}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "database": self.database.model_dump(),
            "procedure": self.procedure.model_dump(),
            "retry": self.retry.model_dump(),
            "log": self.log.model_dump(mode="json"),
        }

    def save(self) -> None:
        """Save the configuration atomically (write to temp file, then rename)."""
        path = self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w") as fh:
                json.dump(self.to_dict(), fh, indent=4)
            temp_path.replace(path)
        except OSError as e:
            with suppress(OSError):
                if temp_path.exists():
                    temp_path.unlink()
            raise RuntimeError(f"Failed to save config: {e}") from e
