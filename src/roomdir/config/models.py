"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, roomdir.toml only contains
overrides. A fresh homeserver needs only ``[server] domain``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from roomdir.domain.ids import validate_server_name


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    domain: str = "localhost"

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        if not validate_server_name(value):
            msg = f"Invalid server name: {value!r}"
            raise ValueError(msg)
        return value


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    filename: str = "roomdir.db"
    busy_timeout_ms: int = Field(default=30_000, ge=0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class RoomdirConfig(BaseModel):
    """Root configuration composing all roomdir.toml sections."""

    model_config = {"frozen": True}

    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
