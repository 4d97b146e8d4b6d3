"""Endpoint configuration."""
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .jsonrpc.models import CONTENT_TYPE, DEFAULT_DATA_MESSAGE


class EndpointSettings(BaseModel):
    """Settings fixed at startup and shared by the handler and transport."""

    model_config = ConfigDict(frozen=True)

    service_name: str = "jsonrpc-endpoint"
    version: str = "1.0.0"
    default_data_message: str = DEFAULT_DATA_MESSAGE
    content_type: str = CONTENT_TYPE
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_env(cls, prefix: str = "RPC_") -> "EndpointSettings":
        """Build settings from ``RPC_*`` environment variables, falling back to defaults."""
        values = {}
        for field in cls.model_fields:
            value: Optional[str] = os.getenv(f"{prefix}{field.upper()}")
            if value is not None:
                values[field] = value
        return cls(**values)
