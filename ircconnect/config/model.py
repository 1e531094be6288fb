from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import IRC_DEFAULT_PORT


class Credentials(BaseModel):
    """Credential set for one IRC server connection.

    Instances are frozen: the connection manager reads them for the whole
    lifetime of a session and they must not change mid-connection.

    Attributes:
        real_name: Real name sent with USER.
        nickname: Nickname sent with NICK (and USER).
        password: Optional server password sent with PASS.
        server: Server host name or address.
        port: Server TCP port.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    real_name: str = Field(default="", alias="realName")
    nickname: str = Field(min_length=1)
    password: str | None = None
    server: str = Field(min_length=1)
    port: int = Field(default=IRC_DEFAULT_PORT, ge=1, le=65535)

    @field_validator("nickname", "server", mode="before")
    @classmethod
    def validate_token(cls, v: Any) -> str:
        """Strip surrounding whitespace and reject embedded whitespace."""
        if not isinstance(v, str):
            raise ValueError("must be a string")
        stripped = v.strip()
        if any(ch.isspace() for ch in stripped):
            raise ValueError("must not contain whitespace")
        return stripped

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any) -> str | None:
        # An empty password means "no PASS command"
        if v is None or (isinstance(v, str) and not v):
            return None
        return v

    @field_validator("real_name", mode="before")
    @classmethod
    def validate_real_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Credentials:
        """Create Credentials from a configuration dictionary.

        ``realName`` and ``real_name`` are both accepted. A missing real name
        falls back to the nickname.
        """
        norm_data = dict(data)
        if not norm_data.get("real_name") and not norm_data.get("realName"):
            norm_data["real_name"] = norm_data.get("nickname", "")
        return cls.model_validate(norm_data)
