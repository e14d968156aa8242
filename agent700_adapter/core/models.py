# agent700_adapter/core/models.py

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agent700_adapter.utils.helpers import (
    APP_PASSWORD_PREFIX,
    is_valid_app_password,
    normalize_base_url,
)

DEFAULT_CONSTRUCT_TEMPLATE = '{"key":"{{key}}","value":"{{value}}"}'


# ===== CREDENTIALS / SESSION =====

class Credential(BaseModel):
    """
    Long-lived secret as handed over by the host. Read-only to the core;
    the short-lived token lives on AppSession instead.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(..., alias="baseUrl", description="Base URL of the Agent700 API")
    secret: str = Field(..., alias="appPassword", description="App password (app_a7_...)")


class AppSession(BaseModel):
    """
    Bearer session for exactly one batch execution. Written once by the
    credential exchange, read by every unit afterwards.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str
    access_token: str

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


# ===== WORK UNITS =====

class UnitParameters(BaseModel):
    """
    Parameters already resolved by the host for one unit. Only the fields
    the chosen operation reads matter; the rest keep their defaults.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str = ""
    agent_id: Optional[str] = Field(None, alias="agentId")
    simplify: bool = True
    key: str = ""
    value: Any = None
    new_key: str = Field("", alias="newKey")
    pattern: str = ""
    template: str = DEFAULT_CONSTRUCT_TEMPLATE


class WorkUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource: str
    operation: str
    params: UnitParameters = Field(default_factory=UnitParameters)

    @property
    def label(self) -> str:
        return f"{self.resource}:{self.operation}"


# ===== RESULTS =====

class ItemResult(BaseModel):
    """One output item; `item_index` is the 0-based index of the unit it came from."""
    model_config = ConfigDict(populate_by_name=True)

    data: Any = Field(..., alias="json")
    item_index: int = Field(..., alias="correlatesTo")


class ErrorResult(BaseModel):
    """A unit failure recorded as data (continue mode)."""
    model_config = ConfigDict(populate_by_name=True)

    error: str
    item_index: int = Field(..., alias="correlatesTo")
    operation: Optional[str] = None


BatchResult = Union[ItemResult, ErrorResult]


class FailureMode(str, Enum):
    FAIL_FAST = "fail-fast"
    CONTINUE = "continue"


# ===== HTTP HOST SCHEMA =====

class CredentialIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_url: Optional[str] = Field(None, alias="baseUrl", description="Defaults to AGENT700_BASE_URL")
    app_password: str = Field(..., alias="appPassword", description="Agent700 App Password")

    @field_validator("app_password")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if not is_valid_app_password(v):
            raise ValueError(f"App password must be '{APP_PASSWORD_PREFIX}' followed by 32 characters")
        return v

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: Optional[str]) -> Optional[str]:
        return normalize_base_url(v) if v else v


class ExecuteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    credential: Optional[CredentialIn] = Field(None, description="Falls back to AGENT700_APP_PASSWORD")
    units: List[WorkUnit] = Field(default_factory=list)
    continue_on_fail: bool = Field(False, alias="continueOnFail")


class ExecuteResponse(BaseModel):
    results: List[Dict[str, Any]]


class OperationInfo(BaseModel):
    resource: str
    operation: str
    name: str
    action: str
    method: str
    required: List[str]
