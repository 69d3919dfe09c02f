"""API key tools: list, create, bulk activate/deactivate/delete."""

from __future__ import annotations

from typing import Annotated, Literal
from uuid import UUID

from pydantic import ConfigDict, Field

from ..endpoint import Endpoint, ToolParams

Permission = Literal["read", "write", "inference"]
ApiKeyIds = Annotated[list[UUID], Field(min_length=1, description="Provide at least one API key id")]


class ApiKeyInput(ToolParams):
    model_config = ConfigDict(extra="forbid")

    key_name: str
    permissions: list[Permission] = Field(..., min_length=1, description="Specify at least one permission")
    max_age_in_days: int | float


class ApiKey(ToolParams):
    id: UUID
    key_name: str
    permissions: list[Permission]
    key: str
    expiration_date: str
    status: Literal["Active", "Inactive"]
    user_email: str
    created_at: str


class CreateApiKeyParams(ToolParams):
    api_key: ApiKeyInput


class ApiKeyIdsParams(ToolParams):
    api_key_ids: ApiKeyIds


API_KEY_ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint(
        name="list-api-keys",
        title="List API Keys",
        description="List all API keys",
        category="api-keys",
        method="GET",
        path="api-keys",
        response="structured",
        output_key="apiKeys",
        output_type=list[ApiKey],
    ),
    Endpoint(
        name="create-api-key",
        title="Create an API key",
        description="Create a new API key",
        category="api-keys",
        method="POST",
        path="api-keys",
        params=CreateApiKeyParams,
        body="apiKey",
    ),
    Endpoint(
        name="activate-api-keys",
        title="Activate API keys",
        description="Activate one or more API keys by id",
        category="api-keys",
        method="PATCH",
        path="api-keys/activate",
        params=ApiKeyIdsParams,
        body="apiKeyIds",
    ),
    Endpoint(
        name="deactivate-api-keys",
        title="Deactivate API keys",
        description="Deactivate one or more API keys by id",
        category="api-keys",
        method="PATCH",
        path="api-keys/deactivate",
        params=ApiKeyIdsParams,
        body="apiKeyIds",
    ),
    Endpoint(
        name="delete-api-keys",
        title="Delete API keys",
        description="Delete one or more API keys by id",
        category="api-keys",
        method="DELETE",
        path="api-keys",
        params=ApiKeyIdsParams,
        body="apiKeyIds",
    ),
)
