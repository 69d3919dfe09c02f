"""Agent tools: list, create, get, update, delete, publish, dataset links."""

from __future__ import annotations

from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from ..endpoint import ALL_FIELDS, Endpoint, ToolParams

ResponseSyntax = Literal["markdown"]


class Agent(ToolParams):
    """Agent as returned by the backend."""

    id: UUID
    agent_name: str
    avatar: Optional[str] = None
    description: str
    system_instructions: Optional[str] = None
    greeting_message: Optional[str] = None
    dont_know_response: Optional[str] = None
    response_syntax: ResponseSyntax
    created_at: str
    user_email: str
    dataset_id: Optional[UUID] = None
    is_published: bool


class CreateAgentParams(ToolParams):
    agent_name: str
    description: str
    system_instructions: Optional[str] = None
    greeting_message: Optional[str] = None
    dont_know_response: Optional[str] = None
    response_syntax: ResponseSyntax


class AgentIdParams(ToolParams):
    agent_id: str = Field(..., description="Agent id")


class AgentUpdate(ToolParams):
    agent_name: Optional[str] = None
    description: Optional[str] = None
    system_instructions: Optional[str] = None
    greeting_message: Optional[str] = None
    dont_know_response: Optional[str] = None
    response_syntax: Optional[str] = None


class UpdateAgentParams(ToolParams):
    agent_id: str
    update_data: AgentUpdate = Field(..., description="Fields to change; omitted fields stay as they are")


class AgentDatasetParams(ToolParams):
    agent_id: UUID
    dataset_id: UUID


AGENT_ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint(
        name="list-agents",
        title="List Agents",
        description="List all agents of the user in Mecha Agent platform",
        category="agents",
        method="GET",
        path="agents",
        response="structured",
        output_key="agents",
        output_type=list[Agent],
    ),
    Endpoint(
        name="create-agent",
        title="Create an agent",
        description="Create a new agent",
        category="agents",
        method="POST",
        path="agents",
        params=CreateAgentParams,
        body=ALL_FIELDS,
        encoding="form",
    ),
    Endpoint(
        name="get-agent",
        title="Get an agent",
        description="Get a single agent by id",
        category="agents",
        method="GET",
        path="agents/{agentId}",
        params=AgentIdParams,
        response="structured",
        output_key="agent",
        output_type=Agent,
    ),
    Endpoint(
        name="update-agent",
        title="Update an agent",
        description="Update one or more fields of an agent",
        category="agents",
        method="PATCH",
        path="agents/{agentId}",
        params=UpdateAgentParams,
        body="updateData",
        encoding="form",
    ),
    Endpoint(
        name="delete-agent",
        title="Delete an agent",
        description="Delete an agent from user's account",
        category="agents",
        method="DELETE",
        path="agents/{agentId}",
        params=AgentIdParams,
    ),
    Endpoint(
        name="publish-agent",
        title="Publish an agent",
        description="Publish an agent to the public",
        category="agents",
        method="POST",
        path="agents/{agentId}/publish",
        params=AgentIdParams,
    ),
    Endpoint(
        name="unpublish-agent",
        title="Unpublish an agent",
        description="Unpublish an agent from the public",
        category="agents",
        method="POST",
        path="agents/{agentId}/unpublish",
        params=AgentIdParams,
    ),
    Endpoint(
        name="link-agent-with-dataset",
        title="Link agent with dataset",
        description="Associate an agent with a dataset, allowing the agent to access and use the dataset.",
        category="agents",
        method="PATCH",
        path="agents/{agentId}/dataset",
        query={"datasetId": "{datasetId}", "action": "associate"},
        params=AgentDatasetParams,
    ),
    Endpoint(
        name="unlink-agent-from-dataset",
        title="Unlink agent from dataset",
        description="Disassociate an agent from a dataset, removing the agent's access to the dataset.",
        category="agents",
        method="PATCH",
        path="agents/{agentId}/dataset",
        query={"datasetId": "{datasetId}", "action": "unassociate"},
        params=AgentDatasetParams,
    ),
)
