"""Declarative tool definitions interpreted by one generic dispatcher.

An ``Endpoint`` names a tool, its input model, and how that input maps
onto one backend call: verb, path template, query template, body source
and encoding, and which response adapter shapes the result.

Templates use the input's wire names (the camelCase aliases the MCP
client sends):

    >>> Endpoint(
    ...     name="get-agent",
    ...     title="Get an agent",
    ...     description="Get a single agent by id",
    ...     method="GET",
    ...     path="agents/{agentId}",
    ...     params=AgentIdParams,
    ...     response="structured",
    ...     output_key="agent",
    ...     output_type=Agent,
    ... )
"""

from __future__ import annotations

from string import Formatter
from typing import TYPE_CHECKING, Any, Literal, Optional
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field, create_model, model_validator
from pydantic.alias_generators import to_camel

from mecha_mcp.foundation.errors import JsonDict
from mecha_mcp.io.http import FormData, HttpMethod

from .adapters import ToolResponse, structured_response, text_response

if TYPE_CHECKING:
    from mecha_mcp.io.http import ApiClient

ResponseKind = Literal["text", "structured"]
BodyEncoding = Literal["json", "form"]

ALL_FIELDS = "*"
"""Body source meaning: every input field not consumed by the path or query."""


class ToolParams(BaseModel):
    """Base for tool inputs: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmptyParams(ToolParams):
    """Input schema for tools that take no arguments."""


class Endpoint(BaseModel):
    """One tool backed by one backend call.

    Attributes:
        name: Tool name exposed over MCP (kebab-case)
        title: Short human-readable title
        description: Shown to the LLM for tool selection
        category: Resource group ("agents", "datasets", "api-keys")
        method: HTTP verb
        path: Path template under ``/api/``, placeholders are input wire names
        query: Query parameters; values may be templates
        params: Input model validated before dispatch
        body: Input field (wire name) sent as body, ``"*"`` for all remaining fields
        encoding: ``json`` or ``form`` (multipart)
        response: ``text`` or ``structured`` adapter
        output_key: Structured-content key holding the data
        output_type: Type of the data, used for the output schema
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    name: str = Field(..., pattern=r"^[a-z][a-z0-9-]*$")
    title: str
    description: str = Field(..., min_length=10)
    category: str = "general"
    method: HttpMethod
    path: str
    query: dict[str, str] = Field(default_factory=dict)
    params: type[BaseModel] = EmptyParams
    body: str | None = None
    encoding: BodyEncoding = "json"
    response: ResponseKind = "text"
    output_key: str | None = None
    output_type: Any = None

    @model_validator(mode="after")
    def _check_shape(self) -> Endpoint:
        if self.response == "structured" and not self.output_key:
            raise ValueError(f"Endpoint '{self.name}': structured response needs output_key")
        wire = set(self.wire_names)
        if missing := [p for p in self.placeholders if p not in wire]:
            raise ValueError(f"Endpoint '{self.name}': unknown placeholders {missing}")
        if self.body not in (None, ALL_FIELDS) and self.body not in wire:
            raise ValueError(f"Endpoint '{self.name}': unknown body field '{self.body}'")
        return self

    # ─────────────────────────────────────────────────────────────────
    # Schemas
    # ─────────────────────────────────────────────────────────────────

    @property
    def wire_names(self) -> list[str]:
        return [info.alias or name for name, info in self.params.model_fields.items()]

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Input fields consumed by the path and query templates."""
        templates = [self.path, *self.query.values()]
        return tuple(dict.fromkeys(f for t in templates for _, f, _, _ in Formatter().parse(t) if f))

    def input_schema(self) -> JsonDict:
        """JSON schema of the input, by wire name."""
        schema = self.params.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema

    def output_schema(self) -> JsonDict | None:
        """JSON schema of the structured content, None for text tools."""
        if self.response != "structured" or self.output_key is None:
            return None
        data_type = self.output_type if self.output_type is not None else Any
        model = create_model(
            "".join(part.title() for part in self.name.split("-")) + "Output",
            **{self.output_key: (Optional[data_type], ...), "error": (Optional[str], ...)},
        )
        schema = model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema

    # ─────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────

    def validate_params(self, arguments: JsonDict) -> BaseModel:
        """Validate raw tool arguments. Raises pydantic.ValidationError."""
        return self.params.model_validate(arguments)

    def build_request(self, params: BaseModel) -> tuple[str, Any]:
        """Render (path with query, body) from validated input."""
        data = params.model_dump(mode="json", by_alias=True, exclude_none=True)
        path = self.path.format_map({p: quote(str(data[p]), safe="") for p in self.placeholders if p in data})
        if self.query:
            pairs = [(k, v.format_map({p: data.get(p, "") for p in self.placeholders})) for k, v in self.query.items()]
            path = f"{path}?{urlencode(pairs)}"
        return path, self._build_body(data)

    def _build_body(self, data: JsonDict) -> Any:
        if self.body is None:
            return None
        if self.body == ALL_FIELDS:
            payload: Any = {k: v for k, v in data.items() if k not in self.placeholders}
        else:
            payload = data.get(self.body)
        if self.encoding == "form":
            return FormData.from_object(payload or {})
        return payload

    async def call(self, client: ApiClient, params: BaseModel) -> ToolResponse:
        """Issue the backend call and adapt its Result."""
        path, body = self.build_request(params)
        result = await client.execute(path, self.method, body)
        if self.response == "structured":
            return structured_response(result, self.output_key)  # type: ignore[arg-type]
        return text_response(result)
