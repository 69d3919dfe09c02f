"""Request and response shapes for the backend transport.

- HttpMethod: the five verbs the backend accepts
- FormData: ordered multipart form, the counterpart of a browser FormData
- RequestSpec: one outbound call, built and consumed inside ``execute``
- ApiEnvelope: declared shape of every backend response body
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from mecha_mcp.foundation.errors import ErrorInfo, Result

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
ALL_METHODS: frozenset[HttpMethod] = frozenset(["GET", "POST", "PUT", "PATCH", "DELETE"])

FetchResult: TypeAlias = Result[Any, ErrorInfo]

# httpx multipart entry: (field name, (filename | None, content[, content type]))
MultipartEntry: TypeAlias = tuple[str, tuple[str | None, bytes] | tuple[str | None, bytes, str]]


# ─────────────────────────────────────────────────────────────────────────────
# Multipart Form
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class FormPart:
    """Single form part. ``filename`` set means a file upload."""
    name: str
    value: bytes
    filename: str | None = None
    content_type: str | None = None

    def to_entry(self) -> MultipartEntry:
        if self.content_type is not None:
            return self.name, (self.filename, self.value, self.content_type)
        return self.name, (self.filename, self.value)


@dataclass(slots=True)
class FormData:
    """Multipart form body.

    Sent as ``multipart/form-data``; the transport leaves the boundary header
    to the HTTP layer and never re-encodes the parts.

    Example:
        >>> form = FormData.from_object({"agentName": "Helper", "avatar": None})
        >>> [p.name for p in form]
        ['agentName']
    """

    parts: list[FormPart] = field(default_factory=list)

    def append(self, name: str, value: object) -> None:
        """Append a text field. ``None`` values are skipped."""
        if value is None:
            return
        self.parts.append(FormPart(name, _form_value(value).encode("utf-8")))

    def append_file(self, name: str, content: bytes, filename: str, content_type: str | None = None) -> None:
        """Append a file part."""
        self.parts.append(FormPart(name, content, filename, content_type))

    @classmethod
    def from_object(cls, obj: Mapping[str, object] | BaseModel) -> FormData:
        """Build a form from a flat mapping or a pydantic model (dumped by alias)."""
        if isinstance(obj, BaseModel):
            obj = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
        form = cls()
        for name, value in obj.items():
            form.append(name, value)
        return form

    def to_multipart(self) -> list[MultipartEntry]:
        """Entries in the shape httpx accepts for ``files=``."""
        return [part.to_entry() for part in self.parts]

    def get(self, name: str) -> str | None:
        """First text value for ``name``, if any."""
        return next((p.value.decode("utf-8") for p in self.parts if p.name == name and p.filename is None), None)

    def __iter__(self) -> Iterator[FormPart]:
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)


def _form_value(value: object) -> str:
    match value:
        case str(): return value
        case bool(): return "true" if value else "false"
        case int() | float(): return str(value)
        case _: return json.dumps(value, default=str)


# ─────────────────────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────────────────────


class RequestSpec(BaseModel):
    """One outbound request.

    Attributes:
        path: Path under ``{base_url}/api/``, may carry a query string
        method: HTTP verb
        body: ``str``/``bytes`` (verbatim), ``FormData`` (multipart) or any
            JSON-serializable value; ``None`` sends no body
        headers: Merged over the client defaults
        timeout_ms: Deadline for the whole call
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        revalidate_instances="never",
    )

    path: str
    method: HttpMethod = "GET"
    body: Any = Field(default=None, repr=False)
    headers: dict[str, str] = Field(default_factory=dict, repr=False)
    timeout_ms: Annotated[int, Field(gt=0)]

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


# ─────────────────────────────────────────────────────────────────────────────
# Response
# ─────────────────────────────────────────────────────────────────────────────


class ApiEnvelope(BaseModel):
    """Backend response body: ``{"result"?: any, "error"?: string}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    result: Any = None
    error: str | None = None

    @field_validator("error", mode="before")
    @classmethod
    def _stringify_error(cls, v: object) -> object:
        """Non-string error payloads are kept as their JSON text."""
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v, default=str)


_EnvelopeAdapter: TypeAdapter[ApiEnvelope] = TypeAdapter(ApiEnvelope)


def parse_envelope(raw: bytes | str) -> ApiEnvelope:
    """Parse and validate a response body. Raises pydantic.ValidationError."""
    return _EnvelopeAdapter.validate_json(raw)
