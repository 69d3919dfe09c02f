"""HTTP transport for the Mecha Agent REST API.

- ApiClient: encode -> dispatch-with-deadline -> decode, always a Result
- FormData: multipart bodies passed through untouched
- RequestSpec/ApiEnvelope: declared request and response shapes
"""

from .client import API_PREFIX, DEFAULT_TIMEOUT_MS, UNEXPECTED_ERROR, ApiClient
from .models import (
    ALL_METHODS,
    ApiEnvelope,
    FetchResult,
    FormData,
    FormPart,
    HttpMethod,
    RequestSpec,
    parse_envelope,
)

__all__ = [
    "ApiClient", "API_PREFIX", "DEFAULT_TIMEOUT_MS", "UNEXPECTED_ERROR",
    "ALL_METHODS", "ApiEnvelope", "FetchResult", "FormData", "FormPart", "HttpMethod", "RequestSpec",
    "parse_envelope",
]
