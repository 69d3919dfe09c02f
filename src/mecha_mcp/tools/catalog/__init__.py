"""Tool catalog for the Mecha Agent backend.

Each module declares its tools as a tuple of ``Endpoint`` values; the
order here is the order tools are listed to MCP clients.
"""

from ..registry import ToolRegistry
from .agents import AGENT_ENDPOINTS, Agent
from .api_keys import API_KEY_ENDPOINTS, ApiKey, ApiKeyInput
from .datasets import DATASET_ENDPOINTS, Dataset, DatasetDetail

ALL_ENDPOINTS = (*AGENT_ENDPOINTS, *DATASET_ENDPOINTS, *API_KEY_ENDPOINTS)


def build_registry() -> ToolRegistry:
    """Fresh registry holding every catalog tool."""
    return ToolRegistry(ALL_ENDPOINTS)


__all__ = [
    "ALL_ENDPOINTS", "AGENT_ENDPOINTS", "DATASET_ENDPOINTS", "API_KEY_ENDPOINTS",
    "Agent", "Dataset", "DatasetDetail", "ApiKey", "ApiKeyInput",
    "build_registry",
]
