"""Registry of the endpoints exposed as tools.

Lookup by name, category filtering, and a prompt-friendly listing. The
server resolves every ``tools/call`` through a registry, so an unknown
name is answered here rather than by the MCP layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .endpoint import Endpoint


class ToolRegistry:
    """Ordered name -> Endpoint mapping.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register_all(AGENT_ENDPOINTS)
        >>> registry["get-agent"].path
        'agents/{agentId}'
    """

    __slots__ = ("_endpoints",)

    def __init__(self, endpoints: Iterable[Endpoint] = ()) -> None:
        self._endpoints: dict[str, Endpoint] = {}
        self.register_all(endpoints)

    def register(self, endpoint: Endpoint) -> None:
        name = endpoint.name
        if name in self._endpoints:
            raise ValueError(f"Tool '{name}' already registered. Use unregister() first.")
        self._endpoints[name] = endpoint

    def register_all(self, endpoints: Iterable[Endpoint]) -> None:
        for endpoint in endpoints:
            self.register(endpoint)

    def unregister(self, name: str) -> bool:
        """Remove a tool by name. Returns True if found."""
        return self._endpoints.pop(name, None) is not None

    def get(self, name: str) -> Endpoint | None:
        return self._endpoints.get(name)

    def __getitem__(self, name: str) -> Endpoint:
        """Get tool by name, raises KeyError if not found."""
        return self._endpoints[name]

    def __contains__(self, name: object) -> bool:
        return name in self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self._endpoints.values())

    # ─────────────────────────────────────────────────────────────────
    # Querying
    # ─────────────────────────────────────────────────────────────────

    def names(self) -> list[str]:
        return list(self._endpoints)

    def list_by_category(self, category: str) -> list[Endpoint]:
        return [e for e in self._endpoints.values() if e.category == category]

    def categories(self) -> set[str]:
        return {e.category for e in self._endpoints.values()}

    def describe(self) -> str:
        """Formatted descriptions of all tools for prompts."""
        return "\n".join(
            f"- **{e.name}** ({e.category}, {e.method} {e.path}): {e.description}"
            for e in self._endpoints.values()
        )
