"""Protocol adapters exposing the tool registry to external clients."""
