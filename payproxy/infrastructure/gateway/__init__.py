"""Infrastructure adapters for the gateway bounded context."""
