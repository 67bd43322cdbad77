"""Domain entities and their persistence adapters."""
