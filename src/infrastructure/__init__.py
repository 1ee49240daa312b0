"""Infrastructure layer - Adapters for the domain ports.

Structure:
- persistence/: SQLAlchemy database, table models and the connection store
- logging/: structlog-based logger adapter
- errors/, enums/: Infrastructure error types and codes

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
