"""Application layer - Use cases and orchestration.

This layer contains the connection lifecycle use cases following the CQRS
pattern:
- Commands: Request, approve and revoke a connection
- Queries: Read single connections, listings and access checks

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- dtos/: Result dataclasses returned by handlers

The application layer orchestrates domain logic but contains no business rules.
"""
