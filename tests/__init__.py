"""Test suite for the connection lifecycle.

- unit/: Entity rules, handlers with mocked repositories, config, logging
- integration/: Store and handlers against a real SQLite database file,
  including concurrent requests and approvals
"""
