"""Application environment types.

Used by Settings to pick environment-specific behavior such as the log
renderer (human-readable console vs JSON).

Environments:
- DEVELOPMENT: Local development, colored console logs
- TESTING: Automated test execution against an isolated database
- CI: Continuous integration
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
