"""Configuration enums for type-safe settings.

They inherit from str to keep env var parsing and serialization simple.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environments.

    Controls environment-specific behavior like log verbosity.
    """

    LOCAL = "local"
    TEST = "test"
    DEV = "dev"
    PRD = "prd"
