"""Core components of CraftAI Studio.

Modules
-------
config
    Pydantic Settings configuration and the global ``config`` instance.
records
    Immutable record models for every stored entity.
store
    In-memory record storage with per-user listing and analytics counters.
activity
    Recent-activity feed assembly.
generator
    Gemini client wrapper performing one model call per operation.
prompt_builder
    Prompt text for each generator operation.
errors
    Generator failure types and upstream error classification.
"""

from craftai.core.errors import (
    GeneratorError,
    InvalidCredentialError,
    ServiceOverloadedError,
)
from craftai.core.store import MemoryStore

__all__ = [
    "GeneratorError",
    "InvalidCredentialError",
    "MemoryStore",
    "ServiceOverloadedError",
]
