"""CraftAI Studio - AI marketing content generation for artisans."""

__version__ = "0.1.0"

from craftai.core.config import CraftAIConfig, config

__all__ = [
    "CraftAIConfig",
    "config",
]
