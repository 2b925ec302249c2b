from .loader import load_config
from .models import CompassConfig, LLMSettings, PRConfig, VCSConfig

__all__ = [
    "CompassConfig",
    "LLMSettings",
    "PRConfig",
    "VCSConfig",
    "load_config",
]
