from .loader import load_config
from .models import (
    HistoryConfig,
    JsonsmithConfig,
    LimitsConfig,
    LLMSettings,
    ServerConfig,
    YamlSettings,
)

__all__ = [
    "HistoryConfig",
    "JsonsmithConfig",
    "LLMSettings",
    "LimitsConfig",
    "ServerConfig",
    "YamlSettings",
    "load_config",
]
