from pydantic import BaseModel, Field
from typing import Literal


class LLMSettings(BaseModel):
    provider: Literal["anthropic", "openai"] = "anthropic"
    model: str = "claude-haiku-4-5-20251001"
    api_key_env: str = "ANTHROPIC_API_KEY"
    max_tokens: int = Field(default=4096, gt=0)
    temperature: float = Field(default=0.0, ge=0)
    timeout: int = Field(default=60, gt=0)


class YamlSettings(BaseModel):
    indent: int = Field(default=2, ge=1, le=9)
    line_width: int = Field(default=120, gt=0)


class LimitsConfig(BaseModel):
    max_input_chars: int = Field(default=1_000_000, gt=0)


class HistoryConfig(BaseModel):
    enabled: bool = True
    db_path: str = ".jsonsmith/history.db"
    list_limit: int = Field(default=50, gt=0)
    label_length: int = Field(default=50, gt=0)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, gt=0, lt=65536)
    auth_user: str | None = None
    auth_pass: str | None = None
    realm: str = "JSON Formatter"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_user and self.auth_pass)


class JsonsmithConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    yaml: YamlSettings = Field(default_factory=YamlSettings)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
