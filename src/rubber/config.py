"""
Rubber Config — Environment Driven Settings
===========================================

Settings are read from (in order of precedence):
  1. Environment variables (RUBBER_ prefix)
  2. A `.env` file in the working directory
  3. Defaults

Example:
    RUBBER_HOSTS=https://es1:9200,https://es2:9200
    RUBBER_API_KEY=...
    RUBBER_LOG_FORMAT=console
"""

from typing import List, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "http://localhost:9200"


class Settings(BaseSettings):
    """Connection and logging settings for rubber."""

    model_config = SettingsConfigDict(
        env_prefix="RUBBER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    hosts: str = Field(default=DEFAULT_HOST, description="Comma-separated node URLs")
    api_key: Optional[str] = Field(default=None, description="API key authentication")
    username: Optional[str] = Field(default=None, description="Basic auth username")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    request_timeout: float = Field(default=10.0, description="Per request timeout in seconds")
    prefix: str = Field(default="default", description="Initially active connection prefix")

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")

    @property
    def host_list(self) -> List[str]:
        return [h.strip() for h in self.hosts.split(",") if h.strip()] or [DEFAULT_HOST]

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        if self.username and self.password:
            return (self.username, self.password)
        return None
