"""Pydantic configuration models for the mixradio client."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    import os
    import re

    if value is None:
        return None

    # Match $VAR or ${VAR}
    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class NetworkConfig(BaseModel):
    """Configuration for HTTP transport behavior."""

    request_timeout: float = Field(30.0, gt=0, description="Seconds before a request times out")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    gzip: bool = Field(True, description="Request gzip-compressed responses")

    model_config = {"extra": "forbid"}


class MusicClientSettings(BaseModel):
    """
    Root configuration for the music client.

    The client secret supports environment variable expansion using
    $VAR or ${VAR} syntax, so it need not be stored in config files.

    Example:
        settings = MusicClientSettings(
            client_id="my-client-id",
            country_code="gb",
        )

    YAML format:
        client_id: my-client-id
        client_secret: $MIXRADIO_CLIENT_SECRET
        country_code: gb
        network:
          request_timeout: 10
    """

    client_id: str = Field(..., min_length=1, description="API client id")
    client_secret: Optional[str] = Field(None, description="Client secret for OAuth token calls")
    country_code: Optional[str] = Field(
        None,
        pattern=r"^[a-zA-Z]{2}$",
        description="ISO 3166-1 alpha-2 country code for catalog calls",
    )
    language: Optional[str] = Field(None, description="Preferred response language (e.g. 'en')")
    api_base_uri: str = Field("http://api.mixrad.io/1.x/", description="Base URI for catalog calls")
    secure_api_base_uri: str = Field(
        "https://sapi.mixrad.io/1.x/",
        description="Base URI for secure (user and token) calls",
    )
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables and normalize the country code."""
        if self.client_secret:
            object.__setattr__(self, "client_secret", _expand_env_var(self.client_secret))
        if self.country_code:
            object.__setattr__(self, "country_code", self.country_code.lower())

    def to_yaml(self) -> str:
        """Serialize settings to a YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "MusicClientSettings":
        """Load settings from a YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "MusicClientSettings":
        """Load settings from a YAML file."""
        return cls.from_yaml(path.read_text())
