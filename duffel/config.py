from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "https://api.duffel.com"
API_VERSION = "v2"
CLIENT_VERSION = "0.1.0"


class Settings(BaseSettings):
    api_token: str = ""
    api_host: str = DEFAULT_HOST
    api_version: str = API_VERSION
    debug: bool = False
    user_agent: str = ""
    timeout: float = 30.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DUFFEL_", env_file=".env", env_file_encoding="utf-8"
    )


settings = Settings()


class Credentials(BaseModel):
    """Everything a client needs to talk to the API. Frozen once built."""

    model_config = ConfigDict(frozen=True)

    token: str
    host: str = DEFAULT_HOST
    version: str = API_VERSION
    debug: bool = False
    user_agent: str = ""
    timeout: float = 30.0

    @classmethod
    def resolve(
        cls,
        token: str | None = None,
        *,
        host: str | None = None,
        version: str | None = None,
        debug: bool | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        source: Settings | None = None,
    ) -> Credentials:
        """Merge explicit arguments over *source* (the env-backed settings)."""
        source = source or settings
        token = token if token is not None else source.api_token
        if not token:
            raise ValueError(
                "A Duffel access token is required (pass token= or set DUFFEL_API_TOKEN)"
            )
        return cls(
            token=token,
            host=(host or source.api_host).rstrip("/"),
            version=version or source.api_version,
            debug=source.debug if debug is None else debug,
            user_agent=source.user_agent if user_agent is None else user_agent,
            timeout=source.timeout if timeout is None else timeout,
        )

    @property
    def user_agent_header(self) -> str:
        base = f"duffel-python/{CLIENT_VERSION}"
        return f"{base} {self.user_agent}" if self.user_agent else base
