"""Connection settings for the search engine."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from docsearch.configs import settings


class ConnectionConfig(BaseModel):
    """Immutable description of one search engine endpoint.

    Empty `username` and `password` mean unauthenticated, even when
    `use_basic_auth` is on.
    """

    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"] = "http"
    host: str
    port: int = Field(default=9200, ge=1, le=65535)
    username: str = ""
    password: str = ""
    use_ssl: bool = False
    use_basic_auth: bool = True
    verify_certs: bool = False
    request_timeout_sec: float = Field(default=60, gt=0)

    @property
    def url(self) -> str:
        """Return the endpoint as `scheme://host:port`."""
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        """Return True if basic auth should be sent with every request."""
        return self.use_basic_auth and bool(self.username)

    @classmethod
    def from_settings(cls, search_settings: Any = None, **overrides: Any) -> "ConnectionConfig":
        """Build a config from the `search` settings section.

        Keyword overrides that are None are ignored, so CLI options can be
        passed straight through.
        """
        section = search_settings if search_settings is not None else settings.search
        values = {
            "scheme": section["scheme"],
            "host": section["host"],
            "port": section["port"],
            "username": section.get("username", ""),
            "password": section.get("password", ""),
            "use_ssl": section.get("use_ssl", False),
            "use_basic_auth": section.get("use_basic_auth", True),
            "verify_certs": section.get("verify_certs", False),
            "request_timeout_sec": section.get("request_timeout_sec", 60),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
