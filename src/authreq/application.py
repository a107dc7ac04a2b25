"""Application context that owns the executor and creates request builders."""

from __future__ import annotations

__all__ = ["PublicClientApplication"]

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from authreq.authority.info import AuthorityInfo
from authreq.config import ClientApplicationConfig, get_default_config_path
from authreq.request.executor import TokenExecutor
from authreq.request.silent import AcquireTokenSilentParameterBuilder
from authreq.telemetry.system_logger import configure_logging


class PublicClientApplication:
    """A public client application.

    Holds the long-lived configuration and the executor that performs
    validated requests. Builders created here hand their parameters to
    this executor; applying application defaults (such as the configured
    authority when a request sets none) is left to the executor.

    Usage:
        app = PublicClientApplication(ClientApplicationConfig(client_id="..."), executor)
        result = await app.acquire_token_silent(["User.Read"], account).execute()
    """

    def __init__(self, config: ClientApplicationConfig, executor: TokenExecutor) -> None:
        self._config = config
        self._executor = executor
        self._authority = config.default_authority()

    @classmethod
    def from_config_file(
        cls,
        executor: TokenExecutor,
        config_path: Path | None = None,
    ) -> "PublicClientApplication":
        """Load configuration from disk, apply its logging settings, build the app.

        Args:
            executor: Executor for validated requests.
            config_path: Config file; defaults to get_default_config_path().
        """
        config = ClientApplicationConfig.load_from_file(config_path or get_default_config_path())
        configure_logging(config.logging)
        return cls(config, executor)

    @property
    def config(self) -> ClientApplicationConfig:
        return self._config

    @property
    def executor(self) -> TokenExecutor:
        return self._executor

    @property
    def authority(self) -> AuthorityInfo | None:
        """The configured default authority, resolved once at startup."""
        return self._authority

    def acquire_token_silent(self, scopes: Iterable[str], account: Any) -> AcquireTokenSilentParameterBuilder:
        """Start a silent token request for ``account``.

        Args:
            scopes: Scopes to request.
            account: Account previously signed in (opaque).

        Returns:
            A builder; configure further and call execute().
        """
        return AcquireTokenSilentParameterBuilder.create(self, scopes, account)
