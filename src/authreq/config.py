"""Client application configuration for authreq.

Defines the settings a PublicClientApplication is created from: the client
id, its default authority and logging. Stored as JSON at the OS-appropriate
config location (see constants.CONFIG_DIR) unless a path is given.

Example usage:
    config = ClientApplicationConfig.load_from_file(get_default_config_path())
    config.save_to_file(path)
"""

from __future__ import annotations

__all__ = [
    "ClientApplicationConfig",
    "LoggingConfig",
    "get_default_config_path",
]

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from authreq.authority.info import AuthorityInfo
from authreq.authority.resolver import make_source, resolve_authority
from authreq.authority.sources import RawUriSource
from authreq.constants import CONFIG_DIR, CONFIG_FILENAME
from authreq.utils.file_helpers import load_validated_json, require_file_exists, set_secure_permissions


def get_default_config_path() -> Path:
    """Path of the default client config file (<config dir>/client.json)."""
    return Path(CONFIG_DIR) / CONFIG_FILENAME


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Attributes:
        log_level: Minimum level for console and file output.
        log_file: Optional JSONL log file. None logs to stderr only.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING"] = "WARNING"
    log_file: str | None = None


class ClientApplicationConfig(BaseModel):
    """Long-lived settings of a public client application.

    Attributes:
        client_id: Application (client) id registered with the authority.
        authority: Default authority URI; None leaves the choice to the
            executor. Requests can override it with with_authority().
        validate_authority: Validation flag for the default authority.
        logging: Logging configuration.
    """

    client_id: str = Field(min_length=1)
    authority: str | None = None
    validate_authority: bool = True
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}  # Ignore unknown fields for forward compat

    def default_authority(self) -> AuthorityInfo | None:
        """Resolve the configured authority, if any.

        Raises:
            InvalidAuthorityConfiguration: If the configured URI is malformed.
        """
        if self.authority is None:
            return None
        return resolve_authority(
            make_source(RawUriSource, authority_uri=self.authority, validate_authority=self.validate_authority)
        )

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file with owner-only permissions.

        Args:
            config_path: Where to write the file. Parent directories are
                created as needed.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        set_secure_permissions(config_path.parent, is_directory=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)
            f.write("\n")

        set_secure_permissions(config_path)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ClientApplicationConfig":
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not valid JSON or fails validation.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(config_path, cls, file_type="client config")
