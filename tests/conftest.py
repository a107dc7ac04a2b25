"""Shared fixtures for authreq tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from authreq.application import PublicClientApplication
from authreq.config import ClientApplicationConfig
from authreq.request.executor import TokenResult
from authreq.request.parameters import AcquireTokenParameters
from authreq.telemetry.system_logger import reset_logger


@dataclass(frozen=True)
class FakeAccount:
    """Stand-in for an account reference (opaque to the builders)."""

    home_account_id: str
    username: str


class RecordingExecutor:
    """Executor that records every call and returns a canned token."""

    def __init__(self) -> None:
        self.calls: list[tuple[AcquireTokenParameters, asyncio.Event | None]] = []

    async def execute(
        self,
        parameters: AcquireTokenParameters,
        cancellation: asyncio.Event | None = None,
    ) -> TokenResult:
        self.calls.append((parameters, cancellation))
        return TokenResult(
            access_token="test-access-token",
            expires_on=datetime.now(timezone.utc) + timedelta(hours=1),
            scopes=parameters.scopes,
            account=getattr(parameters, "account", None),
        )


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Give each test a fresh package logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def client_config() -> ClientApplicationConfig:
    return ClientApplicationConfig(
        client_id="test-client-id",
        authority="https://login.microsoftonline.com/common",
    )


@pytest.fixture
def app(client_config: ClientApplicationConfig, executor: RecordingExecutor) -> PublicClientApplication:
    return PublicClientApplication(client_config, executor)


@pytest.fixture
def account() -> FakeAccount:
    return FakeAccount(home_account_id="uid.utid", username="user@contoso.com")
