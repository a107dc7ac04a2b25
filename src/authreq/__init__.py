"""authreq - typed builders for token acquisition requests.

Callers configure a request through chained ``with_*`` calls; validation
turns it into an immutable parameter snapshot that an external executor
performs. Nothing here does network, cache or cryptographic work.

Usage:
    from authreq import AzureCloudInstance, PublicClientApplication

    builder = (
        app.acquire_token_silent(["User.Read"], account)
        .with_aad_authority(AzureCloudInstance.PUBLIC, "contoso.onmicrosoft.com")
        .with_force_refresh(False)
    )
    result = await builder.execute()
"""

from authreq.application import PublicClientApplication
from authreq.authority import (
    AadAuthorityAudience,
    AuthorityInfo,
    AuthoritySource,
    AuthorityType,
    AzureCloudInstance,
    resolve_authority,
)
from authreq.config import ClientApplicationConfig, LoggingConfig
from authreq.exceptions import (
    AuthRequestError,
    GenericValidationFailure,
    InvalidAuthorityConfiguration,
    MissingRequiredParameter,
    RequestValidationError,
)
from authreq.request import (
    AcquireTokenParameterBuilder,
    AcquireTokenParameters,
    AcquireTokenSilentParameterBuilder,
    AcquireTokenSilentParameters,
    ApiId,
    TokenExecutor,
    TokenResult,
)

__all__ = [
    # Application
    "ClientApplicationConfig",
    "LoggingConfig",
    "PublicClientApplication",
    # Authority
    "AadAuthorityAudience",
    "AuthorityInfo",
    "AuthoritySource",
    "AuthorityType",
    "AzureCloudInstance",
    "resolve_authority",
    # Requests
    "AcquireTokenParameterBuilder",
    "AcquireTokenParameters",
    "AcquireTokenSilentParameterBuilder",
    "AcquireTokenSilentParameters",
    "ApiId",
    "TokenExecutor",
    "TokenResult",
    # Errors
    "AuthRequestError",
    "GenericValidationFailure",
    "InvalidAuthorityConfiguration",
    "MissingRequiredParameter",
    "RequestValidationError",
]
