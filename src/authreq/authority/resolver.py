"""Authority resolution - every AuthoritySource to one AuthorityInfo.

Resolution is pure string and enum work; no instance metadata is fetched.
The mapping is total: every well-formed source resolves, and every
malformed one raises InvalidAuthorityConfiguration.

Canonical form:
    AAD   https://<host>/<tenant>/
    ADFS  https://<host>/adfs/
    B2C   https://<host>/tfp/<tenant>/<policy>/

Everything is lower-cased and GUID tenants are rendered in hyphenated
form, so "https://Login.MicrosoftOnline.com/{GUID}" and
CloudTenantIdSource(PUBLIC, UUID(...)) compare equal.
"""

from __future__ import annotations

__all__ = [
    "make_source",
    "normalize_tenant",
    "resolve_authority",
]

from typing import Any, TypeVar
from urllib.parse import SplitResult, urlsplit
from uuid import UUID

from pydantic import ValidationError

from authreq.authority.info import AuthorityInfo
from authreq.authority.sources import (
    AadUriSource,
    AdfsUriSource,
    AudienceSource,
    AuthoritySource,
    B2cUriSource,
    CloudAudienceSource,
    CloudTenantIdSource,
    CloudTenantSource,
    CloudUriTenantIdSource,
    CloudUriTenantSource,
    RawUriSource,
    _Source,
)
from authreq.authority.types import AadAuthorityAudience, AuthorityType, AzureCloudInstance
from authreq.constants import (
    ADFS_PATH_SEGMENT,
    B2C_MIN_PATH_SEGMENTS,
    B2C_PATH_SEGMENT,
    HTTPS_DEFAULT_PORT,
    HTTPS_SCHEME,
)
from authreq.exceptions import InvalidAuthorityConfiguration
from authreq.telemetry.system_logger import get_logger

S = TypeVar("S", bound=_Source)

# Characters that cannot appear in a tenant name path segment
_TENANT_FORBIDDEN_CHARS: frozenset[str] = frozenset("/?#\\")


def make_source(source_cls: type[S], **fields: Any) -> S:
    """Build an AuthoritySource, reporting bad field types as authority errors.

    Args:
        source_cls: One of the AuthoritySource models.
        **fields: Model fields (kind is filled in by the model).

    Returns:
        The validated source model.

    Raises:
        InvalidAuthorityConfiguration: If a field has the wrong type
            (e.g. a tenant_id that is not a GUID, a None URI).
    """
    try:
        return source_cls(**fields)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidAuthorityConfiguration(
            f"Invalid authority input '{field}': {first['msg']}",
            value=first.get("input"),
        ) from e


def resolve_authority(source: AuthoritySource) -> AuthorityInfo:
    """Normalize an authority source into its canonical AuthorityInfo.

    Args:
        source: Any AuthoritySource variant.

    Returns:
        AuthorityInfo: The canonical descriptor.

    Raises:
        InvalidAuthorityConfiguration: If the input is malformed.
    """
    logger = get_logger()
    try:
        info = _resolve(source)
    except InvalidAuthorityConfiguration as e:
        logger.warning(
            {
                "event": "authority_rejected",
                "message": f"Rejected authority input: {e.message}",
                "source_kind": source.kind,
            }
        )
        raise

    logger.debug(
        {
            "event": "authority_resolved",
            "source_kind": source.kind,
            "authority_type": info.authority_type.value,
            "authority": info.canonical_authority,
            "validate_authority": info.validate_authority,
        }
    )
    return info


def _resolve(source: AuthoritySource) -> AuthorityInfo:
    match source:
        case RawUriSource(authority_uri=uri, validate_authority=validate):
            host, segments = _split_authority_uri(uri)
            authority_type = _detect_authority_type(segments)
            if authority_type is AuthorityType.B2C:
                validate = False
            return _build(authority_type, host, segments, validate, uri)

        case AadUriSource(authority_uri=uri, validate_authority=validate):
            host, segments = _split_authority_uri(uri)
            if _detect_authority_type(segments) is not AuthorityType.AAD:
                raise InvalidAuthorityConfiguration(
                    f"'{uri}' is not an AAD authority; use the ADFS or B2C variant instead",
                    value=uri,
                )
            return _aad(host, normalize_tenant(segments[0]), validate)

        case AdfsUriSource(authority_uri=uri, validate_authority=validate):
            host, segments = _split_authority_uri(uri)
            if _detect_authority_type(segments) is not AuthorityType.ADFS:
                raise InvalidAuthorityConfiguration(
                    f"ADFS authority must have the form https://<host>/{ADFS_PATH_SEGMENT}/, got '{uri}'",
                    value=uri,
                )
            return _build(AuthorityType.ADFS, host, segments, validate, uri)

        case B2cUriSource(authority_uri=uri):
            host, segments = _split_authority_uri(uri)
            if _detect_authority_type(segments) is not AuthorityType.B2C:
                raise InvalidAuthorityConfiguration(
                    f"B2C authority must have the form https://<host>/{B2C_PATH_SEGMENT}/<tenant>/<policy>/, "
                    f"got '{uri}'",
                    value=uri,
                )
            return _build(AuthorityType.B2C, host, segments, False, uri)

        case CloudUriTenantIdSource(cloud_instance_uri=cloud_uri, tenant_id=tenant_id, validate_authority=validate):
            return _aad(_cloud_instance_host(cloud_uri), normalize_tenant(tenant_id), validate)

        case CloudUriTenantSource(cloud_instance_uri=cloud_uri, tenant=tenant, validate_authority=validate):
            return _aad(_cloud_instance_host(cloud_uri), normalize_tenant(tenant), validate)

        case CloudTenantIdSource(cloud_instance=cloud, tenant_id=tenant_id, validate_authority=validate):
            return _aad(cloud.host, normalize_tenant(tenant_id), validate)

        case CloudTenantSource(cloud_instance=cloud, tenant=tenant, validate_authority=validate):
            return _aad(cloud.host, normalize_tenant(tenant), validate)

        case CloudAudienceSource(cloud_instance=cloud, audience=audience, validate_authority=validate):
            return _aad(cloud.host, _audience_tenant(audience), validate)

        case AudienceSource(audience=audience, validate_authority=validate):
            return _aad(AzureCloudInstance.PUBLIC.host, _audience_tenant(audience), validate)

    raise InvalidAuthorityConfiguration(f"Unsupported authority source: {source!r}", value=source)


# =============================================================================
# Helpers
# =============================================================================


def normalize_tenant(tenant: str | UUID) -> str:
    """Render a tenant as a canonical path segment.

    GUIDs (as UUID or any text form uuid.UUID accepts) become lower-case
    hyphenated; names are stripped and lower-cased.

    Args:
        tenant: Tenant GUID or tenant name (e.g. "contoso.onmicrosoft.com").

    Returns:
        str: Canonical tenant segment.

    Raises:
        InvalidAuthorityConfiguration: If the tenant is empty or contains
            whitespace or URI delimiters.
    """
    if isinstance(tenant, UUID):
        return str(tenant)

    if not isinstance(tenant, str) or not tenant.strip():
        raise InvalidAuthorityConfiguration("Tenant must be a GUID or a non-empty tenant name", value=tenant)

    candidate = tenant.strip()
    try:
        return str(UUID(candidate))
    except ValueError:
        pass  # Not a GUID, treat as a tenant name

    if any(ch.isspace() or ch in _TENANT_FORBIDDEN_CHARS for ch in candidate):
        raise InvalidAuthorityConfiguration(f"Invalid tenant name '{tenant}'", value=tenant)
    return candidate.lower()


def _split_authority_uri(uri: str) -> tuple[str, list[str]]:
    """Return (host, path segments) of an https authority URI, lower-cased."""
    parts = _parse_https_uri(uri, "Authority URI")
    if parts.query or parts.fragment:
        raise InvalidAuthorityConfiguration(f"Authority URI cannot carry a query or fragment: '{uri}'", value=uri)

    segments = [segment.lower() for segment in parts.path.split("/") if segment]
    if not segments:
        raise InvalidAuthorityConfiguration(
            f"Authority URI must have at least one path segment (https://<host>/<tenant>/), got '{uri}'",
            value=uri,
        )
    return _canonical_host(parts), segments


def _cloud_instance_host(cloud_instance_uri: str) -> str:
    """Return the host of a bare cloud instance URI (https://<host>)."""
    parts = _parse_https_uri(cloud_instance_uri, "Cloud instance URI")
    if parts.path.strip("/") or parts.query or parts.fragment:
        raise InvalidAuthorityConfiguration(
            f"Cloud instance URI cannot have a path, query or fragment: '{cloud_instance_uri}'",
            value=cloud_instance_uri,
        )
    return _canonical_host(parts)


def _parse_https_uri(uri: str, label: str) -> SplitResult:
    """Split an https URI, rejecting other schemes, missing hosts and userinfo."""
    try:
        parts = urlsplit(uri.strip())
        # Accessing port validates it
        _ = parts.port
    except ValueError as e:
        raise InvalidAuthorityConfiguration(f"Malformed {label.lower()} '{uri}': {e}", value=uri) from e

    if parts.scheme.lower() != HTTPS_SCHEME:
        raise InvalidAuthorityConfiguration(f"{label} must use https, got '{uri}'", value=uri)
    if not parts.hostname:
        raise InvalidAuthorityConfiguration(f"{label} has no host: '{uri}'", value=uri)
    if parts.username is not None or parts.password is not None:
        raise InvalidAuthorityConfiguration(f"{label} cannot carry user credentials: '{uri}'", value=uri)
    return parts


def _canonical_host(parts: SplitResult) -> str:
    """Lower-case host, with the port only when it is not the https default."""
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    if parts.port is not None and parts.port != HTTPS_DEFAULT_PORT:
        return f"{host}:{parts.port}"
    return host


def _detect_authority_type(segments: list[str]) -> AuthorityType:
    if segments[0] == ADFS_PATH_SEGMENT:
        return AuthorityType.ADFS
    if segments[0] == B2C_PATH_SEGMENT:
        return AuthorityType.B2C
    return AuthorityType.AAD


def _audience_tenant(audience: AadAuthorityAudience) -> str:
    tenant = audience.tenant
    if tenant is None:
        raise InvalidAuthorityConfiguration(
            f"{audience.name} needs a tenant; pass the tenant GUID or name instead of an audience",
            value=audience.value,
        )
    return tenant


def _aad(host: str, tenant: str, validate: bool) -> AuthorityInfo:
    return AuthorityInfo(
        authority_type=AuthorityType.AAD,
        canonical_authority=f"https://{host}/{tenant}/",
        validate_authority=validate,
    )


def _build(
    authority_type: AuthorityType,
    host: str,
    segments: list[str],
    validate: bool,
    uri: str,
) -> AuthorityInfo:
    if authority_type is AuthorityType.B2C:
        if len(segments) < B2C_MIN_PATH_SEGMENTS:
            raise InvalidAuthorityConfiguration(
                f"B2C authority must have the form https://<host>/{B2C_PATH_SEGMENT}/<tenant>/<policy>/, got '{uri}'",
                value=uri,
            )
        path = "/".join(segments[:B2C_MIN_PATH_SEGMENTS])
        return AuthorityInfo(
            authority_type=authority_type,
            canonical_authority=f"https://{host}/{path}/",
            validate_authority=False,
        )

    if authority_type is AuthorityType.AAD:
        return _aad(host, normalize_tenant(segments[0]), validate)

    return AuthorityInfo(
        authority_type=authority_type,
        canonical_authority=f"https://{host}/{segments[0]}/",
        validate_authority=validate,
    )
