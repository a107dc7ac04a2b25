"""Application-wide constants for authreq.

Constants that define authority normalization and request defaults.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_DIR",
    "CONFIG_FILENAME",
    # Authority hosts and paths
    "AAD_AUDIENCE_TENANTS",
    "ADFS_PATH_SEGMENT",
    "B2C_PATH_SEGMENT",
    "B2C_MIN_PATH_SEGMENTS",
    "CLOUD_INSTANCE_HOSTS",
    "HTTPS_DEFAULT_PORT",
    "HTTPS_SCHEME",
    # Default validation flags
    "DEFAULT_AAD_VALIDATE_AUTHORITY",
    "DEFAULT_ADFS_VALIDATE_AUTHORITY",
    "DEFAULT_RAW_URI_VALIDATE_AUTHORITY",
    # Error codes
    "ERROR_CODE_INVALID_AUTHORITY",
    "ERROR_CODE_INVALID_PARAMETER",
    "ERROR_CODE_USER_NULL",
]

import os

from platformdirs import user_config_dir

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for logger names and the config directory.
APP_NAME: str = "authreq"

# Platform-specific paths:
# - macOS: ~/Library/Application Support/authreq/
# - Linux: ~/.config/authreq/
# - Windows: %APPDATA%\authreq\
CONFIG_DIR: str = os.path.realpath(user_config_dir(APP_NAME))

CONFIG_FILENAME: str = "client.json"

# ============================================================================
# Authority Hosts and Paths
# ============================================================================

HTTPS_SCHEME: str = "https"
HTTPS_DEFAULT_PORT: int = 443

# Login host per sovereign cloud. Keys are AzureCloudInstance values.
CLOUD_INSTANCE_HOSTS: dict[str, str] = {
    "public": "login.microsoftonline.com",
    "china": "login.chinacloudapi.cn",
    "germany": "login.microsoftonline.de",
    "us_government": "login.microsoftonline.us",
}

# Tenant path segment per AAD audience. AZURE_AD_MY_ORG has no fixed tenant.
AAD_AUDIENCE_TENANTS: dict[str, str] = {
    "azure_ad_and_personal_microsoft_account": "common",
    "azure_ad_multiple_orgs": "organizations",
    "personal_microsoft_account": "consumers",
}

# First path segment that marks an ADFS authority (https://host/adfs/)
ADFS_PATH_SEGMENT: str = "adfs"

# First path segment that marks a B2C authority (https://host/tfp/tenant/policy/)
B2C_PATH_SEGMENT: str = "tfp"
B2C_MIN_PATH_SEGMENTS: int = 3

# ============================================================================
# Default Validation Flags
# ============================================================================

# with_authority(uri) keeps authority validation off unless asked for.
DEFAULT_RAW_URI_VALIDATE_AUTHORITY: bool = False
DEFAULT_AAD_VALIDATE_AUTHORITY: bool = True
DEFAULT_ADFS_VALIDATE_AUTHORITY: bool = True

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_INVALID_AUTHORITY: str = "invalid_authority"
ERROR_CODE_INVALID_PARAMETER: str = "invalid_parameter"
# Silent request without an account: caller must use an interactive flow
ERROR_CODE_USER_NULL: str = "user_null"
