"""
SmartWiFi Portal - Core
"""
from smartwifi.core.codegen import CODE_ALPHABET, generate
from smartwifi.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token,
)

__all__ = [
    # Codes
    "CODE_ALPHABET",
    "generate",
    # Security
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
]
