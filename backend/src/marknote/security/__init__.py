"""Security utilities."""

from .jwt import (
    blacklist_token,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    get_user_id_from_token,
)
from .password import hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_access_token",
    "get_user_id_from_token",
    "blacklist_token",
]
