"""
Core utilities for SimpleBiz.
"""
from simplebiz.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from simplebiz.core.session_context import SessionContext, SessionState

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "SessionContext",
    "SessionState",
]
