"""
PTCG Vault services.

Auto-build deck assembly and account authentication.
"""

from ptcgvault.services.auth import (
    InvalidTokenError,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from ptcgvault.services.auto_build import (
    DECK_SIZE,
    DEFAULT_DECK_NAME,
    MAX_BASIC_ENERGY_COPIES,
    MAX_COPIES,
    TYPE_QUOTAS,
    Selection,
    auto_build,
    copy_limit,
    select_cards,
)

__all__ = [
    "DECK_SIZE",
    "DEFAULT_DECK_NAME",
    "InvalidTokenError",
    "MAX_BASIC_ENERGY_COPIES",
    "MAX_COPIES",
    "Selection",
    "TYPE_QUOTAS",
    "auto_build",
    "copy_limit",
    "hash_password",
    "issue_token",
    "select_cards",
    "verify_password",
    "verify_token",
]
