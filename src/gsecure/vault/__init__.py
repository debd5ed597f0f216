# G-Secure: Vault Module - Secrets at Rest
#
# Keyword-derived AES-256-CBC cipher (PBKDF2-SHA512) and the sealing
# layer that keeps vault entries encrypted before persistence.

from .encryption import (
    CipherEnvelope,
    KeywordCipher,
    encrypt_with_keyword,
    decrypt_with_keyword,
)
from .entries import (
    VaultEntry,
    SealedVaultEntry,
    seal_entry,
    open_entry,
    keyword_matches,
)

__all__ = [
    "CipherEnvelope",
    "KeywordCipher",
    "encrypt_with_keyword",
    "decrypt_with_keyword",
    "VaultEntry",
    "SealedVaultEntry",
    "seal_entry",
    "open_entry",
    "keyword_matches",
]
