# G-Secure: Vault - Entry Sealing
#
# Vault entries are encrypted with the keyword cipher before they reach
# the persistence layer. Only the website stays in clear text so that
# entries can be listed without the keyword.
#
# The keyword is never stored. Ownership checks (e.g. before deletion)
# prove knowledge of the keyword by decrypting, not by comparison.

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from ..exceptions import InvalidKeyOrCorruptData
from .encryption import KeywordCipher

logger = logging.getLogger(__name__)


@dataclass
class VaultEntry:
    """Plaintext credential; exists only in memory."""

    website: str
    username: str
    password: str
    notes: str = ""

    def __repr__(self) -> str:
        return f"VaultEntry(website={self.website!r}, username=<hidden>, password=<hidden>)"


@dataclass(frozen=True)
class SealedVaultEntry:
    """Credential as persisted: secret fields are keyword-cipher tokens."""

    website: str
    username: str
    password: str
    notes: str
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SealedVaultEntry":
        return cls(
            website=data["website"],
            username=data["username"],
            password=data["password"],
            notes=data["notes"],
            created_at=data["created_at"],
        )


def seal_entry(entry: VaultEntry, keyword: str) -> SealedVaultEntry:
    """Encrypt username, password and notes of ``entry`` under ``keyword``.

    Raises:
        InvalidCipherInput: keyword empty or a field is not a string.
    """
    sealed = SealedVaultEntry(
        website=entry.website,
        username=KeywordCipher.encrypt(entry.username, keyword),
        password=KeywordCipher.encrypt(entry.password, keyword),
        notes=KeywordCipher.encrypt(entry.notes or "", keyword),
    )
    logger.debug("Sealed vault entry for %s", entry.website)
    return sealed


def open_entry(sealed: SealedVaultEntry, keyword: str) -> VaultEntry:
    """Decrypt a sealed entry.

    Raises:
        InvalidKeyOrCorruptData: wrong keyword or damaged fields.
    """
    return VaultEntry(
        website=sealed.website,
        username=KeywordCipher.decrypt(sealed.username, keyword),
        password=KeywordCipher.decrypt(sealed.password, keyword),
        notes=KeywordCipher.decrypt(sealed.notes, keyword),
    )


def keyword_matches(sealed: SealedVaultEntry, keyword: str) -> bool:
    """Return True if ``keyword`` decrypts the entry's password field."""
    try:
        KeywordCipher.decrypt(sealed.password, keyword)
    except InvalidKeyOrCorruptData:
        logger.info("Keyword check failed for vault entry %s", sealed.website)
        return False
    return True
