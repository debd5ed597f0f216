# G-Secure: Vault - Keyword Cipher
#
# Keyword → encryption key (PBKDF2-HMAC-SHA512, 100k iterations)
# Data encryption (AES-256-CBC, PKCS7 padding)
# Fresh random salt + IV per encryption
#
# Envelope format: base64( salt(16) + iv(16) + ciphertext )
# The parameters below are not stored in the envelope; changing any of
# them makes existing envelopes undecryptable.

import base64
import binascii
import os
from dataclasses import dataclass

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..exceptions import InvalidCipherInput, InvalidKeyOrCorruptData


@dataclass(frozen=True)
class CipherEnvelope:
    """Salt, IV and ciphertext needed to decrypt with the keyword alone."""

    salt: bytes
    iv: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return self.salt + self.iv + self.ciphertext

    def to_token(self) -> str:
        """Encode for storage (SQL/document stores keep TEXT, so base64)."""
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_token(cls, token) -> "CipherEnvelope":
        """Parse a stored token.

        Raises:
            ValueError: Not base64, or too short / misaligned to be an envelope.
        """
        if isinstance(token, str):
            token = token.encode("ascii", errors="strict")
        if not isinstance(token, bytes):
            raise ValueError("envelope token must be str or bytes")
        try:
            blob = base64.b64decode(token, validate=True)
        except binascii.Error as exc:
            raise ValueError("envelope token is not base64") from exc

        header = KeywordCipher.HEADER_SIZE
        body = len(blob) - header
        if body < KeywordCipher.BLOCK_SIZE or body % KeywordCipher.BLOCK_SIZE:
            raise ValueError("envelope has an invalid length")

        return cls(
            salt=blob[:KeywordCipher.SALT_LENGTH],
            iv=blob[KeywordCipher.SALT_LENGTH:header],
            ciphertext=blob[header:],
        )


class KeywordCipher:
    """
    Encrypts and decrypts text with a key derived from a user keyword.

    Flow:
    1. Random 16-byte salt and 16-byte IV are generated per call
    2. PBKDF2-SHA512 derives a 256-bit key from keyword + salt
    3. AES-256-CBC encrypts the PKCS7-padded UTF-8 plaintext
    4. salt + IV + ciphertext travel together as one base64 token

    Decryption failures of every kind raise ``InvalidKeyOrCorruptData``.
    """

    PBKDF2_ITERATIONS = 100_000
    KEY_LENGTH = 32    # 256 bits for AES-256
    SALT_LENGTH = 16
    IV_LENGTH = 16     # AES block size
    BLOCK_SIZE = 16

    HEADER_SIZE = SALT_LENGTH + IV_LENGTH

    @staticmethod
    def derive_key(keyword, salt: bytes) -> bytes:
        """Derive a 256-bit key from keyword (str or UTF-8 bytes) + salt via PBKDF2-SHA512."""
        if isinstance(keyword, str):
            keyword = keyword.encode("utf-8")
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA512(),
            length=KeywordCipher.KEY_LENGTH,
            salt=salt,
            iterations=KeywordCipher.PBKDF2_ITERATIONS,
            backend=default_backend(),
        )
        return kdf.derive(keyword)

    @staticmethod
    def _cipher(key: bytes, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend())

    @staticmethod
    def encrypt(plaintext: str, keyword: str) -> str:
        """
        Encrypt plaintext under a keyword.

        Args:
            plaintext: Text to protect (may be empty)
            keyword: User's keyword; never stored

        Returns:
            Base64 envelope token

        Raises:
            InvalidCipherInput: plaintext is not a str, keyword is empty, or
                either is not encodable as UTF-8
        """
        if not isinstance(plaintext, str):
            raise InvalidCipherInput("Plaintext must be a string")
        if not keyword or not isinstance(keyword, str):
            raise InvalidCipherInput("Keyword must be a non-empty string")
        try:
            data = plaintext.encode("utf-8")
            secret = keyword.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidCipherInput("Plaintext and keyword must be valid UTF-8 text") from None

        salt = os.urandom(KeywordCipher.SALT_LENGTH)
        iv = os.urandom(KeywordCipher.IV_LENGTH)
        key = KeywordCipher.derive_key(secret, salt)

        padder = padding.PKCS7(KeywordCipher.BLOCK_SIZE * 8).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = KeywordCipher._cipher(key, iv).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return CipherEnvelope(salt=salt, iv=iv, ciphertext=ciphertext).to_token()

    @staticmethod
    def decrypt(token: str, keyword: str) -> str:
        """
        Decrypt an envelope token.

        A malformed token still costs one key derivation, so a caller
        cannot tell "corrupt" from "wrong keyword" by timing either.

        Raises:
            InvalidKeyOrCorruptData: wrong keyword, corrupt or truncated token
        """
        try:
            envelope = CipherEnvelope.from_token(token)
        except ValueError:
            envelope = None

        keyword_ok = isinstance(keyword, str)
        salt = envelope.salt if envelope else bytes(KeywordCipher.SALT_LENGTH)

        try:
            key = KeywordCipher.derive_key(keyword if keyword_ok else "", salt)
            if envelope is None or not keyword_ok:
                raise ValueError("unusable envelope or keyword")

            decryptor = KeywordCipher._cipher(key, envelope.iv).decryptor()
            padded = decryptor.update(envelope.ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(KeywordCipher.BLOCK_SIZE * 8).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()

            return data.decode("utf-8")
        except ValueError:
            # UnicodeDecodeError is a ValueError too
            raise InvalidKeyOrCorruptData() from None


def encrypt_with_keyword(plaintext: str, keyword: str) -> str:
    """Encrypt ``plaintext`` into a base64 envelope token."""
    return KeywordCipher.encrypt(plaintext, keyword)


def decrypt_with_keyword(token: str, keyword: str) -> str:
    """Decrypt a token produced by ``encrypt_with_keyword``."""
    return KeywordCipher.decrypt(token, keyword)
