"""
G-Secure Exception Classes
"""


class GSecureError(Exception):
    """Base exception for G-Secure core operations"""
    pass


class ConfigurationError(GSecureError):
    """Raised when a settings value cannot be parsed"""
    pass


class CipherError(GSecureError):
    """Base exception for keyword cipher operations"""
    pass


class InvalidCipherInput(CipherError):
    """Raised when plaintext or keyword passed to encrypt is unusable"""
    pass


class InvalidKeyOrCorruptData(CipherError):
    """Raised when decryption fails for any reason.

    Wrong keyword, truncated envelope, bad padding and bad encoding all
    surface as this one error with the same message and no chained cause.
    """

    MESSAGE = "Failed to decrypt data - invalid key or corrupted data"

    def __init__(self):
        super().__init__(self.MESSAGE)
