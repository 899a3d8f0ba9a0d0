"""Password-derived AES encryption for store files."""

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt


class StoreCipher:
    """
    Encrypts the serialized store as a single opaque blob.

    The key is derived from a password with scrypt and a fixed salt, so the
    same password always yields the same key and a file can be reopened by a
    later process. Each encryption uses a fresh IV, stored in front of the
    ciphertext as ``<iv-hex>:<ciphertext-hex>``.
    """

    SALT = b'salt'
    KEY_LENGTH = 32
    IV_LENGTH = 16

    def __init__(self, password: str):
        """
        Initialize cipher.

        Args:
            password: Password the AES-256 key is derived from.
        """
        self._key = self.derive_key(password)

    @classmethod
    def derive_key(cls, password: str) -> bytes:
        """Derive a 32-byte key from a password using scrypt."""
        kdf = Scrypt(
            salt=cls.SALT,
            length=cls.KEY_LENGTH,
            n=2 ** 14,
            r=8,
            p=1,
        )
        return kdf.derive(password.encode())

    def encrypt(self, text: str) -> str:
        """Encrypt text with AES-256-CBC under a random IV."""
        iv = os.urandom(self.IV_LENGTH)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(text.encode('utf-8')) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        encrypted = encryptor.update(padded) + encryptor.finalize()

        return iv.hex() + ':' + encrypted.hex()

    def decrypt(self, data: str) -> str:
        """
        Decrypt text produced by :meth:`encrypt`.

        Raises:
            ValueError: If the data is not hex, the padding is invalid
                (usually a wrong password) or the result is not UTF-8.
        """
        iv_hex, _, encrypted_hex = data.partition(':')
        iv = bytes.fromhex(iv_hex)
        encrypted = bytes.fromhex(encrypted_hex)

        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(encrypted) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        decrypted = unpadder.update(padded) + unpadder.finalize()

        return decrypted.decode('utf-8')
