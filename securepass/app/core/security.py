import hashlib
import secrets
from abc import ABC, abstractmethod
from typing import MutableSequence, Sequence, TypeVar

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

T = TypeVar("T")


class SecureRandom(ABC):
    """Capability marker for cryptographically secure random sources.

    Password generation only accepts instances of this class, so a
    non-cryptographic generator such as ``random.Random`` can never be
    wired in by accident. Every draw and shuffle goes through
    ``randbelow``.
    """

    @abstractmethod
    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in ``[0, n)``."""

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence uniformly at random."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randbelow(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle a mutable sequence in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]


class SystemSecureRandom(SecureRandom):
    """OS-backed random source using the `secrets` module.

    This is the only source used in production.
    """

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("randbelow requires a positive upper bound")
        return secrets.randbelow(n)


class SeededSecureRandom(SecureRandom):
    """Deterministic ChaCha20 keystream seeded from arbitrary input.

    Reproducible runs for tests that assert structural properties
    (length, class coverage). Never use a fixed seed in production.

    Args:
        seed: Seed material; hashed with SHA-256 into the ChaCha20 key
    """

    _NONCE = b"\x00" * 16
    _CHUNK_SIZE = 256

    def __init__(self, seed: bytes | str | int):
        if isinstance(seed, int):
            seed = str(seed)
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        key = hashlib.sha256(seed).digest()
        self._stream = Cipher(algorithms.ChaCha20(key, self._NONCE), mode=None).encryptor()
        self._buffer = b""

    def _read(self, nbytes: int) -> bytes:
        while len(self._buffer) < nbytes:
            self._buffer += self._stream.update(b"\x00" * self._CHUNK_SIZE)
        data, self._buffer = self._buffer[:nbytes], self._buffer[nbytes:]
        return data

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("randbelow requires a positive upper bound")
        bits = (n - 1).bit_length()
        if bits == 0:
            return 0
        nbytes = (bits + 7) // 8
        excess = nbytes * 8 - bits
        # Rejection sampling keeps the distribution uniform
        while True:
            value = int.from_bytes(self._read(nbytes), "big") >> excess
            if value < n:
                return value


def derive_rate_limit_key(identifier: str) -> int:
    """Derive an opaque 64-bit rate limit key from a client identifier.

    API tokens and IP addresses are hashed with SHA-256 so the raw value
    is never held by the rate limiter.

    Args:
        identifier: Raw client identifier (API token, IP address, ...)

    Returns:
        Signed 64-bit integer key
    """
    digest = hashlib.sha256(identifier.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)
