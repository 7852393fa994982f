"""Cryptographically secure password generation."""

from typing import List

from securepass.app.core.security import SecureRandom
from securepass.app.exceptions import EmptyPoolError, LengthTooShortForClassesError
from securepass.app.services.password.models import GeneratedSecret, GenerationConfig
from securepass.app.services.password.pool import build_pool
from securepass.app.services.password.strength import describe, estimate_strength


def generate(config: GenerationConfig, rng: SecureRandom) -> GeneratedSecret:
    """Generate a cryptographically secure random password.

    One character is drawn from each required group, the remaining
    positions are drawn from the full pool, and the whole buffer is
    shuffled so the guaranteed characters do not sit at the start.

    Args:
        config: Password configuration specifying length and character types
        rng: Cryptographically secure random source (SystemSecureRandom in production)

    Returns:
        GeneratedSecret with the password and its metadata

    Raises:
        TypeError: If rng is not a SecureRandom
        InvalidLengthError: If length is not positive
        NoCharacterClassError: If no character class is enabled
        EmptyPoolError: If the derived pool has no characters
        LengthTooShortForClassesError: If length < number of required groups
    """
    if not isinstance(rng, SecureRandom):
        raise TypeError(
            f"generate() requires a SecureRandom source, got {type(rng).__name__}"
        )

    config.validate()

    pool = build_pool(config)
    if pool.size == 0:
        raise EmptyPoolError()

    required_count = len(pool.required_groups)
    if config.length < required_count:
        raise LengthTooShortForClassesError(config.length, required_count)

    chars: List[str] = [rng.choice(group) for group in pool.required_groups]
    chars.extend(rng.choice(pool.characters) for _ in range(config.length - required_count))
    rng.shuffle(chars)

    return GeneratedSecret(
        value="".join(chars),
        metadata=describe(config, estimate_strength(config)),
    )
