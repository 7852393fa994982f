"""Password strength estimation.

Entropy is a property of the configuration, not of a particular password:
``length * log2(pool_size)``.

Strength categories:
- Weak: < 50 bits
- Medium: 50-80 bits
- Strong: >= 80 bits
"""

import math

from securepass.app.services.password.models import (
    GenerationConfig,
    SecretMetadata,
    Strength,
)
from securepass.app.services.password.pool import build_pool

MEDIUM_THRESHOLD_BITS = 50.0
STRONG_THRESHOLD_BITS = 80.0


def entropy_bits(config: GenerationConfig) -> float:
    """Calculate the entropy in bits of passwords drawn with this config."""
    pool_size = build_pool(config).size
    if pool_size == 0 or config.length <= 0:
        return 0.0
    return config.length * math.log2(pool_size)


def classify(entropy: float) -> Strength:
    """Map an entropy value in bits to a strength category."""
    if entropy < MEDIUM_THRESHOLD_BITS:
        return Strength.WEAK
    if entropy < STRONG_THRESHOLD_BITS:
        return Strength.MEDIUM
    return Strength.STRONG


def estimate_strength(config: GenerationConfig) -> Strength:
    """Estimate password strength based on entropy.

    An empty pool is Weak.
    """
    if build_pool(config).size == 0:
        return Strength.WEAK
    return classify(entropy_bits(config))


def describe(config: GenerationConfig, strength: Strength) -> SecretMetadata:
    """Assemble displayable metadata for a config and its strength."""
    return SecretMetadata(
        length=config.length,
        pool_size=build_pool(config).size,
        entropy_bits=entropy_bits(config),
        strength=strength,
        enabled_classes=tuple(c.label for c in config.enabled_classes()),
    )
