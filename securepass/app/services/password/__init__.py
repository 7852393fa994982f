"""Password generation package.

- models.py: GenerationConfig, CharacterPool, GeneratedSecret and metadata
- pool.py: Alphabets and character pool construction
- strength.py: Entropy and strength estimation
- generator.py: Constrained random sampling
"""

from securepass.app.services.password.generator import generate
from securepass.app.services.password.models import (
    CharacterClass,
    CharacterPool,
    GeneratedSecret,
    GenerationConfig,
    SecretMetadata,
    Strength,
)
from securepass.app.services.password.pool import (
    AMBIGUOUS_CHARACTERS,
    DIGITS,
    LOWERCASE,
    SYMBOLS,
    UPPERCASE,
    build_pool,
    class_alphabet,
)
from securepass.app.services.password.strength import (
    classify,
    describe,
    entropy_bits,
    estimate_strength,
)

__all__ = [
    "CharacterClass",
    "CharacterPool",
    "GeneratedSecret",
    "GenerationConfig",
    "SecretMetadata",
    "Strength",
    "AMBIGUOUS_CHARACTERS",
    "DIGITS",
    "LOWERCASE",
    "SYMBOLS",
    "UPPERCASE",
    "build_pool",
    "class_alphabet",
    "classify",
    "describe",
    "entropy_bits",
    "estimate_strength",
    "generate",
]
