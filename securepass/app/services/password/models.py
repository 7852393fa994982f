"""Password generation data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from securepass.app.exceptions import InvalidLengthError, NoCharacterClassError


class CharacterClass(Enum):
    """Character classes in their fixed pool order."""
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGITS = "digits"
    SYMBOLS = "symbols"

    @property
    def label(self) -> str:
        return self.value


class Strength(str, Enum):
    """Password strength category based on entropy."""
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


@dataclass(frozen=True)
class GenerationConfig:
    """Configuration for password generation.

    Attributes:
        length: Length of the password to generate
        lowercase: Include lowercase letters (a-z)
        uppercase: Include uppercase letters (A-Z)
        digits: Include digits (0-9)
        symbols: Include symbols (!@#$%^&*...)
        exclude_ambiguous: Exclude ambiguous characters (0, O, o, 1, l, I)
    """
    length: int = 16
    lowercase: bool = True
    uppercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False

    def enabled_classes(self) -> List[CharacterClass]:
        """Return enabled character classes in fixed order."""
        flags = {
            CharacterClass.LOWERCASE: self.lowercase,
            CharacterClass.UPPERCASE: self.uppercase,
            CharacterClass.DIGITS: self.digits,
            CharacterClass.SYMBOLS: self.symbols,
        }
        return [cls for cls in CharacterClass if flags[cls]]

    def validate(self) -> None:
        """Validate that the configuration is sensible.

        Raises:
            InvalidLengthError: If length is not positive
            NoCharacterClassError: If no character class is enabled
        """
        if self.length <= 0:
            raise InvalidLengthError(self.length)
        if not self.enabled_classes():
            raise NoCharacterClassError()


@dataclass(frozen=True)
class CharacterPool:
    """Sampling pool derived from a GenerationConfig.

    Attributes:
        characters: Concatenated filtered alphabets of all enabled classes
        required_groups: One non-empty filtered alphabet per enabled class
    """
    characters: str
    required_groups: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.characters)


@dataclass(frozen=True)
class SecretMetadata:
    """Secret-free description of a generated password."""
    length: int
    pool_size: int
    entropy_bits: float
    strength: Strength
    enabled_classes: Tuple[str, ...] = ()

    def summary(self) -> str:
        """Format metadata for display and logs (never includes the password)."""
        return (
            f"Length: {self.length} | Types: {', '.join(self.enabled_classes)} | "
            f"Pool size: {self.pool_size} | Entropy: {self.entropy_bits:.1f} bits | "
            f"Strength: {self.strength.value}"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "length": self.length,
            "pool_size": self.pool_size,
            "entropy_bits": round(self.entropy_bits, 1),
            "strength": self.strength.value,
            "enabled_classes": list(self.enabled_classes),
        }


@dataclass(frozen=True)
class GeneratedSecret:
    """A generated password plus its metadata.

    The value is masked in repr so it cannot leak through logs or tracebacks.
    """
    value: str = field(repr=False)
    metadata: SecretMetadata
