"""Character pool construction for password generation."""

from typing import Dict, List

from securepass.app.services.password.models import (
    CharacterClass,
    CharacterPool,
    GenerationConfig,
)

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.?/"

# Characters easily confused when read or retyped
AMBIGUOUS_CHARACTERS = frozenset("0Oo1lI")

ALPHABETS: Dict[CharacterClass, str] = {
    CharacterClass.LOWERCASE: LOWERCASE,
    CharacterClass.UPPERCASE: UPPERCASE,
    CharacterClass.DIGITS: DIGITS,
    CharacterClass.SYMBOLS: SYMBOLS,
}

# Symbols share no character with AMBIGUOUS_CHARACTERS and are never filtered
_AMBIGUITY_FILTERED = frozenset({
    CharacterClass.LOWERCASE,
    CharacterClass.UPPERCASE,
    CharacterClass.DIGITS,
})


def class_alphabet(char_class: CharacterClass, exclude_ambiguous: bool = False) -> str:
    """Return the alphabet of a class, optionally without ambiguous characters."""
    alphabet = ALPHABETS[char_class]
    if exclude_ambiguous and char_class in _AMBIGUITY_FILTERED:
        return "".join(c for c in alphabet if c not in AMBIGUOUS_CHARACTERS)
    return alphabet


def build_pool(config: GenerationConfig) -> CharacterPool:
    """Build the sampling pool and required groups for a configuration.

    The pool concatenates the filtered alphabet of every enabled class in
    fixed order (lowercase, uppercase, digits, symbols). Each enabled class
    whose filtered alphabet is non-empty also contributes a required group.

    Args:
        config: Password generation configuration

    Returns:
        CharacterPool with characters and required groups
    """
    parts: List[str] = []
    required: List[str] = []

    for char_class in config.enabled_classes():
        alphabet = class_alphabet(char_class, config.exclude_ambiguous)
        parts.append(alphabet)
        if alphabet:
            required.append(alphabet)

    return CharacterPool(characters="".join(parts), required_groups=tuple(required))
