"""
Naming checks for safe code generation.

Schema names are emitted verbatim, so instead of renaming anything these
helpers report names that would clash with the target language.
"""

import re
from typing import Set, Optional

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class NameSanitizer:
    """Checks names against a language's reserved words and builtin types."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()

    def is_valid_identifier(self, name: str) -> bool:
        return bool(IDENTIFIER_RE.match(name))

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words

    def is_builtin_type(self, name: str) -> bool:
        return name in self.builtin_types

    def type_name_problem(self, name: str) -> Optional[str]:
        """
        Describe why a name can't be used as a declared type.

        Returns:
            Problem description, or None when the name is usable
        """
        if not self.is_valid_identifier(name):
            return "is not a valid identifier"
        if self.is_reserved(name):
            return "is a reserved word"
        if self.is_builtin_type(name):
            return "shadows a builtin type"
        return None

    def field_name_problem(self, name: str) -> Optional[str]:
        """Property names may be reserved words; they only need to be identifiers."""
        if not self.is_valid_identifier(name):
            return "is not a valid identifier"
        return None
