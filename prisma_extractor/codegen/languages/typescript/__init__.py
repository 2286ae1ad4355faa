"""
TypeScript code generator module.

Generates TypeScript enums, union types, interfaces and type aliases
from a parsed Prisma schema.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .naming import create_typescript_sanitizer
from .types import TsType, TsTypeMapper

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "create_typescript_sanitizer",
    "TsType",
    "TsTypeMapper",
]
