"""prisma-extractor: TypeScript declarations and metadata from Prisma schemas."""

from .codegen import (
    __version__,
    emit,
    generate_from_schema,
    load_schema,
    resolve_config,
    write_default_config,
)

__all__ = [
    "__version__",
    "emit",
    "generate_from_schema",
    "load_schema",
    "resolve_config",
    "write_default_config",
]
