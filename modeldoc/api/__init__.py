"""API layer for modeldoc.

Functions shared by the command-line interface and by build scripts that
call modeldoc directly.

Available submodules
--------------------
- documentation: Universe construction, document generation and emission
"""

from modeldoc.api import documentation
from modeldoc.api.documentation import (
    build_universe,
    generate_documents,
    generate_from_config,
    write_document,
)

__all__ = [
    "build_universe",
    "documentation",
    "generate_documents",
    "generate_from_config",
    "write_document",
]
