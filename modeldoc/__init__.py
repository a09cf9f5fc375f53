"""modeldoc - documentation generator for data-driven model types.

Finds the types that register themselves as models under a short key,
resolves the factory operation that builds each model and the data it
accepts, and writes a JSON document describing every model and its
parameters.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("modeldoc")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from modeldoc.api import build_universe, generate_documents, generate_from_config, write_document
from modeldoc.core.diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from modeldoc.core.docs import DocumentSet, ModelAssembler, ModelDoc, ParameterDoc, Settings
from modeldoc.core.universe import TypeUniverse, load_universe

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "DocumentSet",
    "ModelAssembler",
    "ModelDoc",
    "ParameterDoc",
    "Settings",
    "TypeUniverse",
    "__version__",
    "build_universe",
    "generate_documents",
    "generate_from_config",
    "load_universe",
    "write_document",
]
