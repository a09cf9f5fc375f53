"""Model documentation generation.

The functions here wire the collaborators around the engine: they build a
type universe from configuration, run the assembler and write the
resulting document. The CLI is a thin layer over them.

Usage
-----
::

    from modeldoc import api
    from modeldoc.core.config import load_config

    config = load_config()
    document_set = api.documentation.generate_from_config(config)
    api.documentation.write_document(document_set, config.output)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from modeldoc.core.config.models import ModelDocConfig
from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.docs.assembler import ModelAssembler
from modeldoc.core.docs.models import DocumentSet, Settings
from modeldoc.core.exceptions import ConfigurationError, TypeUniverseError
from modeldoc.core.keys import KEY_PATTERN
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.loader import load_universe
from modeldoc.core.universe.reflection import build_universe_from_modules
from modeldoc.core.universe.universe import TypeUniverse

logger = get_logger(__name__)


def build_universe(
    modules: Iterable[str] = (),
    universe_path: str | Path | None = None,
    *,
    recursive: bool = True,
    docstrings_as_descriptions: bool = False,
) -> TypeUniverse:
    """Build the type universe from a description file or from Python modules.

    Parameters
    ----------
    modules : Iterable[str]
        Python modules to reflect over when no description file is given
    universe_path : str | Path | None
        JSON/YAML universe description; takes precedence over ``modules``
    recursive : bool
        Also scan submodules of packages
    docstrings_as_descriptions : bool
        Fall back to class docstrings for model descriptions

    Returns
    -------
    TypeUniverse
        The universe to document

    Raises
    ------
    ConfigurationError
        If neither modules nor a description file is given
    TypeUniverseError
        If the universe cannot be built
    """
    if universe_path is not None:
        return load_universe(universe_path)

    module_names = list(modules)
    if not module_names:
        raise ConfigurationError(
            "modules", "no modules to scan; set 'modules' or 'universe' in the configuration"
        )
    return build_universe_from_modules(
        module_names,
        recursive=recursive,
        docstrings_as_descriptions=docstrings_as_descriptions,
    )


def generate_documents(
    universe: TypeUniverse,
    settings: Settings,
    *,
    key_pattern: str = KEY_PATTERN,
    max_workers: int = 1,
    diagnostics: DiagnosticLog | None = None,
    capture_time: int | None = None,
) -> DocumentSet:
    """Document every model of ``universe``.

    Parameters
    ----------
    universe : TypeUniverse
        Universe to document
    settings : Settings
        Project settings copied into the document set
    key_pattern : str
        Pattern every model key must match
    max_workers : int
        Threads used to resolve models
    diagnostics : DiagnosticLog | None
        Collects the problems of the run; pass one to inspect them afterwards
    capture_time : int | None
        Fixed capture time in epoch milliseconds; the current time when None

    Returns
    -------
    DocumentSet
        Documents sorted by model key

    Raises
    ------
    TypeUniverseError
        If querying the universe fails; the run is aborted
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    assembler = ModelAssembler(
        universe,
        settings,
        diagnostics=diagnostics,
        key_pattern=key_pattern,
        max_workers=max_workers,
        capture_time=capture_time,
    )
    try:
        return assembler.assemble()
    except TypeUniverseError as e:
        diagnostics.report(DiagnosticKind.TYPE_UNIVERSE_FAILURE, "<universe>", str(e))
        raise


def generate_from_config(
    config: ModelDocConfig, diagnostics: DiagnosticLog | None = None
) -> DocumentSet:
    """Build the universe described by ``config`` and document it."""
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    try:
        universe = build_universe(
            config.modules,
            config.universe,
            recursive=config.recursive,
            docstrings_as_descriptions=config.docstrings_as_descriptions,
        )
    except TypeUniverseError as e:
        diagnostics.report(DiagnosticKind.TYPE_UNIVERSE_FAILURE, "<universe>", str(e))
        raise

    return generate_documents(
        universe,
        config.settings,
        key_pattern=config.key_pattern,
        max_workers=config.workers,
        diagnostics=diagnostics,
    )


def write_document(document_set: DocumentSet, path: str | Path, indent: int | None = 2) -> Path:
    """Write ``document_set`` as JSON, creating parent directories.

    Returns
    -------
    Path
        The written file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document_set.to_json(indent=indent), encoding="utf-8")
    logger.info(
        "Wrote {count} models to {path}", count=len(document_set.elements), path=output_path
    )
    return output_path
