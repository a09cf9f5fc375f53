"""Diagnostics collected while documenting models.

Every problem found during a run is appended to a :class:`DiagnosticLog` and
written to the logger at the same time. The log is append-only and safe to
share between worker threads.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from modeldoc.core.logging import get_logger

logger = get_logger(__name__)


class DiagnosticKind(StrEnum):
    """Every kind of problem the engine can report."""

    MISSING_REQUIRED_ANNOTATION = "MissingRequiredAnnotation"
    MISSING_GROUP = "MissingGroup"
    INVALID_DECLARATION_KIND = "InvalidDeclarationKind"
    INVALID_KEY_FORMAT = "InvalidKeyFormat"
    NO_FACTORY_OPERATION = "NoFactoryOperation"
    MULTIPLE_FACTORY_OPERATIONS = "MultipleFactoryOperations"
    INVALID_FACTORY_SHAPE = "InvalidFactoryShape"
    MULTIPLE_DATA_CARRIERS = "MultipleDataCarriers"
    AMBIGUOUS_CHILD_MAPPING = "AmbiguousChildMapping"
    INVALID_CHILD_MAPPING = "InvalidChildMapping"
    UNKNOWN_CHILD_PATH = "UnknownChildPath"
    UNRESOLVABLE_PARAMETER_SET = "UnresolvableParameterSet"
    UNRECOGNIZED_TYPE = "UnrecognizedType"
    TYPE_UNIVERSE_FAILURE = "TypeUniverseFailure"


Severity = Literal["warning", "error"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single reported problem.

    Attributes
    ----------
    kind : DiagnosticKind
        What went wrong
    subject : str
        Qualified name of the declaration (or member) concerned
    message : str
        Human-readable detail
    severity : Severity
        "error" for dropped models and mappings, "warning" for defaulted facets
    """

    kind: DiagnosticKind
    subject: str
    message: str
    severity: Severity = "error"

    def __str__(self) -> str:
        return f"[{self.kind}] {self.subject}: {self.message}"


class DiagnosticLog:
    """Append-only, thread-safe diagnostic sink."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []
        self._lock = threading.Lock()

    def report(
        self,
        kind: DiagnosticKind,
        subject: str,
        message: str,
        severity: Severity = "error",
    ) -> Diagnostic:
        """Record a diagnostic and log it.

        Returns
        -------
        Diagnostic
            The recorded entry
        """
        diagnostic = Diagnostic(kind=kind, subject=subject, message=message, severity=severity)
        with self._lock:
            self._entries.append(diagnostic)

        bound = logger.bind(kind=str(kind), subject=subject)
        if severity == "warning":
            bound.warning("{diagnostic}", diagnostic=diagnostic)
        else:
            bound.error("{diagnostic}", diagnostic=diagnostic)
        return diagnostic

    def kinds(self) -> list[DiagnosticKind]:
        """Kinds of all recorded diagnostics, in report order."""
        with self._lock:
            return [entry.kind for entry in self._entries]

    def for_subject(self, subject: str) -> list[Diagnostic]:
        with self._lock:
            return [entry for entry in self._entries if entry.subject == subject]

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return any(entry.severity == "error" for entry in self._entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        with self._lock:
            return iter(list(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
