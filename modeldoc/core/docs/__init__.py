"""Model documentation engine.

Collects the models of a type universe, resolves their factory operations
and data carriers, and documents their parameters with simplified type
names.
"""

from modeldoc.core.docs.assembler import ModelAssembler
from modeldoc.core.docs.collector import ModelCandidate, ModelCollector
from modeldoc.core.docs.factory import FactoryDescriptor, FactoryKind, FactoryResolver
from modeldoc.core.docs.models import DocumentSet, ModelDoc, ParameterDoc, Settings
from modeldoc.core.docs.parameters import ParameterExtractor
from modeldoc.core.docs.type_names import TypeNameResolver, TypeShape, classify

__all__ = [
    "DocumentSet",
    "FactoryDescriptor",
    "FactoryKind",
    "FactoryResolver",
    "ModelAssembler",
    "ModelCandidate",
    "ModelCollector",
    "ModelDoc",
    "ParameterDoc",
    "ParameterExtractor",
    "Settings",
    "TypeNameResolver",
    "TypeShape",
    "classify",
]
