"""Render API reference fragments from symbol metadata and documentation comments."""

from .batch import BatchItem, BatchRunner, BuildReport
from .dispatcher import DispatchOutcome, Dispatcher
from .docnode import DocumentationNode
from .models import OutputLanguage, SymbolKind
from .registry import GeneratorRegistry
from .results import Failure, Markup, NotApplicable, NotApplicableReason

__version__ = "0.1.0"

__all__ = [
    "BatchItem",
    "BatchRunner",
    "BuildReport",
    "DispatchOutcome",
    "Dispatcher",
    "DocumentationNode",
    "Failure",
    "GeneratorRegistry",
    "Markup",
    "NotApplicable",
    "NotApplicableReason",
    "OutputLanguage",
    "SymbolKind",
]
