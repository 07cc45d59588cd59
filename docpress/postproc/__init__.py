"""Post-processing applied to generated fragments before they are written."""

from .lint import FragmentLinter
from .markers import NOT_DOCUMENTED, MarkerManager
from .markup import MarkupValidator

__all__ = ["FragmentLinter", "MarkerManager", "MarkupValidator", "NOT_DOCUMENTED"]
