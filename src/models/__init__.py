"""Domain models for sheet resolution.

Selection rules (raw SheetRule and the ByName/ByIndex/ByPattern selectors)
and the resolution result returned by the resolver.
"""

from .resolution import ResolutionResult, ResolveMode
from .selection_rule import ByIndex, ByName, ByPattern, SheetRule, SheetSelector, as_selector

__all__ = [
    # Selection rules
    "ByIndex",
    "ByName",
    "ByPattern",
    "SheetRule",
    "SheetSelector",
    "as_selector",
    # Results
    "ResolutionResult",
    "ResolveMode",
]
