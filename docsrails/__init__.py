# docsrails: documentation consistency guard for Swift declarations
"""
docsrails - Keep doc comments honest.

Checks that documented declarations document exactly what their
signature declares: return values, thrown errors and parameters.
"""

__version__ = "1.0.0"

from .config import GuardConfig, load_guard_config
from .guards.issue import DocIssue, ViolationKind
from .guards.valid_docs import (
    RULE_DESCRIPTION,
    ValidDocsGuard,
    invalid_doc_offsets,
)
from .structure import (
    DeclarationKind,
    DeclarationNode,
    comments_by_offset,
)

__all__ = [
    "invalid_doc_offsets",
    "ValidDocsGuard",
    "RULE_DESCRIPTION",
    "DocIssue",
    "ViolationKind",
    "DeclarationKind",
    "DeclarationNode",
    "comments_by_offset",
    "GuardConfig",
    "load_guard_config",
    "__version__",
]
