"""docsrails guards: documentation checks over declaration trees."""

from pathlib import Path

from ..config import GuardConfig
from ..structure import CommentProvider, DeclarationNode
from .issue import DocIssue, ViolationKind
from .valid_docs import ValidDocsGuard

ALL_GUARD_CLASSES = (
    ValidDocsGuard,
)


def run_all_guards(
    filepath: Path | str | None,
    contents: str | bytes,
    root: DeclarationNode,
    comment_for: CommentProvider,
    config: GuardConfig | None = None,
) -> list[DocIssue]:
    """Run every guard on one file's declaration tree."""
    issues: list[DocIssue] = []
    for guard_cls in ALL_GUARD_CLASSES:
        guard = guard_cls(config)
        issues.extend(guard.scan_file(filepath, contents, root, comment_for))
    return issues


__all__ = [
    "ALL_GUARD_CLASSES",
    "run_all_guards",
    "DocIssue",
    "ViolationKind",
    "ValidDocsGuard",
]
