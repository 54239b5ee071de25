"""Valid Docs Guard: flags doc comments that disagree with their declaration.

For every documented declaration the guard compares what the comment claims
(a return value, a thrown error, a list of parameters) with what the
signature region actually declares. Violations are reported as the byte
offsets of the offending declarations, children before parents.
"""

import logging
from pathlib import Path

from core.logger import check_timer, log_check_complete, log_error

from ..config import GuardConfig
from ..structure import (
    CommentProvider,
    DeclarationKind,
    DeclarationNode,
    as_bytes,
    location_for_offset,
    parameter_descriptors,
    signature_region,
)
from . import _doc_patterns as patterns
from .evidence import (
    CommentEvidence,
    SignatureEvidence,
    comment_evidence,
    signature_evidence,
)
from .issue import REASON_MESSAGES, DocIssue, ViolationKind

logger = logging.getLogger(__name__)

GUARD_NAME = "valid_docs"

RULE_DESCRIPTION = {
    "identifier": GUARD_NAME,
    "name": "Valid Docs",
    "description": "Documented declarations should be valid.",
    "non_triggering_examples": [
        "/// docs\npublic func a() {}\n",
        "/// docs\n/// - parameter param: this is void\npublic func a(param: Void) {}\n",
        "/// docs\n/// - parameter label: this is void\npublic func a(label param: Void) {}",
        "/// docs\n/// - parameter param: this is void\npublic func a(label param: Void) {}",
        "/// docs\n/// - returns: false\npublic func no() -> Bool { return false }",
        "/// Returns false\npublic func no() -> Bool { return false }",
        "/// Returns false\nvar no: Bool { return false }",
        "/// docs\nvar no: Bool { return false }",
        "/// docs\n/// - throws: NSError\nfunc a() throws {}",
    ],
    "triggering_examples": [
        "/// docs\npublic func a(param: Void) {}\n",
        "/// docs\n/// - parameter invalid: this is void\npublic func a(param: Void) {}",
        "/// docs\n/// - parameter invalid: this is void\npublic func a(label param: Void) {}",
        "/// docs\n/// - parameter invalid: this is void\npublic func a() {}",
        "/// docs\npublic func no() -> Bool { return false }",
        "/// Returns false\npublic func a() {}",
        "/// docs\n/// - throws: NSError\nfunc a() {}",
        "/// docs\nfunc a() throws {}",
    ],
}


# --------------------------------------------------------------
# Declaration filter
# --------------------------------------------------------------

def is_eligible(node: DeclarationNode, comment: str | None) -> bool:
    """Whether *node* is checked at all. Children are walked regardless."""
    if node.kind is None or node.kind is DeclarationKind.VAR_PARAMETER:
        return False
    if not comment:
        return False
    return patterns.SUPPRESSION_MARKER not in comment


# --------------------------------------------------------------
# Consistency evaluator
# --------------------------------------------------------------

def _parameters_mismatch(
    signature: SignatureEvidence, comment: CommentEvidence
) -> bool:
    # Batched "- parameters:" lists are not parsed, so never judged.
    if comment.is_batched:
        return False
    if len(comment.parameter_names) != len(signature.parameters):
        return True
    # Strictly positional: a reordered but complete list still mismatches.
    return not all(
        parameter.accepts(claimed)
        for claimed, parameter in zip(
            comment.parameter_names, signature.parameters
        )
    )


def compare_evidence(
    signature: SignatureEvidence, comment: CommentEvidence
) -> list[ViolationKind]:
    """Every check that fails for this pair of evidence sets."""
    reasons: list[ViolationKind] = []
    if signature.has_return_arrow and not comment.claims_return:
        reasons.append(ViolationKind.MISSING_RETURN)
    if not signature.produces_value and comment.claims_return:
        reasons.append(ViolationKind.SUPERFLUOUS_RETURN)
    if signature.has_throws != comment.claims_throws:
        reasons.append(ViolationKind.THROWS_MISMATCH)
    if _parameters_mismatch(signature, comment):
        reasons.append(ViolationKind.PARAMETER_MISMATCH)
    return reasons


def evaluate_declaration(
    node: DeclarationNode, region: str, comment: str
) -> list[ViolationKind]:
    """Run the four checks for one eligible declaration."""
    signature = signature_evidence(
        region, node.kind, parameter_descriptors(node)
    )
    return compare_evidence(signature, comment_evidence(comment))


def _own_reasons(
    node: DeclarationNode, contents: bytes, comment_for: CommentProvider
) -> list[ViolationKind]:
    """Reasons *node* itself is flagged; empty when evidence is missing."""
    if node.kind is None or node.offset is None or node.body_offset is None:
        return []
    comment = comment_for(node)
    if not is_eligible(node, comment):
        return []
    region = signature_region(contents, node)
    if region is None:
        logger.debug("Unusable signature range at offset %s", node.offset)
        return []
    reasons = evaluate_declaration(node, region, comment)
    if reasons:
        logger.debug(
            "Invalid docs at offset %s: %s",
            node.offset,
            ", ".join(r.value for r in reasons),
        )
    return reasons


# --------------------------------------------------------------
# Tree reducer
# --------------------------------------------------------------

def collect_violations(
    contents: str | bytes,
    root: DeclarationNode,
    comment_for: CommentProvider,
) -> list[tuple[int, list[ViolationKind]]]:
    """``(offset, reasons)`` for every flagged node, children first."""
    data = as_bytes(contents)
    found: list[tuple[int, list[ViolationKind]]] = []

    def _walk(node: DeclarationNode) -> None:
        for child in node.substructure:
            _walk(child)
        reasons = _own_reasons(node, data, comment_for)
        if reasons:
            found.append((node.offset, reasons))

    _walk(root)
    return found


def invalid_doc_offsets(
    contents: str | bytes,
    root: DeclarationNode,
    comment_for: CommentProvider,
) -> list[int]:
    """Byte offsets of declarations whose docs disagree with them."""
    return [
        offset for offset, _ in collect_violations(contents, root, comment_for)
    ]


# --------------------------------------------------------------
# Guard
# --------------------------------------------------------------

class ValidDocsGuard:
    """Reports documented declarations whose docs are invalid."""

    def __init__(self, config: GuardConfig | None = None):
        self.config = config or GuardConfig()

    def scan_file(
        self,
        filepath: Path | str | None,
        contents: str | bytes,
        root: DeclarationNode,
        comment_for: CommentProvider,
    ) -> list[DocIssue]:
        """Check one file's declaration tree and describe each violation."""
        if not self.config.enabled:
            return []

        fname = str(filepath) if filepath is not None else None
        data = as_bytes(contents)
        try:
            with check_timer() as timer:
                violations = collect_violations(data, root, comment_for)
        except Exception as exc:
            log_error(GUARD_NAME, f"{type(exc).__name__} during check")
            raise

        issues = [
            self._issue(offset, reasons, data, fname)
            for offset, reasons in violations
        ]
        log_check_complete(GUARD_NAME, fname, len(issues), timer.ms)
        return issues

    def _issue(
        self,
        offset: int,
        reasons: list[ViolationKind],
        data: bytes,
        fname: str | None,
    ) -> DocIssue:
        line, column = location_for_offset(data, offset)
        details = "; ".join(REASON_MESSAGES[r] for r in reasons)
        return DocIssue(
            guard=GUARD_NAME,
            severity=self.config.severity,
            message=f"Documented declaration is invalid: {details}",
            offset=offset,
            file=fname,
            line=line,
            column=column,
            reasons=reasons,
        )
