"""Signature and comment evidence for the docs guard."""

from dataclasses import dataclass

from ..structure import VARIABLE_KINDS, DeclarationKind, ParameterDescriptor
from . import _doc_patterns as patterns


@dataclass(frozen=True)
class SignatureParameter:
    """A parameter as callers see it: external label plus internal name."""

    label: str
    name: str

    def accepts(self, claimed: str) -> bool:
        return claimed in (self.label, self.name)


@dataclass(frozen=True)
class SignatureEvidence:
    """Facts read off a declaration's signature region."""

    has_return_arrow: bool
    produces_value: bool
    has_throws: bool
    parameters: tuple[SignatureParameter, ...]


@dataclass(frozen=True)
class CommentEvidence:
    """Facts claimed by a documentation comment."""

    claims_return: bool
    claims_throws: bool
    is_batched: bool
    parameter_names: tuple[str, ...]


def signature_evidence(
    region: str,
    kind: DeclarationKind,
    parameters: list[ParameterDescriptor],
) -> SignatureEvidence:
    """Read return, throws and parameter facts from *region*.

    Only the region ``[offset, body_offset)`` is searched, never the body.
    A parameter with no explicit label before it is its own label.
    """
    has_arrow = patterns.RETURN_ARROW in region
    labelled = []
    for parameter in parameters:
        label = patterns.find_label(region, parameter.name)
        labelled.append(SignatureParameter(
            label=label if label is not None else parameter.name,
            name=parameter.name,
        ))
    return SignatureEvidence(
        has_return_arrow=has_arrow,
        produces_value=has_arrow or kind in VARIABLE_KINDS,
        has_throws=patterns.THROWS_TOKEN in region,
        parameters=tuple(labelled),
    )


def comment_claims_return(comment: str) -> bool:
    return (
        patterns.RETURNS_MARKER in comment
        or comment.startswith(patterns.RETURNS_LEAD_IN)
    )


def comment_is_batched(comment: str) -> bool:
    """``- Parameters:`` style lists are not parsed; match any casing."""
    return patterns.BATCHED_PARAMETERS_MARKER in comment.lower()


def comment_evidence(comment: str) -> CommentEvidence:
    """Read return, throws and parameter claims from *comment*."""
    batched = comment_is_batched(comment)
    names = () if batched else tuple(patterns.parameter_claims(comment))
    return CommentEvidence(
        claims_return=comment_claims_return(comment),
        claims_throws=patterns.THROWS_MARKER in comment,
        is_batched=batched,
        parameter_names=names,
    )
