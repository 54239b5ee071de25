"""Tests for signature and comment evidence extraction."""

from docsrails.guards.evidence import (
    SignatureParameter,
    comment_claims_return,
    comment_evidence,
    comment_is_batched,
    signature_evidence,
)
from docsrails.structure import DeclarationKind, ParameterDescriptor


def _params(*names):
    return [ParameterDescriptor(name=n, offset=i) for i, n in enumerate(names)]


# ── Signature evidence ───────────────────────────────────────────────


class TestSignatureEvidence:
    def test_plain_function(self):
        ev = signature_evidence("func a() {", DeclarationKind.FUNCTION_FREE, [])
        assert not ev.has_return_arrow
        assert not ev.produces_value
        assert not ev.has_throws
        assert ev.parameters == ()

    def test_arrow_produces_value(self):
        ev = signature_evidence(
            "func a() -> Int {", DeclarationKind.FUNCTION_METHOD_INSTANCE, []
        )
        assert ev.has_return_arrow
        assert ev.produces_value

    def test_property_produces_value_without_arrow(self):
        ev = signature_evidence("var x: Int {", DeclarationKind.VAR_INSTANCE, [])
        assert not ev.has_return_arrow
        assert ev.produces_value

    def test_throws_needs_surrounding_spaces(self):
        kind = DeclarationKind.FUNCTION_FREE
        assert signature_evidence("func a() throws {", kind, []).has_throws
        assert not signature_evidence("func a(throwsFlag: Bool) {", kind, []).has_throws
        assert not signature_evidence("func a() throws{", kind, []).has_throws

    def test_labels_and_names(self):
        ev = signature_evidence(
            "init(from decoder: Decoder, strict: Bool) {",
            DeclarationKind.FUNCTION_CONSTRUCTOR,
            _params("decoder", "strict"),
        )
        assert ev.parameters == (
            SignatureParameter(label="from", name="decoder"),
            SignatureParameter(label="strict", name="strict"),
        )

    def test_parameter_accepts_label_or_name(self):
        param = SignatureParameter(label="from", name="decoder")
        assert param.accepts("from")
        assert param.accepts("decoder")
        assert not param.accepts("Decoder")


# ── Comment evidence ─────────────────────────────────────────────────


class TestCommentEvidence:
    def test_returns_marker(self):
        assert comment_claims_return("docs\n- returns: x")

    def test_returns_lead_in(self):
        assert comment_claims_return("Returns the answer")
        assert not comment_claims_return(" Returns the answer")
        assert not comment_claims_return("returns the answer")

    def test_batched_any_case(self):
        assert comment_is_batched("- Parameters:\n  - x: y")
        assert comment_is_batched("- PARAMETERS:")
        assert not comment_is_batched("- parameter x: y")

    def test_full_evidence(self):
        ev = comment_evidence(
            "Does things.\n- parameter x: one\n- throws: Oops\n- returns: two"
        )
        assert ev.claims_return
        assert ev.claims_throws
        assert not ev.is_batched
        assert ev.parameter_names == ("x",)

    def test_batched_comment_has_no_names(self):
        ev = comment_evidence("- Parameters:\n- parameter x: one")
        assert ev.is_batched
        assert ev.parameter_names == ()

    def test_throws_marker_is_case_sensitive(self):
        assert not comment_evidence("- Throws: Oops").claims_throws
