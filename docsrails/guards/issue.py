"""Issue record shared by docsrails guards."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class ViolationKind(str, Enum):
    """Why a documented declaration was flagged."""

    MISSING_RETURN = "missing-return"
    SUPERFLUOUS_RETURN = "superfluous-return"
    THROWS_MISMATCH = "throws-mismatch"
    PARAMETER_MISMATCH = "parameter-mismatch"


REASON_MESSAGES = {
    ViolationKind.MISSING_RETURN: "returns a value but its docs do not say so",
    ViolationKind.SUPERFLUOUS_RETURN: "documents a return value it does not produce",
    ViolationKind.THROWS_MISMATCH: "throws documentation does not match the signature",
    ViolationKind.PARAMETER_MISMATCH: "parameter documentation does not match the signature",
}


@dataclass
class DocIssue:
    """An issue detected by a docsrails guard."""

    guard: str
    severity: Literal["info", "warn", "block"]
    message: str
    offset: int
    file: str | None = None
    line: int | None = None
    column: int | None = None
    reasons: list[ViolationKind] = field(default_factory=list)
