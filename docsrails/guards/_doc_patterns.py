"""Text patterns for the docs guard.

Nothing here parses Swift or doc-comment syntax; these are bounded
substring and regex searches over a signature region or a comment body.
All searches are linear in the input length.
"""

import re
from functools import lru_cache

# Signature markers
RETURN_ARROW = "->"
THROWS_TOKEN = " throws "

# Comment markers
SUPPRESSION_MARKER = ":nodoc:"
RETURNS_MARKER = "- returns:"
RETURNS_LEAD_IN = "Returns"
THROWS_MARKER = "- throws:"
BATCHED_PARAMETERS_MARKER = "- parameters:"
PARAMETER_MARKER = "- parameter "

# Label token: anything but comma, whitespace or an opening paren. The
# lookbehind pins matches to token starts so a long run is scanned once.
_LABEL_TOKEN = r"(?<![^,\s(])([^,\s(]+)"


@lru_cache(maxsize=512)
def label_pattern(parameter: str) -> re.Pattern[str]:
    """Regex for ``label parameter:`` capturing the external label."""
    return re.compile(
        _LABEL_TOKEN + r"\s+" + re.escape(parameter) + r"\s*:"
    )


def find_label(region: str, parameter: str) -> str | None:
    """External call-site label written before *parameter*, if any."""
    match = label_pattern(parameter).search(region)
    if match is None:
        return None
    return match.group(1)


def parameter_claims(comment: str) -> list[str]:
    """Names claimed by ``- parameter NAME:`` lines, in order.

    Same result as ``re.findall(r"- parameter (.+):", comment)``: at most
    one claim per line, greedy up to the last colon of that line.
    """
    claims: list[str] = []
    for line in comment.splitlines():
        start = line.find(PARAMETER_MARKER)
        if start < 0:
            continue
        start += len(PARAMETER_MARKER)
        colon = line.rfind(":")
        if colon > start:
            claims.append(line[start:colon])
    return claims
