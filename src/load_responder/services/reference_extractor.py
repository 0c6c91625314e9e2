import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Digits and word characters are ASCII only; full-width or Arabic-Indic digits are never references.
_FLAGS = re.IGNORECASE | re.ASCII

# Identifiers that look numeric but are never load references. Order matters:
# each pattern only strips its first match, from the text left by the previous one.
EXCLUSION_PATTERNS = (
    re.compile(r"MC\s*\d+", _FLAGS),
    re.compile(r"DOT\s*\d+", _FLAGS),
    re.compile(r"USDOT\s*\d+", _FLAGS),
    re.compile(r"invoice\s*#?\s*\d+", _FLAGS),
    re.compile(r"bill\s*#?\s*\d+", _FLAGS),
)

# Strictest first; the letter+digit patterns at the end only run when nothing numeric matched.
REFERENCE_PATTERNS = (
    re.compile(r"order\s*#?\s*(\d{6,8})", _FLAGS),
    re.compile(r"reference\s+number\s+(\d{6,8})", _FLAGS),
    re.compile(r"ref[:\s]+(\d{6,8})", _FLAGS),
    re.compile(r"\b(\d{6})\b", re.ASCII),
    re.compile(r"load\s*(?:(?:reference|ref|number|id)(?![A-Z0-9])|#)[:\-\s]*([A-Z0-9\-_]+)", _FLAGS),
    re.compile(r"([A-Z]{2,4}[\-_\s]*\d{3,8}[\-_\s]*[A-Z0-9]*)", _FLAGS),
    re.compile(r"([A-HJ-Z]+\d{4,8}[A-Z0-9]*)", _FLAGS),
)

_DISALLOWED_CHARS = re.compile(r"[^\w\-]", re.ASCII)
_REJECTED_PREFIXES = ("MC", "DOT")
MIN_REFERENCE_LENGTH = 4


def strip_exclusions(text: str) -> str:
    stripped = text or ""
    for pattern in EXCLUSION_PATTERNS:
        match = pattern.search(stripped)
        if not match:
            continue
        logger.debug(
            "Ignoring excluded identifier",
            extra={"event": "reference_exclusion_stripped", "excluded": match.group(0)},
        )
        stripped = stripped[: match.start()] + stripped[match.end() :]
    return stripped


def clean_candidate(value: str) -> str:
    return _DISALLOWED_CHARS.sub("", value.strip())


def is_acceptable_reference(value: str) -> bool:
    if len(value) < MIN_REFERENCE_LENGTH:
        return False
    return not value.upper().startswith(_REJECTED_PREFIXES)


def extract_load_reference(text: str) -> Optional[str]:
    """Return the most likely load reference in ``text``, or None.

    MC/DOT/invoice/bill numbers are removed first, then the reference
    patterns are tried in priority order. A pattern whose capture fails the
    acceptance filter does not stop the search; the next pattern is tried.
    """
    working = strip_exclusions(text)

    for priority, pattern in enumerate(REFERENCE_PATTERNS):
        match = pattern.search(working)
        if not match or not match.group(1):
            continue

        candidate = clean_candidate(match.group(1))
        if is_acceptable_reference(candidate):
            logger.info(
                "Extracted load reference",
                extra={"event": "load_reference_extracted", "load_reference": candidate, "pattern_priority": priority},
            )
            return candidate

    logger.info("No valid load reference found", extra={"event": "load_reference_not_found"})
    return None
