"""Free-text job parser

Turns text pasted from a clipboard, a share action or an email into a
best-effort JobDraft. Parsing never fails: when nothing can be extracted the
draft falls back to generic values.
"""

import logging
import re
from typing import List, Optional, Tuple

from gigroute.models.draft import JobDraft
from gigroute.services.platform_rules import (
    MANUAL_PLATFORM,
    NAME_RUN,
    fallback_address,
    get_profile,
    normalize_platform
)


MAX_TITLE_LENGTH = 100
MAX_TEXT_LENGTH = 10000
DEFAULT_TITLE = "Parsed Job"
DEFAULT_DURATION = 30

_DOLLAR_AMOUNT = re.compile(r"\$(\d+(?:\.\d{2})?)")

# Tried in order, first match wins
_ADDRESS_PATTERNS = [
    re.compile(
        r"(\d{1,6}[ \t]{1,8}" + NAME_RUN + r"(?:St|Ave|Blvd|Rd|Dr|Way|Pl|Street|Avenue|Boulevard|Road|Drive))\b",
        re.IGNORECASE
    ),
    re.compile(r"(" + NAME_RUN + r"(?:Mall|Plaza|Center|Square))\b", re.IGNORECASE),
    re.compile(r"(" + NAME_RUN + r" (?:Store|Shop|Restaurant|Cafe))\b", re.IGNORECASE),
]


def extract_payout(text: str) -> str:
    """
    Find the largest dollar amount in the text

    The largest figure is assumed to be the pay rather than a tip or fee.
    The amount is returned as written ("$12.50" -> "12.50").

    Returns:
        Amount string, "0" when the text has no dollar amounts
    """
    best: Optional[Tuple[float, str]] = None

    for match in _DOLLAR_AMOUNT.finditer(text):
        raw = match.group(1)
        amount = float(raw)
        if best is None or amount > best[0]:
            best = (amount, raw)

    return best[1] if best else "0"


def extract_address(text: str) -> str:
    """
    Find a street address, landmark or business name in the text

    Returns:
        Matched text, empty string when nothing looks like an address
    """
    for pattern in _ADDRESS_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return ""


def _lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class JobParser:
    """
    Parses raw job text into drafts

    The generic pass (title, payout, address) always runs. When a platform
    with a profile is given, its title, description and duration extractors
    override the generic values and its placeholder address is used when no
    address was found.
    """

    def __init__(self):
        self.logger = logging.getLogger("gigroute.parser")

    def parse_text(self, text: Optional[str], platform: Optional[str] = None) -> JobDraft:
        """
        Parse raw text into a job draft

        Args:
            text: Raw text (None is treated as empty)
            platform: Optional platform id or category alias

        Returns:
            JobDraft with every field populated
        """
        if text is None:
            text = ""
        elif not isinstance(text, str):
            text = str(text)

        platform_id = normalize_platform(platform)

        if len(text) > MAX_TEXT_LENGTH:
            self.logger.warning(
                f"Job text is {len(text)} characters, parsing the first {MAX_TEXT_LENGTH}"
            )
            text = text[:MAX_TEXT_LENGTH]

        try:
            return self._parse(text, platform_id)
        except Exception as e:
            self.logger.error(
                f"Failed to parse job text for platform {platform_id or MANUAL_PLATFORM}: {e}",
                exc_info=True
            )
            return self._generic_draft(platform_id)

    def _parse(self, text: str, platform_id: Optional[str]) -> JobDraft:
        lines = _lines(text)

        title = lines[0] if lines else DEFAULT_TITLE
        description = ""
        estimated_duration = DEFAULT_DURATION
        payout = extract_payout(text)
        address = extract_address(text)

        profile = get_profile(platform_id)
        if profile is not None:
            if profile.title_extractor is not None:
                title = profile.title_extractor(text) or title
            description = profile.description_extractor(text) or description
            estimated_duration = profile.duration_for(text) or estimated_duration

        if not address:
            address = fallback_address(platform_id)

        draft = JobDraft(
            title=title[:MAX_TITLE_LENGTH],
            description=description or f"Parsed from {platform_id or 'clipboard'} text",
            platform=platform_id or MANUAL_PLATFORM,
            payout=payout,
            address=address,
            estimated_duration=estimated_duration
        )

        self.logger.debug(
            f"Parsed draft: '{draft.title}' platform={draft.platform} "
            f"payout={draft.payout} duration={draft.estimated_duration}m"
        )

        return draft

    def _generic_draft(self, platform_id: Optional[str]) -> JobDraft:
        profile = get_profile(platform_id)
        return JobDraft(
            title=DEFAULT_TITLE,
            description=f"Parsed from {platform_id or 'clipboard'} text",
            platform=platform_id or MANUAL_PLATFORM,
            payout="0",
            address=fallback_address(platform_id),
            estimated_duration=(profile.default_duration if profile else None) or DEFAULT_DURATION
        )


def parse_job_text(text: Optional[str], platform: Optional[str] = None) -> JobDraft:
    """
    Convenience function to parse job text

    Example:
        >>> parse_job_text("Pay: $12.50, tip $3.00").payout
        '12.50'
    """
    return JobParser().parse_text(text, platform)
