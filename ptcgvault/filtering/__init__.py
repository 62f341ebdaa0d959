"""
Candidate preparation for auto-build.

Eligibility narrows owned cards to a format; scoring ranks what remains.
"""

from ptcgvault.filtering.eligibility import (
    EXPANDED_FORMAT,
    STANDARD_FORMAT,
    filter_eligible,
    is_expanded_format,
    is_legal,
)
from ptcgvault.filtering.scored_pool import (
    ScoredCard,
    score_card,
    score_cards,
    synergy_bonus,
)

__all__ = [
    "EXPANDED_FORMAT",
    "STANDARD_FORMAT",
    "ScoredCard",
    "filter_eligible",
    "is_expanded_format",
    "is_legal",
    "score_card",
    "score_cards",
    "synergy_bonus",
]
