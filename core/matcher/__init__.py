"""Matcher Module - rank potential buddies by rubric-score compatibility."""
from core.matcher.dto import MatchedUserDTO, MatchCandidate, MatchSearchResult
from core.matcher.filters import exclude_engaged_candidates
from core.matcher.service import MatchFinderService

__all__ = [
    'MatchFinderService',
    'MatchedUserDTO', 'MatchCandidate', 'MatchSearchResult',
    'exclude_engaged_candidates',
]
