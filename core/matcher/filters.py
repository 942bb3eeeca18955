"""Post-filters applied by callers to finder output."""

from typing import Iterable, List

from core.matcher.dto import MatchCandidate


def exclude_engaged_candidates(
    candidates: Iterable[MatchCandidate],
    engaged_user_ids: Iterable[str]
) -> List[MatchCandidate]:
    """
    Drop candidates the user is already connected to or has a match
    request with. Order of the remaining candidates is preserved.
    """
    engaged = {str(user_id) for user_id in engaged_user_ids}
    return [c for c in candidates if c.match_id not in engaged]
