"""Human-readable match reasons derived from a CompatibilityResult."""

from core.compatibility.models import CompatibilityResult

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
MODERATE_THRESHOLD = 40
STRONG_COMPONENT_THRESHOLD = 70


def generate_match_reason(result: CompatibilityResult) -> str:
    overall = result.overall

    if overall >= EXCELLENT_THRESHOLD:
        return "You have excellent overall compatibility with this user."
    if overall >= GOOD_THRESHOLD:
        return "You have good overall compatibility with this user."
    if overall >= MODERATE_THRESHOLD:
        if result.technical.score >= STRONG_COMPONENT_THRESHOLD:
            return "You have strong technical compatibility with this user."
        if result.social.score >= STRONG_COMPONENT_THRESHOLD:
            return "You have strong social compatibility with this user."
        if result.personal.score >= STRONG_COMPONENT_THRESHOLD:
            return "Your personal attributes align well with this user."
        return "You have moderate compatibility with this user."
    return "This could be an interesting connection to explore."
