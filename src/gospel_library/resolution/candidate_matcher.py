"""
Best-candidate matching against a caller supplied candidate list.

Used to pin a loosely typed speaker name or conference label to one of the
distinct values stored in the library, so the caller can query by equality.
"""
import logging
from typing import Iterable, Optional

from .match_candidate import MatchCandidate
from .resolution_policy import MatchPolicy
from .similarity import contains_either, fuzzy_match, similarity

logger = logging.getLogger(__name__)


def match_best_candidate(
    query: str,
    candidates: Iterable[str],
    policy: MatchPolicy,
) -> Optional[MatchCandidate]:
    """
    Pick the candidate that best matches query under policy.

    Escalation:
    1. Containment in either direction selects the candidate immediately with
       score 1.0. The first such candidate in caller order wins.
    2. Otherwise every candidate passing fuzzy_match at the policy's accept
       threshold is scored; the first candidate reaching the maximum wins.
    3. The best candidate is returned only if its score strictly exceeds the
       policy's commit threshold.

    :param query: Raw user text (e.g., "Elder Holland", "Oct 2022")
    :param candidates: Raw candidate strings; read only, order is significant
    :param policy: Normalization and thresholds for this kind of entity
    :return: MatchCandidate, or None when the caller should fall back to a
        broader query
    """
    normalized_query = policy.normalize_fn(query or "")
    if not normalized_query:
        return None

    best: Optional[MatchCandidate] = None
    best_score = 0.0

    for raw in candidates:
        if not raw:
            continue
        normalized = policy.normalize_fn(raw)
        # A candidate that normalizes to nothing would contain-match everything
        if not normalized:
            continue

        if policy.containment_short_circuit and contains_either(normalized_query, normalized):
            logger.debug(f"{policy.name}: '{query}' contained in '{raw}'")
            return MatchCandidate(raw=raw, normalized=normalized, score=1.0)

        if fuzzy_match(normalized_query, normalized, policy.accept_threshold):
            score = similarity(normalized_query, normalized)
            if score > best_score:
                best_score = score
                best = MatchCandidate(raw=raw, normalized=normalized, score=score)

    if best is not None and best.score > policy.commit_threshold:
        logger.debug(f"{policy.name}: '{query}' -> '{best.raw}' (score={best.score:.2f})")
        return best

    logger.debug(f"{policy.name}: no candidate above {policy.commit_threshold} for '{query}'")
    return None
