"""Fuzzy matching and ranking of search records.

Scores are tiered so a better tier always wins over a worse one:

    name exact > name prefix > name word prefix > name substring
    > secondary exact > secondary prefix > secondary substring
    > subsequence (any field)

Secondary fields are short_name and normalized_name. Records that match no
field score 0 and are dropped. Equal scores keep input (catalog) order.

// [LAW:single-enforcer] score() is the only place ranking policy lives.
"""

from __future__ import annotations

from collections.abc import Sequence

from item_search.core.catalog import SearchRecord

SCORE_NAME_EXACT = 1000
SCORE_NAME_PREFIX = 900
SCORE_NAME_WORD_PREFIX = 700
SCORE_NAME_SUBSTRING = 600
SCORE_SECONDARY_EXACT = 400
SCORE_SECONDARY_PREFIX = 350
SCORE_SECONDARY_SUBSTRING = 300
SCORE_SUBSEQUENCE_MAX = 200

# Position penalty inside the substring tiers never crosses into the next tier
_MAX_POSITION_PENALTY = 49

_WORD_SEPARATORS = " -_()[]/.,"


def _fields(record: SearchRecord) -> tuple[str, str, str]:
    name, short, normalized = record.search_fields
    if not name and record.name:
        return record.name.lower(), record.short_name.lower(), record.normalized_name.lower()
    return name, short, normalized


def _word_prefix(query: str, text: str) -> bool:
    start = 0
    for i, ch in enumerate(text):
        if ch in _WORD_SEPARATORS:
            if text.startswith(query, start) and start < i:
                return True
            start = i + 1
    return start < len(text) and text.startswith(query, start)


def subsequence_score(query: str, text: str) -> int:
    """Score an in-order, possibly gapped, character match. 0 if no match.

    Consecutive runs earn a bonus and gaps cost; the result is clamped to
    [1, SCORE_SUBSEQUENCE_MAX].
    """
    if not query or not text:
        return 0

    qi = 0
    last = -2
    score = SCORE_SUBSEQUENCE_MAX // 2
    for ti, ch in enumerate(text):
        if qi == len(query):
            break
        if ch != query[qi]:
            continue
        if ti == last + 1:
            score += 5
        elif last >= 0:
            score -= ti - last - 1
        else:
            score -= ti
        last = ti
        qi += 1

    if qi < len(query):
        return 0
    return max(1, min(SCORE_SUBSEQUENCE_MAX, score))


def score(record: SearchRecord, query: str) -> int:
    """Return the match score of record for query; 0 means no match."""
    if not query:
        return 0
    name, short, normalized = _fields(record)

    if name == query:
        return SCORE_NAME_EXACT
    if name.startswith(query):
        return SCORE_NAME_PREFIX
    if _word_prefix(query, name):
        return SCORE_NAME_WORD_PREFIX
    pos = name.find(query)
    if pos >= 0:
        return SCORE_NAME_SUBSTRING - min(pos, _MAX_POSITION_PENALTY)

    secondary = [text for text in (short, normalized) if text]
    if query in secondary:
        return SCORE_SECONDARY_EXACT
    if any(text.startswith(query) for text in secondary):
        return SCORE_SECONDARY_PREFIX
    positions = [text.find(query) for text in secondary if query in text]
    if positions:
        return SCORE_SECONDARY_SUBSTRING - min(min(positions), _MAX_POSITION_PENALTY)

    return max(subsequence_score(query, text) for text in (name, short, normalized))


def match(
    records: Sequence[SearchRecord] | None,
    query: str,
    *,
    limit: int | None = None,
) -> list[SearchRecord]:
    """Rank records against query, best first.

    The query is used as given: the caller lowercases it and no trimming
    happens here. An empty query matches nothing. `limit` caps the output
    after the full ranking, so the leading order never changes.
    """
    if not query or not records:
        return []

    scored = [(score(record, query), record) for record in records]
    # sorted() is stable: equal scores keep catalog order
    ranked = [
        record
        for s, record in sorted(
            (pair for pair in scored if pair[0] > 0),
            key=lambda pair: pair[0],
            reverse=True,
        )
    ]
    if limit is not None:
        return ranked[:limit]
    return ranked
