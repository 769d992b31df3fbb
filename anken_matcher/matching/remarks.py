"""Matching of the candidate's free-text remarks against listing text.

Remarks such as "PC貸与希望、残業なし、土日出社NG" are split into tokens and
each token is resolved by the first applicable stage:

1. NG table: hard exclusion keywords ("土日出社" ...)
2. Positive table: fixed wishes worth a full bonus ("フルリモート" ...)
3. Tokens overlapping an already matched table keyword are skipped
4. Synonym table: common phrasings expanded into listing-side patterns
5. Literal search of the token in the listing text
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .models import RemarksMatchResult

logger = logging.getLogger(__name__)

POSITIVE_SCORE = 10
FREE_TEXT_SCORE = 5
MIN_TOKEN_LENGTH = 2

_TOKEN_SEPARATORS = re.compile(r"[\s　、。・/／,，]+")
# Phrase suffix that never appears in listing text
_WISH_SUFFIX = "希望"
# Listing-side negations following a benefit ("PC貸与：なし")
_NEGATED = r"(?!\s*[:：]?\s*(?:なし|無し|不可))"


@dataclass(frozen=True)
class RemarksTopic:
    """A fixed keyword the candidate may write, and how the listing states it."""

    keyword: str
    body_pattern: re.Pattern

    def triggered_by(self, token: str) -> bool:
        return self.keyword.lower() in token.lower()


@dataclass(frozen=True)
class SynonymEntry:
    """Maps free-text phrasings to a listing-side pattern."""

    label: str
    trigger: re.Pattern
    body_pattern: re.Pattern


def _topic(keyword: str, body: str) -> RemarksTopic:
    return RemarksTopic(keyword, re.compile(body, re.IGNORECASE))


def _synonym(label: str, trigger: str, body: str) -> SynonymEntry:
    return SynonymEntry(label, re.compile(trigger, re.IGNORECASE), re.compile(body, re.IGNORECASE))


NG_TOPICS = (
    _topic("PC持参不可", r"PC.*持参|自前.*PC|自己.*PC"),
    _topic("土日出社", r"土日.*出社|週末.*出社"),
    _topic("長期不可", r"長期|1年以上"),
)

POSITIVE_TOPICS = (
    _topic("フルリモート", r"フルリモ|フルリモート|完全リモート"),
    _topic("週3以下", r"週[1-3]日|週[1-3]回"),
    _topic("土日休み", r"土日祝|完全週休2日"),
    _topic("SaaS", r"SaaS"),
    _topic("高単価", r"高単価|単価高"),
)

SYNONYMS = (
    _synonym(
        "PC貸与",
        r"PC(?:貸与|支給)|パソコン(?:貸与|支給)",
        rf"(?:PC|パソコン)\s*(?:の)?\s*(?:貸与|支給){_NEGATED}",
    ),
    _synonym(
        "フルリモ",
        r"フルリモ|完全在宅|在宅勤務|リモート",
        rf"フルリモ|完全リモート|完全在宅|在宅\s*(?:勤務)?\s*(?:可|OK)|リモート\s*(?:可|OK|勤務){_NEGATED}",
    ),
    _synonym(
        "残業なし",
        r"残業(?:なし|無し|ナシ|少|ほぼ)|ノー残業",
        r"残業\s*[:：]?\s*(?:なし|無し|ほぼなし|ほぼ無し|少なめ|少ない)|ノー残業",
    ),
    _synonym("土日休み", r"土日(?:祝)?休|週休2日|土日祝", r"土日(?:祝)?\s*休|完全週休2日|週休2日"),
    _synonym("週N日", r"週\s*[1-4]\s*(?:日|回)", r"週\s*[1-4]\s*(?:日|回)"),
    _synonym("副業", r"副業|兼業|複業", r"(?:副業|兼業|複業)\s*(?:OK|可|歓迎)"),
    _synonym("服装自由", r"服装自由|私服", r"服装自由|私服\s*(?:OK|可)|オフィスカジュアル"),
    _synonym("未経験", r"未経験", r"未経験\s*(?:者)?\s*(?:OK|可|歓迎)"),
    _synonym("交通費", r"交通費", rf"交通費\s*[:：]?\s*(?:全額)?\s*(?:支給|別途支給|あり|有り){_NEGATED}"),
    _synonym("時短", r"時短", rf"時短\s*(?:勤務)?\s*(?:OK|可|相談){_NEGATED}"),
    _synonym("即日", r"即日|即稼働", r"即日|即稼働|ASAP|急募"),
    _synonym("長期", r"長期", r"長期|継続"),
)


def tokenize_remarks(remarks: Optional[str]) -> List[str]:
    """Split remarks into unique tokens of at least two characters, in order."""
    if not remarks:
        return []
    tokens: List[str] = []
    for token in _TOKEN_SEPARATORS.split(remarks):
        token = token.strip()
        if len(token) >= MIN_TOKEN_LENGTH and token not in tokens:
            tokens.append(token)
    return tokens


def _overlaps(token: str, keywords: Iterable[str]) -> bool:
    token_lower = token.lower()
    return any(
        keyword.lower() in token_lower or token_lower in keyword.lower() for keyword in keywords
    )


def _literal_term(token: str) -> str:
    if token.endswith(_WISH_SUFFIX) and len(token) - len(_WISH_SUFFIX) >= MIN_TOKEN_LENGTH:
        return token[: -len(_WISH_SUFFIX)]
    return token


def _append_unique(items: List[str], value: str) -> bool:
    if value in items:
        return False
    items.append(value)
    return True


class RemarksMatcher:
    """Evaluates remarks tokens against a listing's text."""

    def __init__(
        self,
        ng_topics: Sequence[RemarksTopic] = NG_TOPICS,
        positive_topics: Sequence[RemarksTopic] = POSITIVE_TOPICS,
        synonyms: Sequence[SynonymEntry] = SYNONYMS,
    ):
        self.ng_topics = ng_topics
        self.positive_topics = positive_topics
        self.synonyms = synonyms

    def evaluate(self, remarks: Optional[str], text: str) -> RemarksMatchResult:
        """Match remarks against ``text``.

        A token that triggers an NG keyword is settled by the NG table and is
        never reported as a positive or free-text match.
        """
        result = RemarksMatchResult()
        tokens = tokenize_remarks(remarks)
        if not tokens:
            return result

        deferred: List[str] = []
        for token in tokens:
            ng_hits = [topic for topic in self.ng_topics if topic.triggered_by(token)]
            if ng_hits:
                for topic in ng_hits:
                    if topic.body_pattern.search(text):
                        _append_unique(result.ng_matched, topic.keyword)
                continue

            positive_hit = False
            for topic in self.positive_topics:
                if topic.triggered_by(token) and topic.body_pattern.search(text):
                    positive_hit = True
                    if _append_unique(result.positive_matched, topic.keyword):
                        result.score += POSITIVE_SCORE
            if not positive_hit:
                deferred.append(token)

        captured = result.ng_matched + result.positive_matched
        for token in deferred:
            if _overlaps(token, captured):
                continue
            self._match_free_text(token, text, result)

        logger.debug(
            "Remarks evaluated",
            extra={
                "event": "matching.remarks.evaluated",
                "token_count": len(tokens),
                "ng_count": len(result.ng_matched),
                "positive_count": len(result.positive_matched),
                "free_text_matched": len(result.free_text_matched),
                "free_text_unmatched": len(result.free_text_unmatched),
            },
        )
        return result

    def _match_free_text(self, token: str, text: str, result: RemarksMatchResult) -> None:
        synonym = next((entry for entry in self.synonyms if entry.trigger.search(token)), None)
        if synonym is not None:
            found = synonym.body_pattern.search(text) is not None
        else:
            term = _literal_term(token)
            found = re.search(re.escape(term), text, re.IGNORECASE) is not None

        if found:
            if _append_unique(result.free_text_matched, token):
                result.score += FREE_TEXT_SCORE
        else:
            _append_unique(result.free_text_unmatched, token)
