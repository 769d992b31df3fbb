"""Unit tests for match reasons, itemised details and condition badges."""

import pytest

from anken_matcher.domain.models import Listing, SearchCondition, SkillProfile
from anken_matcher.extraction.location import REMOTE_WARNING_MESSAGE, LocationMatch, LocationMatchType
from anken_matcher.extraction.price import NO_PRICE
from anken_matcher.matching import (
    BadgeStatus,
    MatchFacts,
    RemarksMatchResult,
    ScoringEngine,
    build_match_reason,
    build_match_reason_detail,
)
from anken_matcher.matching.explanation import LOW_SCORE_CAUTION


@pytest.fixture
def engine():
    return ScoringEngine()


def evaluate(engine, text, condition=None, profile=None):
    listing = Listing(id="anken_1", name="テスト案件", full_text=text)
    return engine.evaluate(listing, condition or SearchCondition(), profile)


def badges(result):
    return [(badge.label, badge.status) for badge in result.condition_badges]


def bare_facts(score, condition=None):
    return MatchFacts(
        condition=condition or SearchCondition(),
        skill_profile=None,
        score=score,
        price=NO_PRICE,
        location=LocationMatch(LocationMatchType.IN_RANGE),
        location_label=None,
        remarks=RemarksMatchResult(),
    )


class TestMatchReason:
    def test_salient_signals_in_priority_order(self, engine):
        condition = SearchCondition(price_type="hourly", min_price=2000, remarks="フルリモート")

        result = evaluate(engine, "時給：2,200円\nフルリモート案件", condition)

        assert result.match_reason == "単価2,200円/時・フルリモート"

    def test_leading_keywords_without_skill_profile(self, engine):
        result = evaluate(engine, "インサイドセールス SaaS Salesforce")

        assert result.match_reason == "IS（インサイドセールス）・SaaS"

    def test_exact_location_label_is_truncated(self, engine):
        condition = SearchCondition(location="東京")

        result = evaluate(engine, "勤務地：東京都千代田区丸の内一丁目", condition)

        assert result.match_reason == "東京都千代田区丸の内"

    @pytest.mark.parametrize(
        "score,expected",
        [(75, "条件に適合しています"), (50, "部分的にマッチしています"), (39, "参考情報として表示")],
    )
    def test_score_band_fallback(self, score, expected):
        assert build_match_reason(bare_facts(score)) == expected


class TestMatchReasonDetail:
    def test_matched_price_location_and_remarks(self, engine):
        condition = SearchCondition(price_type="hourly", min_price=2000, location="リモート", remarks="フルリモート")

        result = evaluate(engine, "時給：2,200円\nフルリモート案件", condition)

        assert result.match_reason_detail.splitlines() == [
            "✅ 単価: 2,200円/時（条件: 2,000円/時以上）",
            "✅ 勤務地: フルリモート対応",
            "✅ 希望条件: フルリモート",
        ]

    def test_nothing_to_say(self, engine):
        result = evaluate(engine, "一般事務のお仕事")

        assert result.match_reason_detail is None
        assert result.condition_badges == []

    def test_price_without_condition_is_info(self, engine):
        result = evaluate(engine, "月額32万円")

        assert "ℹ️ 単価: 320,000円/月" in result.match_reason_detail

    def test_unknown_requested_price(self, engine):
        condition = SearchCondition(price_type="hourly", min_price=2000)

        result = evaluate(engine, "単価は面談にて", condition)

        assert "⚠️ 単価: 案件本文から確認できませんでした" in result.match_reason_detail

    def test_skills(self, engine):
        profile = SkillProfile(skills=["Salesforce", "Go", "Java", "Ruby", "PHP", "Rust"])

        result = evaluate(engine, "Salesforce活用", profile=profile)

        lines = result.match_reason_detail.splitlines()
        assert "✅ スキルマッチ: Salesforce" in lines
        assert "ℹ️ 未一致スキル: Go、Java、Ruby" in lines
        assert "ℹ️ ツール: Salesforce" in lines
        assert result.match_reason == "スキル1項一致"

    def test_location_warning(self, engine):
        result = evaluate(engine, "勤務地：大阪", SearchCondition(location="リモート"))

        assert f"⚠️ 勤務地: {REMOTE_WARNING_MESSAGE}" in result.match_reason_detail

    def test_in_region(self, engine):
        result = evaluate(engine, "勤務地：横浜（神奈川県）", SearchCondition(location="関東"))

        assert "✅ 勤務地: 横浜（神奈川県）（関東エリア内）" in result.match_reason_detail

    def test_low_score_caution(self):
        detail = build_match_reason_detail(bare_facts(30))

        assert detail == f"⚠️ {LOW_SCORE_CAUTION}"


class TestConditionBadges:
    def test_price_and_remote_badges(self, engine):
        condition = SearchCondition(price_type="hourly", min_price=2000, location="リモート", remarks="フルリモート")

        result = evaluate(engine, "時給：2,200円\nフルリモート案件", condition)

        assert badges(result) == [
            ("時給2,200円", BadgeStatus.MATCH),
            ("フルリモート", BadgeStatus.MATCH),
            ("フルリモート", BadgeStatus.MATCH),
        ]

    def test_price_info_and_unknown_warn(self, engine):
        info = evaluate(engine, "月額32万円")
        unknown = evaluate(engine, "単価は面談にて", SearchCondition(price_type="monthly", min_price=300000))

        assert badges(info) == [("320,000円/月", BadgeStatus.INFO)]
        assert badges(unknown) == [("単価要確認", BadgeStatus.WARN)]

    @pytest.mark.parametrize(
        "location,text,expected",
        [
            ("リモート", "勤務地：大阪", ("出社の可能性", BadgeStatus.WARN)),
            ("福岡", "勤務地：東京都港区", ("勤務地要確認", BadgeStatus.INFO)),
            ("関東", "勤務地：横浜（神奈川県）", ("関東エリア内", BadgeStatus.MATCH)),
            ("東京", "勤務地：東京都港区", ("東京都港区", BadgeStatus.MATCH)),
        ],
    )
    def test_location_badge(self, engine, location, text, expected):
        result = evaluate(engine, text, SearchCondition(location=location))

        assert badges(result) == [expected]

    def test_remarks_badges_are_limited(self, engine):
        condition = SearchCondition(remarks="AAA BBB CCC DDD EEE FFF GGG")

        result = evaluate(engine, "AAA BBB CCC DDD", condition)

        assert badges(result) == [
            ("AAA", BadgeStatus.MATCH),
            ("BBB", BadgeStatus.MATCH),
            ("CCC", BadgeStatus.MATCH),
            ("EEE（要確認）", BadgeStatus.WARN),
            ("FFF（要確認）", BadgeStatus.WARN),
        ]
        assert "⚠️ 要確認: EEE、FFF、GGG" in result.match_reason_detail
