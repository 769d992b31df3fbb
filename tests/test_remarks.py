"""Unit tests for the remarks matcher.

Tests RemarksMatcher for:
- Tokenisation of free-text remarks
- NG keywords (hard exclusion signal)
- Positive keywords and their bonus
- Synonym expansion with negation guards
- Literal fallback and unmatched tokens
"""

import re

import pytest

from anken_matcher.matching.remarks import (
    FREE_TEXT_SCORE,
    POSITIVE_SCORE,
    RemarksMatcher,
    RemarksTopic,
    tokenize_remarks,
)


@pytest.fixture
def matcher():
    return RemarksMatcher()


class TestTokenizeRemarks:
    def test_splits_on_japanese_punctuation_and_spaces(self):
        tokens = tokenize_remarks("PC貸与希望、残業なし　土日出社NG・服装自由/副業OK")

        assert tokens == ["PC貸与希望", "残業なし", "土日出社NG", "服装自由", "副業OK"]

    def test_drops_short_and_duplicate_tokens(self):
        assert tokenize_remarks("a、フルリモート,フルリモート\n週3") == ["フルリモート", "週3"]

    @pytest.mark.parametrize("remarks", [None, "", "   ", "、。"])
    def test_empty_remarks(self, remarks):
        assert tokenize_remarks(remarks) == []


class TestNgKeywords:
    def test_ng_keyword_found_in_listing(self, matcher):
        result = matcher.evaluate("土日出社NG", "平日のみ。繁忙期は土日出社あり")

        assert result.is_ng
        assert result.ng_matched == ["土日出社"]

    def test_ng_keyword_absent_from_listing(self, matcher):
        result = matcher.evaluate("土日出社NG", "平日のみの稼働です")

        assert not result.is_ng
        assert result.score == 0

    def test_ng_token_is_not_reported_as_unmatched(self, matcher):
        result = matcher.evaluate("土日出社NG", "平日のみの稼働です")

        assert result.free_text_unmatched == []
        assert result.free_text_matched == []

    def test_ng_regardless_of_positive_matches(self, matcher):
        result = matcher.evaluate("フルリモート、長期不可", "フルリモート\n長期案件")

        assert result.is_ng
        assert result.positive_matched == ["フルリモート"]


class TestPositiveKeywords:
    def test_positive_match_adds_bonus(self, matcher):
        result = matcher.evaluate("フルリモート", "フルリモート案件です")

        assert result.positive_matched == ["フルリモート"]
        assert result.score == POSITIVE_SCORE

    def test_positive_is_case_insensitive(self, matcher):
        result = matcher.evaluate("saas", "SaaSプロダクトの営業")

        assert result.positive_matched == ["SaaS"]

    def test_positive_keyword_missing_in_listing_falls_back(self, matcher):
        result = matcher.evaluate("フルリモート", "週5日出社")

        assert result.positive_matched == []
        assert result.free_text_unmatched == ["フルリモート"]
        assert result.score == 0

    def test_token_overlapping_positive_match_is_skipped(self, matcher):
        result = matcher.evaluate("フルリモート フルリモ", "フルリモート")

        assert result.positive_matched == ["フルリモート"]
        assert result.free_text_matched == []
        assert result.free_text_unmatched == []
        assert result.score == POSITIVE_SCORE


class TestSynonyms:
    def test_synonym_matches_listing_phrasing(self, matcher):
        result = matcher.evaluate("PC貸与希望", "業務用PC支給あり")

        assert result.free_text_matched == ["PC貸与希望"]
        assert result.score == FREE_TEXT_SCORE

    @pytest.mark.parametrize("text", ["PC貸与：なし", "PC貸与 無し", "PC支給不可"])
    def test_negated_benefit_does_not_match(self, matcher, text):
        result = matcher.evaluate("PC貸与", text)

        assert result.free_text_matched == []
        assert result.free_text_unmatched == ["PC貸与"]

    def test_no_overtime(self, matcher):
        result = matcher.evaluate("残業なし", "残業：ほぼなし")

        assert result.free_text_matched == ["残業なし"]

    def test_transport_expenses_negated(self, matcher):
        result = matcher.evaluate("交通費支給", "交通費：なし")

        assert result.free_text_unmatched == ["交通費支給"]


class TestLiteralFallback:
    def test_literal_match(self, matcher):
        result = matcher.evaluate("インセンティブ", "成果に応じてインセンティブ支給")

        assert result.free_text_matched == ["インセンティブ"]
        assert result.score == FREE_TEXT_SCORE

    def test_wish_suffix_is_ignored(self, matcher):
        result = matcher.evaluate("インセンティブ希望", "インセンティブあり")

        assert result.free_text_matched == ["インセンティブ希望"]

    def test_regex_characters_are_literal(self, matcher):
        result = matcher.evaluate("C++", "C言語経験")

        assert result.free_text_unmatched == ["C++"]

    def test_unmatched_tokens_need_verification(self, matcher):
        result = matcher.evaluate("英語力、ベンチャー", "国内大手向けの営業")

        assert result.free_text_unmatched == ["英語力", "ベンチャー"]
        assert result.matched_labels == []


class TestCustomTables:
    def test_injected_ng_table(self):
        matcher = RemarksMatcher(
            ng_topics=(RemarksTopic("夜勤", re.compile(r"夜勤|深夜")),),
            positive_topics=(),
            synonyms=(),
        )

        result = matcher.evaluate("夜勤NG", "深夜帯のシフトあり")

        assert result.ng_matched == ["夜勤"]

    def test_matched_labels_order(self):
        matcher = RemarksMatcher()

        result = matcher.evaluate("インセンティブ、フルリモート", "フルリモート インセンティブあり")

        assert result.matched_labels == ["フルリモート", "インセンティブ"]
        assert result.score == POSITIVE_SCORE + FREE_TEXT_SCORE
