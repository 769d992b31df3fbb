"""Unit tests for remote detection and location classification."""

import pytest

from anken_matcher.extraction.location import (
    REMOTE_WARNING_MESSAGE,
    LocationMatch,
    LocationMatchType,
    classify_location,
    extract_location_label,
    is_remote,
)


class TestIsRemote:
    @pytest.mark.parametrize(
        "text",
        [
            "フルリモート案件",
            "完全リモートです",
            "在宅勤務可",
            "リモート併用可",
            "テレワーク中心",
            "Fully Remote",
            "remote OK",
        ],
    )
    def test_remote_phrases(self, text):
        assert is_remote(text)

    @pytest.mark.parametrize("text", ["東京都港区に常駐", "出社必須", ""])
    def test_on_site_phrases(self, text):
        assert not is_remote(text)


class TestClassifyLocation:
    def test_no_condition_is_neutral(self):
        result = classify_location(None, "勤務地：大阪")

        assert result == LocationMatch(LocationMatchType.IN_RANGE)

    def test_remote_request_with_remote_listing(self):
        result = classify_location("フルリモート希望", "フルリモート案件")

        assert result.match == LocationMatchType.REMOTE

    def test_remote_request_with_on_site_listing_warns(self):
        result = classify_location("リモート", "勤務地：東京都港区（常駐）")

        assert result.match == LocationMatchType.WARNING
        assert result.message == REMOTE_WARNING_MESSAGE

    def test_remote_request_in_english(self):
        result = classify_location("Remote", "勤務地：大阪")

        assert result.match == LocationMatchType.WARNING

    @pytest.mark.parametrize("condition", ["大阪", "関西", "福岡希望", "remote"])
    def test_remote_listing_always_satisfies(self, condition):
        result = classify_location(condition, "勤務地：東京\nフルリモート可")

        assert result.match == LocationMatchType.REMOTE

    @pytest.mark.parametrize("condition", [None, ""])
    def test_no_condition_is_neutral_for_remote_listing(self, condition):
        result = classify_location(condition, "勤務地：東京\nフルリモート可")

        assert result.match == LocationMatchType.IN_RANGE
        assert result.message is None

    def test_shared_prefecture_is_exact(self):
        result = classify_location("東京都内", "勤務地：東京都渋谷区")

        assert result.match == LocationMatchType.EXACT

    def test_region_member_is_in_range(self):
        result = classify_location("関東", "勤務地：神奈川県横浜市")

        assert result.match == LocationMatchType.IN_RANGE

    def test_kansai_region(self):
        result = classify_location("関西エリア", "就業場所：京都市")

        # 京都 is also a named prefecture, but the condition does not name it
        assert result.match == LocationMatchType.IN_RANGE

    def test_other_location_is_unknown(self):
        result = classify_location("福岡", "勤務地：東京都港区")

        assert result.match == LocationMatchType.UNKNOWN
        assert result.message is None

    def test_never_excluded(self):
        for condition in ("東京", "関東", "リモート", "沖縄"):
            result = classify_location(condition, "勤務地：北海道札幌市")
            assert result.match != LocationMatchType.EXCLUDED


class TestExtractLocationLabel:
    def test_work_location_label(self):
        assert extract_location_label("案件概要\n勤務地：東京都渋谷区\n時給2,000円") == "東京都渋谷区"

    def test_label_priority(self):
        text = "稼働：週5日\n就業場所：大阪市北区"

        assert extract_location_label(text) == "大阪市北区"

    def test_label_at_end_of_text(self):
        assert extract_location_label("作業場所: 横浜") == "横浜"

    def test_overlong_label_is_skipped(self):
        long_label = "東京" * 30
        text = f"勤務地：{long_label}\n稼働：週3日"

        assert extract_location_label(text) == "週3日"

    def test_missing_label(self):
        assert extract_location_label("時給2,000円") is None
