"""
Tests for DataService

Covers value coercion, column matching and validation, record
normalization, and CSV file parsing.
"""

import math
import pytest

from campaign_analytics.models.post import Post
from campaign_analytics.services.data_service import ColumnCheck, DataService
from campaign_analytics.utils.exceptions import MissingFieldsError


class TestSafeConversions:
    """Tests for safe_int and safe_float."""

    @pytest.mark.parametrize("value, expected", [
        ("12", 12),
        ("12.7", 12),
        ("-3.7", -3),
        (" 42 ", 42),
        ("1e3", 1000),
        ("", 0),
        ("   ", 0),
        ("abc", 0),
        ("nan", 0),
        ("inf", 0),
        (None, 0),
        (float("nan"), 0),
    ])
    def test_safe_int(self, value, expected):
        assert DataService.safe_int(value, 0) == expected

    @pytest.mark.parametrize("value, expected", [
        ("2.5", 2.5),
        ("-0.25", -0.25),
        ("7", 7.0),
        ("", 0.0),
        ("n/a", 0.0),
        ("NaN", 0.0),
        ("-inf", 0.0),
        (None, 0.0),
    ])
    def test_safe_float(self, value, expected):
        assert DataService.safe_float(value, 0.0) == expected

    def test_custom_default(self):
        assert DataService.safe_int("bad", -1) == -1
        assert math.isclose(DataService.safe_float("bad", 9.5), 9.5)


class TestColumnMatching:
    """Tests for build_column_map and validate_columns."""

    def test_mixed_case_and_whitespace_resolve(self):
        column_map = DataService.build_column_map([" Shares ", "engagement_RATE", "Media_Type"])

        assert column_map["shares"] == " Shares "
        assert column_map["engagement_rate"] == "engagement_RATE"
        assert column_map["media_type"] == "Media_Type"

    def test_exact_header_preferred_over_normalized(self):
        column_map = DataService.build_column_map(["Shares", "shares"])

        assert column_map["shares"] == "shares"

    def test_first_normalized_match_wins(self):
        column_map = DataService.build_column_map(["SHARES", " Shares"])

        assert column_map["shares"] == "SHARES"

    def test_valid_header(self):
        check = DataService.validate_columns(
            ["post_id", " Engagement_Rate ", "MEDIA_TYPE", "followers_gained", "Shares", "saves"]
        )

        assert check.is_valid
        assert check.missing == []

    def test_missing_saves_is_reported(self):
        columns = ["engagement_rate", "media_type", "followers_gained", "shares", "likes"]
        check = DataService.validate_columns(columns)

        assert not check.is_valid
        assert check.missing == ["saves"]
        assert check.available == columns

    def test_missing_fields_error_message(self):
        columns = ["engagement_rate", "media_type", "followers_gained", "shares", "likes"]
        check = DataService.validate_columns(columns)

        error = MissingFieldsError(check.missing, check.available)

        assert str(error) == (
            "Missing required fields: saves. "
            "Available fields: engagement_rate, media_type, followers_gained, shares, likes"
        )

    def test_missing_fields_keep_canonical_order(self):
        check = DataService.validate_columns(["likes"])

        assert check.missing == ["engagement_rate", "media_type", "followers_gained", "shares", "saves"]

    def test_column_check_defaults(self):
        assert ColumnCheck().is_valid


class TestNormalizeRecord:
    """Tests for normalize_record and normalize_records."""

    def test_typed_fields(self):
        raw = {
            "post_id": "p-7",
            "upload_date": "2024-03-01",
            "media_type": "Reel",
            "likes": "120",
            "comments": "8",
            "shares": "15",
            "saves": "4",
            "reach": "900",
            "impressions": "1500",
            "caption_length": "88",
            "hashtags_count": "5",
            "followers_gained": "-2",
            "traffic_source": "Explore",
            "engagement_rate": "4.25",
            "content_category": "Tutorial",
        }

        post = DataService.normalize_record(raw, 1)

        assert isinstance(post, Post)
        assert post.id == "p-7"
        assert post.post_id == "p-7"
        assert post.likes == 120
        assert post.followers_gained == -2
        assert post.engagement_rate == 4.25
        assert post.media_type == "Reel"
        assert post.traffic_source == "Explore"
        assert post.content_category == "Tutorial"

    def test_keys_are_case_and_whitespace_insensitive(self):
        raw = {" Shares ": "9", "ENGAGEMENT_RATE": "1.5", " media_type": "Image"}

        post = DataService.normalize_record(raw, 3)

        assert post.shares == 9
        assert post.engagement_rate == 1.5
        assert post.media_type == "Image"

    def test_missing_and_bad_values_default(self):
        post = DataService.normalize_record({"likes": "lots", "engagement_rate": ""}, 2)

        assert post.likes == 0
        assert post.comments == 0
        assert post.engagement_rate == 0.0
        assert post.media_type == ""
        assert post.upload_date == ""

    def test_row_index_used_without_post_id(self):
        assert DataService.normalize_record({"shares": "1"}, 4).id == 4

    def test_blank_post_id_falls_back_to_index(self):
        post = DataService.normalize_record({"post_id": "  ", "shares": "1"}, 5)

        assert post.id == 5
        assert post.post_id == 5

    def test_string_values_pass_through_verbatim(self):
        post = DataService.normalize_record({"upload_date": " not a date ", "media_type": "reel "}, 1)

        assert post.upload_date == " not a date "
        assert post.media_type == "reel "

    def test_normalize_records_keeps_order(self):
        records = [{"shares": str(n)} for n in (3, 1, 2)]

        posts = DataService.normalize_records(records)

        assert [p.id for p in posts] == [1, 2, 3]
        assert [p.shares for p in posts] == [3, 1, 2]

    def test_missing_numeric_column_defaults_every_row(self):
        records = [{"shares": "1"}, {"shares": "2"}]

        posts = DataService.normalize_records(records)

        assert all(p.saves == 0 for p in posts)

    def test_normalize_records_empty(self):
        assert DataService.normalize_records([]) == []

    def test_ids_reproducible(self):
        records = [{"post_id": "a", "shares": "1"}, {"shares": "2"}]

        first = DataService.normalize_records(records)
        second = DataService.normalize_records(records)

        assert [p.id for p in first] == [p.id for p in second] == ["a", 2]


class TestParseCsvFile:
    """Tests for parse_csv_file."""

    def test_rows_are_string_records(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("post_id,shares,media_type\n007,12,Reel\n008,3,Image\n", encoding="utf-8")

        records = DataService.parse_csv_file(str(path))

        assert records == [
            {"post_id": "007", "shares": "12", "media_type": "Reel"},
            {"post_id": "008", "shares": "3", "media_type": "Image"},
        ]

    def test_header_whitespace_is_preserved(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text(" Shares ,saves\n1,2\n", encoding="utf-8")

        records = DataService.parse_csv_file(str(path))

        assert list(records[0].keys()) == [" Shares ", "saves"]

    def test_byte_order_mark_is_stripped(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("engagement_rate,shares\n1.5,2\n", encoding="utf-8-sig")

        records = DataService.parse_csv_file(str(path))

        assert "engagement_rate" in records[0]

    def test_short_rows_padded_with_empty_strings(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("shares,saves,likes\n1,2\n", encoding="utf-8")

        records = DataService.parse_csv_file(str(path))

        assert records == [{"shares": "1", "saves": "2", "likes": ""}]

    def test_header_only_file_has_no_records(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("engagement_rate,media_type\n", encoding="utf-8")

        assert DataService.parse_csv_file(str(path)) == []

    def test_zero_byte_file_has_no_records(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_bytes(b"")

        assert DataService.parse_csv_file(str(path)) == []

    def test_extra_trailing_fields_are_dropped(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text(
            "engagement_rate,media_type,followers_gained,shares,saves\n"
            "1,Reel,1,1,1\n"
            "2,Image,2,2,2,extra\n",
            encoding="utf-8",
        )

        records = DataService.parse_csv_file(str(path))

        assert records[1] == {
            "engagement_rate": "2",
            "media_type": "Image",
            "followers_gained": "2",
            "shares": "2",
            "saves": "2",
        }

    def test_trailing_delimiter_is_ignored(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("shares,saves\n1,2,\n", encoding="utf-8")

        assert DataService.parse_csv_file(str(path)) == [{"shares": "1", "saves": "2"}]
