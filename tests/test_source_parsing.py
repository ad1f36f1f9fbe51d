from __future__ import annotations

import json
from datetime import date, datetime, timezone

from contesthub.ingest.sources.fallback import FallbackSource, build_sample_records
from contesthub.ingest.sources.remote_api import RemoteApiSource, map_admin_record
from contesthub.normalize.schema import CATEGORIES, Contest

FETCHED_AT = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)


def test_map_admin_record_maps_public_fields() -> None:
    contest = map_admin_record(
        {
            "id": 42,
            "title": "캡스톤 옥션마켓",
            "description": "총 상금 300만원",
            "imageUrl": "https://example.com/a.png",
            "applyUrl": "https://example.com/apply",
            "category": "서포터즈",
            "targets": ["LINC 사업단", "3학년", "4학년", "휴학생", "졸업예정자", "교직원"],
            "startDate": "2024-03-01T00:00:00.000Z",
            "endDate": "2024-03-20",
        },
        fetched_at=FETCHED_AT,
    )

    assert contest.id == "42"
    assert contest.organizer == "LINC 사업단"
    assert contest.category == "서포터즈"
    assert contest.start_date == "2024-03-01"
    assert contest.deadline == "2024-03-20"
    assert contest.end_date == "2024-03-20"
    assert contest.tags == ["LINC 사업단", "3학년", "4학년", "휴학생", "졸업예정자"]
    assert contest.target.startswith("LINC 사업단, 3학년")
    assert contest.source_url == contest.apply_url == "https://example.com/apply"
    assert contest.image_url == "https://example.com/a.png"


def test_map_admin_record_applies_defaults() -> None:
    contest = map_admin_record({"id": "x", "category": "unknown"}, fetched_at=FETCHED_AT)

    assert contest.title == "(제목 없음)"
    assert contest.organizer == "한양대 ERICA"
    assert contest.category == "교내 공모전"
    assert contest.target == "전체"
    assert contest.tags == []
    assert contest.start_date is None
    assert contest.deadline == "2024-03-10"
    assert contest.summary == ""


def test_map_admin_record_deadline_falls_back_to_start_date() -> None:
    contest = map_admin_record(
        {"id": "x", "startDate": "2024-04-02", "endDate": "garbage"},
        fetched_at=FETCHED_AT,
    )

    assert contest.deadline == "2024-04-02"


def test_remote_source_parse_skips_non_objects_and_non_lists() -> None:
    source = RemoteApiSource("https://api.example.com/contests")
    payload = json.dumps([{"id": "a", "title": "A", "endDate": "2024-03-20"}, "oops", 3]).encode("utf-8")

    contests = source.parse(payload, fetched_at=FETCHED_AT)

    assert [c.id for c in contests] == ["a"]
    assert source.parse(b'{"items": []}', fetched_at=FETCHED_AT) == []


def test_remote_source_parse_keeps_good_records_beside_malformed_dates() -> None:
    source = RemoteApiSource("https://api.example.com/contests")
    payload = json.dumps(
        [
            {"id": "ok", "title": "OK", "endDate": "2024-03-20"},
            {"id": "dict", "title": "Dict", "endDate": {"x": 1}},
            {"id": "list", "title": "List", "startDate": ["2024-03-01"], "endDate": ["2024-03-20"]},
        ]
    ).encode("utf-8")

    contests = source.parse(payload, fetched_at=FETCHED_AT)

    assert [c.id for c in contests] == ["ok", "dict", "list"]
    assert contests[0].deadline == "2024-03-20"
    assert contests[1].deadline == "2024-03-10"
    assert contests[2].start_date is None
    assert contests[2].deadline == "2024-03-10"


def test_remote_source_fetch_uses_http_client() -> None:
    class _FakeClient:
        def __init__(self) -> None:
            self.urls: list[str] = []

        def get_bytes(self, url: str, **kwargs: object) -> bytes:
            self.urls.append(url)
            return b"[]"

    client = _FakeClient()
    raw = RemoteApiSource("https://api.example.com/contests").fetch(client)

    assert client.urls == ["https://api.example.com/contests"]
    assert raw.content == b"[]"
    assert raw.extension == "json"


def test_sample_records_are_placed_relative_to_today() -> None:
    records = build_sample_records(date(2024, 3, 10))

    assert len(records) == 10
    assert records[0]["deadline"] == "2024-03-13"
    assert records[0]["start_date"] == "2024-02-29"
    assert {record["category"] for record in records} <= set(CATEGORIES)


def test_fallback_source_round_trips_through_contest_mapping() -> None:
    source = FallbackSource()
    raw = source.fetch(None)

    contests = source.parse(raw.content, fetched_at=raw.fetched_at)

    assert len(contests) == 10
    assert all(isinstance(contest, Contest) for contest in contests)
    assert contests[0].image_url == "https://picsum.photos/400/200?random=1"


def test_contest_from_mapping_tolerates_missing_fields() -> None:
    contest = Contest.from_mapping({"id": 7, "title": None, "tags": "not-a-list"})

    assert contest.id == "7"
    assert contest.title == ""
    assert contest.tags == []
    assert contest.deadline == ""
    assert contest.to_dict()["imageUrl"] is None
