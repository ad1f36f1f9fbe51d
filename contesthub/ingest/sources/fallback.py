from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from typing import Any

from contesthub.ingest.base import BaseSource, RawResponse
from contesthub.normalize.dates import format_date_only
from contesthub.normalize.schema import CAMPUS_CONTEST, IC_PBL, SUPPORTERS, Contest

# (id, title, organizer, category, deadline offset, start offset, tags, target, summary)
_SAMPLE_ROWS: tuple[tuple[str, str, str, str, int, int, tuple[str, ...], str, str], ...] = (
    (
        "c1",
        "2024학년도 1학기 HY-Lion 창업 아이디어 경진대회",
        "창업교육센터",
        CAMPUS_CONTEST,
        3,
        -10,
        ("창업", "아이디어", "장학금"),
        "ERICA 재학생(휴학생 포함)",
        "학생들의 창의적인 창업 아이디어를 발굴하고 사업화를 지원하기 위한 교내 경진대회입니다. 총 상금 500만원.",
    ),
    (
        "c2",
        "제5회 소프트웨어 융합 해커톤",
        "SW중심대학사업단",
        CAMPUS_CONTEST,
        7,
        -5,
        ("개발", "해커톤", "밤샘"),
        "SW전공 및 융합전공생",
        "무박 2일간 진행되는 SW 해커톤. AI, IoT, Web/App 등 자유 주제로 진행됩니다.",
    ),
    (
        "c3",
        "2024 하계방학 IC-PBL 현장실습 참여자 모집",
        "IC-PBL센터",
        IC_PBL,
        14,
        0,
        ("인턴십", "현장실습", "학점인정"),
        "3, 4학년 재학생",
        "기업과 연계하여 실제 현장 문제를 해결하는 IC-PBL 현장실습 프로그램입니다.",
    ),
    (
        "c4",
        "제12기 희망한대 서포터즈 모집",
        "사회봉사단",
        SUPPORTERS,
        5,
        -2,
        ("봉사", "대외활동", "홍보"),
        "전교생",
        "한양대학교 ERICA의 건학이념인 사랑의 실천을 널리 알릴 서포터즈를 모집합니다.",
    ),
    (
        "c5",
        "2024 ERICA 학술정보관 독서 감상문 대회",
        "학술정보관",
        CAMPUS_CONTEST,
        20,
        -1,
        ("독서", "글쓰기", "교양"),
        "학부생 전체",
        "지정 도서를 읽고 독서 감상문을 제출하세요. 우수작에게는 총장 명의 상장이 수여됩니다.",
    ),
    (
        "c6",
        "2024-2학기 캡스톤디자인 옥션마켓",
        "LINC 3.0 사업단",
        CAMPUS_CONTEST,
        1,
        -20,
        ("캡스톤", "전시", "작품"),
        "캡스톤디자인 수강생",
        "한 학기 동안 수행한 캡스톤디자인 결과물을 전시하고 기업과 매칭하는 옥션마켓입니다.",
    ),
    (
        "c7",
        "AI 융합 전공 설명회 및 로고 디자인 공모전",
        "인공지능융합연구센터",
        CAMPUS_CONTEST,
        10,
        -3,
        ("디자인", "AI", "로고"),
        "전교생",
        "신설되는 AI 융합 전공을 상징하는 창의적인 로고를 디자인해주세요.",
    ),
    (
        "c8",
        "2024 외국인 유학생 멘토링 프로그램 멘토 모집",
        "국제처",
        CAMPUS_CONTEST,
        8,
        1,
        ("멘토링", "국제교류", "봉사"),
        "재학생(한국인)",
        "외국인 유학생들의 학교 생활 적응을 도울 멘토를 모집합니다.",
    ),
    (
        "c9",
        "2024 ERICA 사진 공모전: 캠퍼스의 봄",
        "홍보팀",
        CAMPUS_CONTEST,
        15,
        5,
        ("사진", "예술", "캠퍼스"),
        "전교생 및 교직원",
        "아름다운 에리카 캠퍼스의 봄 풍경을 담은 사진을 공모합니다.",
    ),
    (
        "c10",
        "교내 셔틀버스 개선 아이디어 공모",
        "총무관리처",
        CAMPUS_CONTEST,
        25,
        0,
        ("교통", "복지", "아이디어"),
        "전교생",
        "더 편리한 셔틀버스 운행을 위한 학생 여러분의 소중한 의견을 기다립니다.",
    ),
)


def build_sample_records(today: date) -> list[dict[str, Any]]:
    """Bundled sample contests with dates placed relative to ``today``."""

    records: list[dict[str, Any]] = []
    for index, row in enumerate(_SAMPLE_ROWS, start=1):
        contest_id, title, organizer, category, deadline_in, start_in, tags, target, summary = row
        records.append(
            {
                "id": contest_id,
                "title": title,
                "organizer": organizer,
                "category": category,
                "deadline": format_date_only(today + timedelta(days=deadline_in)),
                "start_date": format_date_only(today + timedelta(days=start_in)),
                "tags": list(tags),
                "target": target,
                "summary": summary,
                "source_url": f"https://example.com/notice/{index}",
                "apply_url": f"https://example.com/apply/{index}",
                "imageUrl": f"https://picsum.photos/400/200?random={index}",
            }
        )
    return records


class FallbackSource(BaseSource):
    name = "fallback"

    def fetch(self, http_client: Any) -> RawResponse:
        fetched_at = self.now()
        content = json.dumps(build_sample_records(fetched_at.date()), ensure_ascii=False).encode("utf-8")
        return RawResponse(content=content, extension="json", fetched_at=fetched_at)

    def parse(self, raw_content: bytes, *, fetched_at: datetime) -> list[Contest]:
        loaded = json.loads(raw_content.decode("utf-8"))
        return [Contest.from_mapping(item) for item in loaded if isinstance(item, dict)]
