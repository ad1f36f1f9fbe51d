from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import contests_to_frame, format_event_line, overflow_label
from contesthub.calendar.projector import (
    month_grid,
    project_month,
    shift_month,
    todays_deadlines,
    upcoming_deadlines,
)
from contesthub.ingest.provider import ContestProvider, ProviderSettings
from contesthub.normalize.dates import format_date_only
from contesthub.normalize.schema import CATEGORIES, Contest
from contesthub.rank.heuristics import FIELD_RULES, CalendarFilters, PrizeRange, apply_calendar_filters
from contesthub.rank.listing import ALL_CATEGORIES, ListSort, ListStatusFilter, filter_contests
from contesthub.rank.status import dday_label, partition_by_status

HOME_SECTION_LIMIT = 6
EVENTS_PER_DAY = 3
TODAYS_DEADLINES_LIMIT = 6
WEEKDAY_LABELS = ("일", "월", "화", "수", "목", "금", "토")
PRIZE_RANGE_LABELS = {
    PrizeRange.ALL: "전체",
    PrizeRange.UNDER_100: "100만원 미만",
    PrizeRange.FROM_100_TO_300: "100~300만원",
    PrizeRange.FROM_300_TO_1000: "300~1000만원",
    PrizeRange.OVER_1000: "1000만원 이상",
}
STATUS_FILTER_LABELS = {
    ListStatusFilter.ALL: "전체",
    ListStatusFilter.OPEN: "접수중",
    ListStatusFilter.URGENT: "마감임박 (D-7)",
}


def _ensure_session_state() -> None:
    if "provider" not in st.session_state:
        st.session_state.provider = ContestProvider(ProviderSettings.from_env())
    today = date.today()
    st.session_state.setdefault("calendar_year", today.year)
    st.session_state.setdefault("calendar_month", today.month)


def _load_contests() -> list[Contest]:
    provider: ContestProvider = st.session_state.provider
    return provider.get_contests()


def _render_contest_card(contest: Contest, today: date) -> None:
    with st.container(border=True):
        st.caption(f"{dday_label(contest, today)} · {contest.category}")
        st.markdown(f"**{contest.title}**")
        st.caption(f"{contest.organizer} · 마감 {contest.deadline}")
        if contest.apply_url:
            st.link_button("지원하기", contest.apply_url)


def _render_card_row(contests: list[Contest], today: date, *, empty_message: str) -> None:
    if not contests:
        st.info(empty_message)
        return
    columns = st.columns(3)
    for index, contest in enumerate(contests):
        with columns[index % 3]:
            _render_contest_card(contest, today)


def _render_home(contests: list[Contest], today: date) -> None:
    groups = partition_by_status(contests, today)

    st.subheader("진행중인 공모전")
    _render_card_row(groups.ongoing[:HOME_SECTION_LIMIT], today, empty_message="진행중인 공모전이 없습니다.")

    st.subheader("마감 임박 공모전 (D-7)")
    _render_card_row(groups.urgent, today, empty_message="마감 임박 공모전이 없습니다.")

    st.subheader("최근 마감된 공모전")
    _render_card_row(
        groups.closed_recent[:HOME_SECTION_LIMIT], today, empty_message="최근 마감된 공모전이 없습니다."
    )

    st.subheader("3주 이내 마감 일정")
    upcoming = upcoming_deadlines(contests, today)
    if upcoming:
        st.dataframe(contests_to_frame(upcoming, today=today), use_container_width=True, hide_index=True)
    else:
        st.info("3주 이내 마감 일정이 없습니다.")


def _render_list(contests: list[Contest], today: date) -> None:
    filter_col, category_col, sort_col = st.columns(3)
    status = filter_col.radio(
        "상태 필터",
        options=list(ListStatusFilter),
        format_func=lambda value: STATUS_FILTER_LABELS[value],
        horizontal=True,
    )
    category = category_col.selectbox(
        "카테고리",
        options=[ALL_CATEGORIES, *CATEGORIES],
        format_func=lambda value: "전체보기" if value == ALL_CATEGORIES else value,
    )
    sort = sort_col.selectbox(
        "정렬",
        options=list(ListSort),
        format_func=lambda value: "마감순" if value is ListSort.DEADLINE else "최신순",
    )
    search = st.text_input("공모전 제목, 주최, 태그 검색")

    if st.button("데이터 새로고침"):
        st.session_state.provider.refresh()
        st.rerun()

    filtered = filter_contests(
        contests,
        status=status,
        category=category,
        search=search,
        sort=sort,
        reference=today,
    )
    st.caption(f"{len(filtered)}건")
    if filtered:
        st.dataframe(contests_to_frame(filtered, today=today), use_container_width=True, hide_index=True)
    else:
        st.info("조건에 맞는 공모전이 없습니다.")


def _calendar_filters_from_sidebar() -> CalendarFilters:
    with st.sidebar:
        st.header("필터")
        st.caption("관심 분야")
        fields = frozenset(key for key in FIELD_RULES if st.checkbox(key, key=f"field_{key}"))
        prize_range = st.selectbox(
            "상금 규모",
            options=list(PrizeRange),
            format_func=lambda value: PRIZE_RANGE_LABELS[value],
        )
        st.caption("* 요약(summary)에서 금액을 추정해 분류(없으면 제외됨)")
        team_only = st.checkbox("팀원 모집 중인 공모전만")
    return CalendarFilters(fields=fields, prize_range=prize_range, team_only=team_only)


def _render_calendar(contests: list[Contest], today: date, filters: CalendarFilters) -> None:
    filtered = apply_calendar_filters(contests, filters)
    year = int(st.session_state.calendar_year)
    month = int(st.session_state.calendar_month)

    prev_col, title_col, next_col = st.columns([1, 4, 1])
    if prev_col.button("◀ 이전 달"):
        st.session_state.calendar_year, st.session_state.calendar_month = shift_month(year, month, -1)
        st.rerun()
    if next_col.button("다음 달 ▶"):
        st.session_state.calendar_year, st.session_state.calendar_month = shift_month(year, month, 1)
        st.rerun()
    title_col.subheader(f"{year}년 {month}월")

    events_by_day = project_month(filtered, year, month)
    header = st.columns(7)
    for column, label in zip(header, WEEKDAY_LABELS):
        column.markdown(f"**{label}**")

    for week in month_grid(year, month):
        cells = st.columns(7)
        for cell, day in zip(cells, week):
            if day is None:
                continue
            is_today = date(year, month, day) == today
            lines = [f"**{day}**" + (" (오늘)" if is_today else "")]
            day_events = events_by_day.get(day, [])
            lines.extend(format_event_line(event, today=today) for event in day_events[:EVENTS_PER_DAY])
            more = overflow_label(len(day_events), EVENTS_PER_DAY)
            if more:
                lines.append(more)
            cell.markdown("  \n".join(lines))

    st.subheader(f"오늘의 마감 ({format_date_only(today)})")
    due_today = todays_deadlines(filtered, today)
    if not due_today:
        st.write("오늘 마감 공모전 없음")
    for contest in due_today[:TODAYS_DEADLINES_LIMIT]:
        st.write(f"- {contest.title} · {contest.organizer}")


def main() -> None:
    st.set_page_config(page_title="Contest Hub", layout="wide")
    st.title("Contest Hub")
    st.caption("교내 공모전, 서포터즈, IC-PBL, 대외활동을 한곳에서")

    _ensure_session_state()
    filters = _calendar_filters_from_sidebar()

    try:
        contests = _load_contests()
    except Exception as exc:
        st.error(f"공모전 데이터를 불러오지 못했습니다: {exc}")
        contests = []

    report = st.session_state.provider.last_report
    st.caption(f"Data origin: {report.origin} ({report.records} contests)")
    today = date.today()

    home_tab, list_tab, calendar_tab = st.tabs(["홈", "공모전 목록", "캘린더"])
    with home_tab:
        _render_home(contests, today)
    with list_tab:
        _render_list(contests, today)
    with calendar_tab:
        _render_calendar(contests, today, filters)


if __name__ == "__main__":
    main()
