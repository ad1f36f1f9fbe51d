from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from contesthub.calendar.projector import todays_deadlines
from contesthub.ingest.provider import ContestProvider, ProviderSettings
from contesthub.normalize.dates import format_date_only, parse_date_only, start_of_today
from contesthub.rank.status import ContestStatus, classify

logger = logging.getLogger("run_ingest")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch contests and summarize their status buckets.")
    parser.add_argument("--api-url", type=str, default=None, help="Read-only contest API endpoint.")
    parser.add_argument("--raw-dir", type=Path, default=None, help="Raw payload cache directory.")
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Reference date in YYYY-MM-DD format. Defaults to today.",
    )
    parser.add_argument("--request-timeout-seconds", type=float, default=None)
    parser.add_argument("--requests-per-second", type=float, default=None)
    return parser.parse_args(argv)


def _coerce_reference_date(value: str | None) -> date:
    if value is None:
        return start_of_today()
    parsed = parse_date_only(value)
    if parsed is None:
        raise ValueError(f"--date must be YYYY-MM-DD, received {value!r}")
    return parsed


def build_settings(args: argparse.Namespace, env_settings: ProviderSettings | None = None) -> ProviderSettings:
    """Explicit flags win; anything left unset comes from ``CONTESTHUB_*``."""

    env = env_settings or ProviderSettings.from_env()
    return ProviderSettings(
        api_url=args.api_url or env.api_url,
        raw_dir=args.raw_dir if args.raw_dir is not None else env.raw_dir,
        timeout_seconds=(
            args.request_timeout_seconds if args.request_timeout_seconds is not None else env.timeout_seconds
        ),
        requests_per_second=(
            args.requests_per_second if args.requests_per_second is not None else env.requests_per_second
        ),
    )


def run_ingest(provider: ContestProvider, *, reference: date) -> dict[str, Any]:
    contests = provider.get_contests()
    counts = {status.value: 0 for status in ContestStatus}
    for contest in contests:
        counts[classify(contest, reference).value] += 1

    report = provider.last_report
    return {
        "reference_date": format_date_only(reference),
        "origin": report.origin,
        "records": len(contests),
        "cache_path": report.cache_path,
        "errors": list(report.errors),
        "status_counts": counts,
        "todays_deadlines": [contest.title for contest in todays_deadlines(contests, reference)],
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        reference = _coerce_reference_date(args.date)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    summary = run_ingest(ContestProvider(build_settings(args)), reference=reference)

    print(f"Reference date: {summary['reference_date']}")
    print(f"Origin: {summary['origin']} ({summary['records']} contests)")
    if summary["cache_path"]:
        print(f"Cached payload: {summary['cache_path']}")
    print(
        "Status counts: "
        + ", ".join(f"{status}={count}" for status, count in summary["status_counts"].items())
    )
    print(f"Deadlines today: {len(summary['todays_deadlines'])}")
    for title in summary["todays_deadlines"]:
        print(f"  - {title}")
    return 0 if summary["records"] > 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
