from datetime import datetime

from models.entities import CollectionLog
from reports.daily import ReportService, bucket_week, summarize_day
from tests.conftest import TODAY, TZ, make_household


def _log(day, status, amount=0.0, household_id="h1"):
    return CollectionLog(
        collector_id="c1",
        collector_name="Ravi",
        household_id=household_id,
        resident_name="R",
        timestamp=datetime(day.year, day.month, day.day, 9, 0, tzinfo=TZ),
        date=day,
        status=status,
        amount_collected=amount,
    )


def test_summarize_day_counts_collected_and_paid():
    out = summarize_day(5, [_log(TODAY, "collected", 100), _log(TODAY, "paid", 50.5), _log(TODAY, "not-available")])
    assert out == {"total": 5, "covered": 2, "pending": 3, "revenue": 150.5}


def test_pending_never_negative():
    assert summarize_day(1, [_log(TODAY, "collected"), _log(TODAY, "paid")])["pending"] == 0


def test_bucket_week_labels_and_counts():
    days = bucket_week(TODAY, [_log(TODAY, "collected"), _log(TODAY, "skipped"), _log(datetime(2025, 3, 4).date(), "paid")])
    assert len(days) == 7
    assert days[-1] == {"day": "Mon", "date": "2025-03-10", "collected": 1, "missed": 1}
    assert days[0]["date"] == "2025-03-04"
    assert days[0]["collected"] == 1


def test_report_service_reads_store(households, logs):
    make_household(households)
    make_household(households, phone="9847054301")
    logs.create(_log(TODAY, "collected", 100))
    svc = ReportService(households=households, logs=logs)

    summary = svc.daily_summary(TODAY)
    assert summary["date"] == "2025-03-10"
    assert summary["covered"] == 1
    assert summary["pending"] == 1
    assert sum(d["collected"] for d in svc.weekly_trend(TODAY)) == 1
