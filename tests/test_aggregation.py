from datetime import timedelta

import pytest

from pyq_api.services import aggregation
from pyq_api.services.aggregation import upload_age_label


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(0), "Today"),
        (timedelta(hours=23, minutes=59), "Today"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=2), "2 days ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
        (timedelta(days=7), "1 week ago"),
        (timedelta(days=8), "1 week ago"),
        (timedelta(days=14), "2 weeks ago"),
        (timedelta(days=29), "4 weeks ago"),
        (timedelta(days=30), "1 month ago"),
        (timedelta(days=35), "1 month ago"),
        (timedelta(days=60), "2 months ago"),
        (timedelta(days=400), "13 months ago"),
    ],
)
def test_upload_age_label(age, expected, clock):
    now = clock.current
    assert upload_age_label(now - age, now) == expected


def test_upload_age_label_future_counts_as_today(clock):
    now = clock.current
    assert upload_age_label(now + timedelta(hours=5), now) == "Today"


def _stats_by_name(store):
    return {u.name: s for u, s in aggregation.universities_with_stats(store)}


def test_university_without_papers_gets_placeholder_stats(store):
    store.create_university("Empty University", "Nowhere")
    stats = _stats_by_name(store)["Empty University"]
    assert stats.paper_count == 0
    assert stats.year_range == "No papers"
    assert stats.latest_upload is None
    assert stats.recent_subjects == []


def test_year_range_uses_min_and_max(store, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    for year in (2021, 2019, 2023):
        make_paper(u.id, year=year)
    assert _stats_by_name(store)["IIT Bombay"].year_range == "2019-2023"


def test_single_year_range_is_not_collapsed(store, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    make_paper(u.id, year=2020)
    make_paper(u.id, year=2020)
    assert _stats_by_name(store)["IIT Bombay"].year_range == "2020-2020"


def test_recent_subjects_are_first_three_distinct(store, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    for subject in ("A", "B", "A", "C", "D"):
        make_paper(u.id, subject=subject)
    stats = _stats_by_name(store)["IIT Bombay"]
    assert stats.recent_subjects == ["A", "B", "C"]
    assert stats.paper_count == 5


def test_stats_only_count_own_papers(store, make_paper):
    a = store.create_university("A", "x")
    b = store.create_university("B", "y")
    make_paper(a.id, year=2018)
    make_paper(b.id, year=2022)
    make_paper(b.id, year=2023)
    stats = _stats_by_name(store)
    assert stats["A"].paper_count == 1
    assert stats["A"].year_range == "2018-2018"
    assert stats["B"].paper_count == 2


def test_latest_upload_uses_newest_paper(store, clock, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    make_paper(u.id)
    clock.advance(days=27)
    make_paper(u.id)
    clock.advance(days=8)
    # plus ancien : 35 jours, plus récent : 8 jours
    assert _stats_by_name(store)["IIT Bombay"].latest_upload == "1 week ago"


def test_stats_are_recomputed_on_every_call(store, clock, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    make_paper(u.id)
    assert _stats_by_name(store)["IIT Bombay"].latest_upload == "Today"
    clock.advance(days=35)
    assert _stats_by_name(store)["IIT Bombay"].latest_upload == "1 month ago"


def test_catalog_totals_counts_last_seven_days(store, clock, make_paper):
    u = store.create_university("IIT Bombay", "Mumbai")
    make_paper(u.id)  # deviendra vieux de 10 jours
    clock.advance(days=4)
    make_paper(u.id)  # 6 jours
    clock.advance(days=6)
    make_paper(u.id)  # aujourd'hui

    totals = aggregation.catalog_totals(store)
    assert totals.total_universities == 1
    assert totals.total_papers == 3
    assert totals.recent_uploads == 2
