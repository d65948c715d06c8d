from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from pyq_api.services.catalog_store import CatalogStore, PaperRecord, UniversityRecord

NO_PAPERS = "No papers"
RECENT_SUBJECTS_LIMIT = 3
RECENT_UPLOAD_WINDOW = timedelta(days=7)


@dataclass
class UniversityStats:
    paper_count: int = 0
    year_range: str = NO_PAPERS
    latest_upload: Optional[str] = None
    recent_subjects: List[str] = field(default_factory=list)


@dataclass
class CatalogTotals:
    total_universities: int
    total_papers: int
    recent_uploads: int


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n > 1 else ''} ago"


def upload_age_label(uploaded_at: datetime, now: datetime) -> str:
    """
    Libellé "humain" de l'ancienneté d'un upload (arrondi vers le bas).

    0 j -> "Today", 1 j -> "1 day ago", 2-6 j -> "n days ago",
    7-29 j -> semaines, >= 30 j -> mois (tranches de 30 jours).
    """
    days = max((now - uploaded_at) // timedelta(days=1), 0)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return _plural(days // 7, "week")
    return _plural(days // 30, "month")


def year_range(papers: Sequence[PaperRecord]) -> str:
    if not papers:
        return NO_PAPERS
    years = [p.year for p in papers]
    return f"{min(years)}-{max(years)}"


def first_distinct_subjects(papers: Sequence[PaperRecord], limit: int = RECENT_SUBJECTS_LIMIT) -> List[str]:
    subjects: List[str] = []
    for p in papers:
        if p.subject not in subjects:
            subjects.append(p.subject)
        if len(subjects) >= limit:
            break
    return subjects


def university_stats(papers: Sequence[PaperRecord], now: datetime) -> UniversityStats:
    """Stats d'une université à partir de ses papiers (ordre d'insertion)."""
    if not papers:
        return UniversityStats()

    latest = max(papers, key=lambda p: p.uploaded_at)
    return UniversityStats(
        paper_count=len(papers),
        year_range=year_range(papers),
        latest_upload=upload_age_label(latest.uploaded_at, now),
        recent_subjects=first_distinct_subjects(papers),
    )


def universities_with_stats(store: CatalogStore) -> List[Tuple[UniversityRecord, UniversityStats]]:
    # Recalcul complet à chaque appel, pas de cache
    now = store.now()
    all_papers = store.list_papers()
    out: List[Tuple[UniversityRecord, UniversityStats]] = []
    for university in store.list_universities():
        papers = [p for p in all_papers if p.university_id == university.id]
        out.append((university, university_stats(papers, now)))
    return out


def catalog_totals(store: CatalogStore) -> CatalogTotals:
    cutoff = store.now() - RECENT_UPLOAD_WINDOW
    recent = sum(1 for p in store.list_papers() if p.uploaded_at > cutoff)
    return CatalogTotals(
        total_universities=store.count_universities(),
        total_papers=store.count_papers(),
        recent_uploads=recent,
    )
