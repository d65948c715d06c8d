from dataclasses import dataclass
from typing import Iterable, List, Optional

from pyq_api.core.errors import CatalogIntegrityError
from pyq_api.services.catalog_store import CatalogStore, PaperRecord, UniversityRecord


@dataclass(frozen=True)
class JoinedPaper:
    paper: PaperRecord
    university: UniversityRecord


def join_universities(store: CatalogStore, papers: Iterable[PaperRecord]) -> List[JoinedPaper]:
    joined: List[JoinedPaper] = []
    for paper in papers:
        university = store.get_university(paper.university_id)
        if university is None:
            # impossible via create_paper côté service : l'université est vérifiée avant
            raise CatalogIntegrityError(
                f"Paper {paper.id} references missing university {paper.university_id}"
            )
        joined.append(JoinedPaper(paper=paper, university=university))
    return joined


def list_joined_papers(store: CatalogStore) -> List[JoinedPaper]:
    return join_universities(store, store.list_papers())


def _matches_query(item: JoinedPaper, needle: str) -> bool:
    fields = (
        item.paper.title,
        item.paper.subject,
        str(item.paper.year),
        item.university.name,
    )
    return any(needle in f.lower() for f in fields)


def search_papers(store: CatalogStore, query: str) -> List[JoinedPaper]:
    """
    Recherche insensible à la casse (sous-chaîne) sur titre, matière,
    année et nom de l'université. Un seul champ suffit.
    """
    needle = query.lower()
    return [item for item in list_joined_papers(store) if _matches_query(item, needle)]


def filter_papers(
    store: CatalogStore,
    university_ids: Optional[Iterable[int]] = None,
    years: Optional[Iterable[int]] = None,
    subjects: Optional[Iterable[str]] = None,
) -> List[JoinedPaper]:
    """
    ET entre critères, OU à l'intérieur d'un critère.
    Un critère absent ou vide ne filtre rien.
    """
    wanted_universities = set(university_ids or ())
    wanted_years = set(years or ())
    wanted_subjects = set(subjects or ())

    def keep(paper: PaperRecord) -> bool:
        if wanted_universities and paper.university_id not in wanted_universities:
            return False
        if wanted_years and paper.year not in wanted_years:
            return False
        if wanted_subjects and paper.subject not in wanted_subjects:
            return False
        return True

    return [item for item in list_joined_papers(store) if keep(item.paper)]
