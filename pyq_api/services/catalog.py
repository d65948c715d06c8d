import logging
from typing import List, Optional

from pyq_api.core.errors import DuplicateNameError, UniversityNotFoundError, ValidationError
from pyq_api.models.catalog import (
    Account,
    AccountCreate,
    CatalogStats,
    Paper,
    PaperCreate,
    PaperFilter,
    PaperWithUniversity,
    University,
    UniversityCreate,
    UniversityWithStats,
)
from pyq_api.services import aggregation, query
from pyq_api.services.catalog_store import (
    AccountRecord,
    CatalogStore,
    PaperRecord,
    UniversityRecord,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Façade du catalogue consommée par les routers.

    Vérifie les invariants que le store n'impose pas (noms uniques,
    université existante pour un papier) et convertit les records internes
    en modèles publics.
    """

    def __init__(self, store: Optional[CatalogStore] = None) -> None:
        self.store = store if store is not None else CatalogStore()

    # ---------- public API ----------

    def create_account(self, body: AccountCreate) -> Account:
        if self.store.get_account_by_username(body.username) is not None:
            raise DuplicateNameError("Username already exists")
        record = self.store.create_account(username=body.username, password=body.password)
        return self._to_public_account(record)

    def get_account_by_username(self, username: str) -> Optional[Account]:
        record = self.store.get_account_by_username(username)
        return self._to_public_account(record) if record else None

    def create_university(self, body: UniversityCreate) -> University:
        if self.store.get_university_by_name(body.name) is not None:
            raise DuplicateNameError("University already exists")
        record = self.store.create_university(name=body.name, location=body.location)
        logger.info("University created: id=%s name=%s", record.id, record.name)
        return self._to_public_university(record)

    def get_university(self, university_id: int) -> Optional[University]:
        record = self.store.get_university(university_id)
        return self._to_public_university(record) if record else None

    def create_paper(self, body: PaperCreate) -> Paper:
        if self.store.get_university(body.universityId) is None:
            raise UniversityNotFoundError(body.universityId)
        record = self.store.create_paper(
            university_id=body.universityId,
            title=body.title,
            subject=body.subject,
            year=body.year,
            semester=body.semester,
            exam_type=body.examType,
            file_name=body.fileName,
            file_path=body.filePath,
            file_size=body.fileSize,
            mime_type=body.mimeType,
        )
        logger.info(
            "Paper created: id=%s university=%s subject=%s year=%s",
            record.id, record.university_id, record.subject, record.year,
        )
        return self._to_public_paper(record)

    def get_paper_by_id(self, paper_id: int) -> Optional[Paper]:
        record = self.store.get_paper(paper_id)
        return self._to_public_paper(record) if record else None

    def list_universities_with_stats(self) -> List[UniversityWithStats]:
        out: List[UniversityWithStats] = []
        for record, stats in aggregation.universities_with_stats(self.store):
            out.append(
                UniversityWithStats(
                    **self._to_public_university(record).model_dump(),
                    paperCount=stats.paper_count,
                    latestUpload=stats.latest_upload,
                    yearRange=stats.year_range,
                    recentSubjects=stats.recent_subjects,
                )
            )
        return out

    def list_papers(self) -> List[PaperWithUniversity]:
        return self._to_public_joined(query.list_joined_papers(self.store))

    def list_papers_for_university(self, university_id: int) -> List[Paper]:
        return [self._to_public_paper(p) for p in self.store.list_papers_for_university(university_id)]

    def search_papers(self, q: str) -> List[PaperWithUniversity]:
        if not q:
            raise ValidationError("Search query is required")
        return self._to_public_joined(query.search_papers(self.store, q))

    def filter_papers(self, body: PaperFilter) -> List[PaperWithUniversity]:
        items = query.filter_papers(
            self.store,
            university_ids=body.universityIds,
            years=body.years,
            subjects=body.subjects,
        )
        return self._to_public_joined(items)

    def compute_stats(self) -> CatalogStats:
        totals = aggregation.catalog_totals(self.store)
        return CatalogStats(
            totalUniversities=totals.total_universities,
            totalPapers=totals.total_papers,
            recentUploads=totals.recent_uploads,
        )

    # ---------- internals ----------

    def _to_public_account(self, a: AccountRecord) -> Account:
        return Account(id=a.id, username=a.username, password=a.password)

    def _to_public_university(self, u: UniversityRecord) -> University:
        return University(id=u.id, name=u.name, location=u.location, createdAt=u.created_at)

    def _to_public_paper(self, p: PaperRecord) -> Paper:
        return Paper(
            id=p.id,
            universityId=p.university_id,
            title=p.title,
            subject=p.subject,
            year=p.year,
            semester=p.semester,
            examType=p.exam_type,
            fileName=p.file_name,
            filePath=p.file_path,
            fileSize=p.file_size,
            mimeType=p.mime_type,
            uploadedAt=p.uploaded_at,
        )

    def _to_public_joined(self, items: List[query.JoinedPaper]) -> List[PaperWithUniversity]:
        return [
            PaperWithUniversity(
                **self._to_public_paper(item.paper).model_dump(),
                university=self._to_public_university(item.university),
            )
            for item in items
        ]
