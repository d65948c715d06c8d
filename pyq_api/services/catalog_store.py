import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SAMPLE_UNIVERSITIES = [
    ("Delhi University", "New Delhi"),
    ("Mumbai University", "Mumbai"),
    ("Anna University", "Chennai"),
    ("Jawaharlal Nehru University", "New Delhi"),
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AccountRecord:
    id: int
    username: str
    password: str


@dataclass(frozen=True)
class UniversityRecord:
    id: int
    name: str
    location: str
    created_at: datetime


@dataclass(frozen=True)
class PaperRecord:
    id: int
    university_id: int
    title: str
    subject: str
    year: int
    semester: Optional[str]
    exam_type: str
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    uploaded_at: datetime


class CatalogStore:
    """
    Stockage en mémoire des comptes, universités et papiers.

    Create + read uniquement : pas d'update ni de delete, les ids ne sont
    jamais réutilisés. Les lookups renvoient None plutôt que lever.
    Aucune persistance : tout disparaît avec le process.
    """

    def __init__(self, seed: bool = True, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._accounts: Dict[int, AccountRecord] = {}
        self._universities: Dict[int, UniversityRecord] = {}
        self._papers: Dict[int, PaperRecord] = {}
        self._next_account_id = 1
        self._next_university_id = 1
        self._next_paper_id = 1

        if seed:
            self._seed_sample_universities()

    def now(self) -> datetime:
        return self._clock()

    # ---------- accounts ----------

    def create_account(self, username: str, password: str) -> AccountRecord:
        account = AccountRecord(id=self._next_account_id, username=username, password=password)
        self._next_account_id += 1
        self._accounts[account.id] = account
        return account

    def get_account(self, account_id: int) -> Optional[AccountRecord]:
        return self._accounts.get(account_id)

    def get_account_by_username(self, username: str) -> Optional[AccountRecord]:
        for account in self._accounts.values():
            if account.username == username:
                return account
        return None

    # ---------- universities ----------

    def create_university(self, name: str, location: str) -> UniversityRecord:
        university = UniversityRecord(
            id=self._next_university_id,
            name=name,
            location=location,
            created_at=self._clock(),
        )
        self._next_university_id += 1
        self._universities[university.id] = university
        return university

    def get_university(self, university_id: int) -> Optional[UniversityRecord]:
        return self._universities.get(university_id)

    def get_university_by_name(self, name: str) -> Optional[UniversityRecord]:
        for university in self._universities.values():
            if university.name == name:
                return university
        return None

    def list_universities(self) -> List[UniversityRecord]:
        return list(self._universities.values())

    def count_universities(self) -> int:
        return len(self._universities)

    # ---------- papers ----------

    def create_paper(
        self,
        university_id: int,
        title: str,
        subject: str,
        year: int,
        exam_type: str,
        file_name: str,
        file_path: str,
        file_size: int,
        mime_type: str,
        semester: Optional[str] = None,
    ) -> PaperRecord:
        paper = PaperRecord(
            id=self._next_paper_id,
            university_id=university_id,
            title=title,
            subject=subject,
            year=year,
            semester=semester or None,
            exam_type=exam_type,
            file_name=file_name,
            file_path=file_path,
            file_size=file_size,
            mime_type=mime_type,
            uploaded_at=self._clock(),
        )
        self._next_paper_id += 1
        self._papers[paper.id] = paper
        return paper

    def get_paper(self, paper_id: int) -> Optional[PaperRecord]:
        return self._papers.get(paper_id)

    def list_papers(self) -> List[PaperRecord]:
        return list(self._papers.values())

    def list_papers_for_university(self, university_id: int) -> List[PaperRecord]:
        return [p for p in self._papers.values() if p.university_id == university_id]

    def count_papers(self) -> int:
        return len(self._papers)

    # ---------- internals ----------

    def _seed_sample_universities(self) -> None:
        for name, location in SAMPLE_UNIVERSITIES:
            self.create_university(name=name, location=location)
        logger.info("Seeded %d sample universities", len(SAMPLE_UNIVERSITIES))
