import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from pyq_api.core.config import Settings
from pyq_api.core.deps import get_catalog_service, get_settings_dep, get_storage_service
from pyq_api.core.errors import UniversityNotFoundError, ValidationError
from pyq_api.models.catalog import (
    Paper,
    PaperCreate,
    PaperFilter,
    PaperWithUniversity,
    UploadResponse,
)
from pyq_api.services.catalog import CatalogService
from pyq_api.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/papers", tags=["papers"])


@router.get("", response_model=List[PaperWithUniversity])
def list_papers(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.list_papers()


@router.get("/search", response_model=List[PaperWithUniversity])
def search_papers(
    q: Optional[str] = Query(default=None, description="Texte recherché (titre, matière, année, université)"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.search_papers(q or "")


@router.post("/filter", response_model=List[PaperWithUniversity])
def filter_papers(body: PaperFilter, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.filter_papers(body)


@router.post("/upload", response_model=UploadResponse, status_code=HTTP_201_CREATED)
def upload_papers(
    universityId: int = Form(...),
    subject: str = Form(...),
    year: int = Form(...),
    examType: str = Form(...),
    semester: Optional[str] = Form(default=None),
    papers: Optional[List[UploadFile]] = File(default=None),
    catalog: CatalogService = Depends(get_catalog_service),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings_dep),
):
    if not papers:
        raise ValidationError("No files uploaded")
    if len(papers) > settings.MAX_FILES_PER_UPLOAD:
        raise ValidationError(f"Too many files (max {settings.MAX_FILES_PER_UPLOAD})")
    if not subject.strip() or not examType.strip():
        raise ValidationError("Missing required fields")

    university = catalog.get_university(universityId)
    if not university:
        raise UniversityNotFoundError(universityId)

    # tout le lot est refusé si un seul fichier a un type ou une taille invalide
    contents = [storage.read_checked(f) for f in papers]

    uploaded: List[Paper] = []
    for f, data in zip(papers, contents):
        stored = storage.save_paper_file(university.name, f, contents=data)
        paper = catalog.create_paper(
            PaperCreate(
                universityId=university.id,
                title=stored.title,
                subject=subject,
                year=year,
                semester=semester or None,
                examType=examType,
                fileName=stored.file_name,
                filePath=stored.file_path,
                fileSize=stored.file_size,
                mimeType=stored.mime_type,
            )
        )
        uploaded.append(paper)

    return UploadResponse(
        message=f"Successfully uploaded {len(uploaded)} papers",
        papers=uploaded,
    )


@router.get("/{paper_id}", response_model=Paper)
def get_paper(paper_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    paper = catalog.get_paper_by_id(paper_id)
    if not paper:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Paper not found")
    return paper


@router.get("/{paper_id}/download")
def download_paper(
    paper_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
    storage: StorageService = Depends(get_storage_service),
):
    paper = catalog.get_paper_by_id(paper_id)
    if not paper:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Paper not found")

    path = storage.resolve(paper.filePath)
    if path is None:
        logger.warning("File for paper %s missing on disk: %s", paper.id, paper.filePath)
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="File not found on disk")

    return FileResponse(path=path, media_type=paper.mimeType, filename=paper.fileName)
