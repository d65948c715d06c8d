from typing import List

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from pyq_api.core.deps import get_catalog_service
from pyq_api.models.catalog import Paper, University, UniversityCreate, UniversityWithStats
from pyq_api.services.catalog import CatalogService

router = APIRouter(prefix="/api/universities", tags=["universities"])


@router.get("", response_model=List[UniversityWithStats])
def list_universities(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.list_universities_with_stats()


@router.post("", response_model=University, status_code=HTTP_201_CREATED)
def create_university(body: UniversityCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.create_university(body)


@router.get("/{university_id}", response_model=University)
def get_university(university_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    university = catalog.get_university(university_id)
    if not university:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="University not found")
    return university


@router.get("/{university_id}/papers", response_model=List[Paper])
def list_university_papers(university_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.list_papers_for_university(university_id)
