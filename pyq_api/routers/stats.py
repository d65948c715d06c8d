from fastapi import APIRouter, Depends

from pyq_api.core.deps import get_catalog_service
from pyq_api.models.catalog import CatalogStats
from pyq_api.services.catalog import CatalogService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=CatalogStats)
def get_stats(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.compute_stats()
