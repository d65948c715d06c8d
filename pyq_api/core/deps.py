from fastapi import Request

from pyq_api.core.config import Settings
from pyq_api.services.catalog import CatalogService
from pyq_api.services.storage import StorageService


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_service(request: Request) -> CatalogService:
    """
    Fournit l'instance unique du catalogue créée au démarrage (DI).
    """
    return request.app.state.catalog


def get_storage_service(request: Request) -> StorageService:
    """
    Fournit le service de stockage des uploads en dépendance (DI).
    """
    settings: Settings = request.app.state.settings
    return StorageService(base_path=settings.UPLOAD_PATH, max_upload_mb=settings.MAX_UPLOAD_MB)
