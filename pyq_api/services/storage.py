import logging
import random
import re
import time
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from starlette.status import HTTP_413_REQUEST_ENTITY_TOO_LARGE, HTTP_415_UNSUPPORTED_MEDIA_TYPE

from pyq_api.core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)
FILE_PREFIX = "papers"


@dataclass
class StoredFile:
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    original_name: str

    @property
    def title(self) -> str:
        # nom d'origine sans l'extension
        return Path(self.original_name).stem or self.original_name


def safe_dir_name(name: str) -> str:
    """
    Transforme un nom d'université en un seul segment de chemin sûr.
    """
    name = unicodedata.normalize("NFKC", name or "").strip()
    name = re.sub(r"[\\/\x00]+", "_", name)
    name = name.strip(". ")
    return name or "unknown"


class StorageService:
    """
    Stockage local des fichiers uploadés, un dossier par université.
    Le catalogue n'enregistre les métadonnées qu'après l'écriture sur disque.
    """

    def __init__(self, base_path: str = "./uploads", max_upload_mb: int = 10):
        self.base_path = Path(base_path)
        self.max_upload_bytes = max_upload_mb * 1024 * 1024
        self.base_path.mkdir(parents=True, exist_ok=True)

    def read_checked(self, file: UploadFile) -> bytes:
        """
        Vérifie le type MIME et la taille, puis renvoie le contenu.
        Rien n'est écrit : le lot entier doit passer avant toute écriture.
        """
        if file.content_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                "Only PDF and DOC files are allowed",
                status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            )

        contents = file.file.read()
        if len(contents) > self.max_upload_bytes:
            raise ValidationError(
                f"File too large (max {self.max_upload_bytes // (1024 * 1024)} MB)",
                status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        return contents

    def save_paper_file(
        self, university_name: str, file: UploadFile, contents: Optional[bytes] = None
    ) -> StoredFile:
        """
        Sauvegarde un fichier uploadé sous <base>/<université>/.
        `contents` : octets déjà lus par read_checked().
        """
        if contents is None:
            contents = self.read_checked(file)

        dest_dir = self.base_path / safe_dir_name(university_name)
        dest_dir.mkdir(parents=True, exist_ok=True)

        original_name = file.filename or "paper"
        file_name = self._unique_name(Path(original_name).suffix)
        dest_path = dest_dir / file_name

        with open(dest_path, "wb") as f:
            f.write(contents)

        logger.info("Stored upload %s (%d bytes) in %s", original_name, len(contents), dest_dir)
        return StoredFile(
            file_name=file_name,
            file_path=str(dest_path),
            file_size=dest_path.stat().st_size,
            mime_type=file.content_type,
            original_name=original_name,
        )

    def resolve(self, file_path: str) -> Optional[Path]:
        """
        Renvoie le chemin absolu si le fichier existe et reste sous base_path.
        """
        path = Path(file_path).resolve()
        root = self.base_path.resolve()
        if root not in path.parents or not path.is_file():
            return None
        return path

    def _unique_name(self, suffix: str) -> str:
        return f"{FILE_PREFIX}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"
