"""
Stockage objet des images d'exercices.

Chaque bucket est un sous-dossier de STORAGE_DIR, servi en lecture seule
sous /storage par l'application. Le bucket est en ajout seul du point de vue
des workflows : une clé existante n'est jamais réécrite.
"""

import logging
import re
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel

from cncclass.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(Exception):
    """Échec d'une opération sur le stockage objet (upload, suppression)."""


class StoredObject(BaseModel):
    key: str
    modified_at: datetime


def generate_object_key(filename: Optional[str]) -> str:
    """
    Génère une clé unique : horodatage en millisecondes suivi du nom d'origine assaini.
    Ex: "1760870400123_piece_01.png"
    """
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._") or "image"
    return f"{int(time.time() * 1000)}_{name}"


class LocalObjectStore:
    """Stockage objet sur disque local, adressé par (bucket, clé)."""

    def __init__(self, root: str, public_url: str):
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")

    def _path(self, bucket: str, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Clé d'objet invalide : '{key}'.")
        return self.root / bucket / key

    def upload(self, bucket: str, key: str, data: bytes) -> None:
        """Écrit un objet. Lève StorageError si la clé existe déjà ou si l'écriture échoue."""
        path = self._path(bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "xb") as fh:
                fh.write(data)
        except FileExistsError:
            raise StorageError(f"L'objet '{key}' existe déjà dans le bucket '{bucket}'.")
        except OSError as exc:
            raise StorageError(f"Échec de l'upload de '{key}' : {exc}")
        logger.info("Objet %s/%s enregistré (%d octets)", bucket, key, len(data))

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"{self.public_url}/{bucket}/{key}"

    def key_from_url(self, bucket: str, url: Optional[str]) -> Optional[str]:
        """
        Retrouve la clé d'un objet à partir de son URL publique, ou None si l'URL est étrangère au bucket.
        Seule la fin du chemin (".../<bucket>/<clé>") compte : l'hôte et le préfixe peuvent avoir changé
        depuis l'enregistrement de l'URL.
        """
        if not url:
            return None
        segments = urlsplit(url).path.rstrip("/").split("/")
        if len(segments) < 2 or segments[-2] != bucket or not segments[-1]:
            return None
        return unquote(segments[-1])

    def remove(self, bucket: str, key: str) -> bool:
        """Supprime un objet. Retourne False s'il n'existait pas."""
        path = self._path(bucket, key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Échec de la suppression de '{key}' : {exc}")
        logger.info("Objet %s/%s supprimé", bucket, key)
        return True

    def list_objects(self, bucket: str) -> List[StoredObject]:
        """Liste les objets d'un bucket avec leur date de modification."""
        directory = self.root / bucket
        if not directory.is_dir():
            return []
        return [
            StoredObject(key=p.name, modified_at=datetime.fromtimestamp(p.stat().st_mtime))
            for p in sorted(directory.iterdir())
            if p.is_file()
        ]


object_store = LocalObjectStore(settings.STORAGE_DIR, settings.STORAGE_PUBLIC_URL)


def get_object_store() -> LocalObjectStore:
    """Dépendance FastAPI — fournit le stockage objet configuré."""
    return object_store
