"""
Planificateur APScheduler pour la purge des images d'exercices orphelines.

Une image devient orpheline quand l'enregistrement de l'exercice échoue après
l'upload, ou quand elle est remplacée / que son exercice est supprimé. Le job
supprime les objets du bucket qui ne sont référencés par aucun exercice et qui
sont plus anciens que le délai de grâce (pour ne pas toucher un upload en cours).
"""

import logging
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy import select
from sqlalchemy.orm import Session

from cncclass.config import settings
from cncclass.database import SessionLocal
from cncclass.models.assignment import Assignment
from cncclass.services.storage_service import LocalObjectStore, StorageError, object_store

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def purge_orphaned_images(db: Session, storage: LocalObjectStore, now: datetime = None) -> int:
    """
    Supprime les images non référencées plus anciennes que ORPHAN_GRACE_MINUTES.
    Retourne le nombre d'objets supprimés.
    """
    bucket = settings.ASSIGNMENT_IMAGES_BUCKET
    cutoff = (now or datetime.now()) - timedelta(minutes=settings.ORPHAN_GRACE_MINUTES)

    urls = db.execute(
        select(Assignment.image_url).where(Assignment.image_url.is_not(None))
    ).scalars().all()
    referenced = {storage.key_from_url(bucket, url) for url in urls}

    removed = 0
    for obj in storage.list_objects(bucket):
        if obj.key in referenced or obj.modified_at > cutoff:
            continue
        try:
            if storage.remove(bucket, obj.key):
                removed += 1
        except StorageError as exc:
            logger.warning("Image orpheline %s/%s non supprimée : %s", bucket, obj.key, exc)
    return removed


def _purge_orphaned_images_scheduled() -> None:
    """Tâche planifiée : ouvre une session et lance la purge."""
    db = SessionLocal()
    try:
        removed = purge_orphaned_images(db, object_store)
        logger.info("Purge des images orphelines : %d objet(s) supprimé(s)", removed)
    except Exception as exc:
        logger.error("Erreur lors de la purge des images orphelines : %s", exc)
    finally:
        db.close()


def start_scheduler() -> None:
    """Démarre le planificateur en arrière-plan (appelé au démarrage de l'API)."""
    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler désactivé par configuration.")
        return
    scheduler.add_job(
        _purge_orphaned_images_scheduled,
        trigger="interval",
        hours=settings.ORPHAN_PURGE_INTERVAL_HOURS,
        id="orphaned_images_purge",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler démarré — purge des images orphelines toutes les %d heure(s).",
        settings.ORPHAN_PURGE_INTERVAL_HOURS,
    )


def stop_scheduler() -> None:
    """Arrête le planificateur proprement (appelé à l'arrêt de l'API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler arrêté.")
