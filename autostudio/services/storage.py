"""
AutoStudio - Blob Storage
Key/value persistence for the studio state. Each key holds one
JSON-serialized blob; two backends share the interface:

- DatabaseBlobStorage: SQLAlchemy `stored_blobs` table (production)
- FileBlobStorage: one JSON file per key under DATA_DIR (simple deployments)

Reads are defensive (unreadable or unparsable data comes back as None) and
writes are best-effort (failures are logged, never raised) through
load_json / save_json. get / set / delete / clear propagate errors.
"""
import os
import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

WP_CONFIG_KEY = 'wp_config'
SYSTEM_CONFIG_KEY = 'as_system_config'
MEMBERS_KEY = 'as_members'
ARTICLES_KEY = 'as_articles'

KNOWN_KEYS = (WP_CONFIG_KEY, SYSTEM_CONFIG_KEY, MEMBERS_KEY, ARTICLES_KEY)


class BlobStorage:
    """Interface shared by the storage backends"""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def load_json(self, key: str) -> Optional[Any]:
        """Decoded blob, or None when missing or unreadable"""
        try:
            raw = self.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as e:
            logger.warning(f"Could not read '{key}' from storage: {e}")
            return None

    def save_json(self, key: str, data: Any) -> bool:
        """Serialize and store; returns False instead of raising"""
        try:
            self.set(key, json.dumps(data, default=str))
            return True
        except Exception as e:
            logger.error(f"Could not write '{key}' to storage: {e}")
            return False


class FileBlobStorage(BlobStorage):
    """One <key>.json file per blob"""

    def __init__(self, data_dir: str = None):
        self.data_dir = Path(data_dir or os.environ.get('DATA_DIR', './data'))
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f'{key}.json'

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r') as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        with open(self._path(key), 'w') as f:
            f.write(value)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def clear(self) -> None:
        for key in KNOWN_KEYS:
            self.delete(key)


class DatabaseBlobStorage(BlobStorage):
    """
    Blobs as rows of the stored_blobs table.

    Every operation runs inside its own app context so it also works from
    scheduler threads.
    """

    def __init__(self, app):
        self.app = app

    def get(self, key: str) -> Optional[str]:
        from autostudio.models.db_models import DBStoredBlob
        from autostudio.database import db

        with self.app.app_context():
            row = db.session.get(DBStoredBlob, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        from autostudio.models.db_models import DBStoredBlob
        from autostudio.database import db

        with self.app.app_context():
            row = db.session.get(DBStoredBlob, key)
            if row:
                row.value = value
            else:
                db.session.add(DBStoredBlob(key=key, value=value))
            try:
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise

    def delete(self, key: str) -> None:
        from autostudio.models.db_models import DBStoredBlob
        from autostudio.database import db

        with self.app.app_context():
            row = db.session.get(DBStoredBlob, key)
            if row:
                db.session.delete(row)
                db.session.commit()

    def clear(self) -> None:
        from autostudio.models.db_models import DBStoredBlob
        from autostudio.database import db

        with self.app.app_context():
            DBStoredBlob.query.delete()
            db.session.commit()


def create_storage(app) -> BlobStorage:
    """Backend selected by STORAGE_BACKEND"""
    backend = app.config.get('STORAGE_BACKEND', 'database')
    if backend == 'file':
        logger.info(f"Using file storage in {app.config.get('DATA_DIR')}")
        return FileBlobStorage(app.config.get('DATA_DIR'))
    logger.info("Using database storage")
    return DatabaseBlobStorage(app)
