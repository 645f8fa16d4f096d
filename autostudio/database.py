"""
AutoStudio - Blob Table Setup
Flask-SQLAlchemy handle behind DatabaseBlobStorage (STORAGE_BACKEND=database)
"""
import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


db = SQLAlchemy(model_class=Base)


def init_db(app):
    """Bind the handle to the app and create the stored_blobs table"""
    db.init_app(app)

    with app.app_context():
        # DBStoredBlob must be imported before create_all sees it
        from autostudio.models import db_models  # noqa

        db.create_all()

        logger.info(f"Blob storage ready ({app.config.get('SQLALCHEMY_DATABASE_URI', '').split(':')[0]})")
