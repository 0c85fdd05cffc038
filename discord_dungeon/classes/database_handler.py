import logging
from flask import Flask
from .app_config import AppConfig
from discord_dungeon.models.base import db

logger = logging.getLogger(__name__)


class DatabaseHandler:
    def __init__(self, config: AppConfig, app: Flask = None):
        self.app = app or Flask("discord_dungeon")
        self.app.config['SQLALCHEMY_DATABASE_URI'] = config.get_database_uri()
        self.app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
        db.init_app(self.app)
        self.db = db
        # Repositories built without an explicit app pick this one up.
        AppConfig.set_flask(self.app)

    def create_tables(self):
        # Registers the tables on the metadata before create_all runs.
        from discord_dungeon.models import dungeon  # noqa: F401
        with self.app.app_context():
            self.db.create_all()
        logger.info("Database tables are in place.")
