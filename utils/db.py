"""
utils/db.py
-----------------
MongoDB connection for the console, plus lookups for the remote
clients the app factory attaches to the Flask app.
"""

import logging

from flask import current_app
from flask_pymongo import PyMongo

from utils.repository import Repository

logger = logging.getLogger(__name__)

# Shared PyMongo extension; bound to an app by init_db_connection
mongo = PyMongo()

EXTENSION_KEY = "hotel_admin"


def init_db_connection(app):
    """
    Bind MongoDB to the Flask app using MONGO_URI from its config
    and return the database handle.
    """
    mongo.init_app(app)
    logger.info("MongoDB connection initialized for %s", app.config.get("MONGO_URI"))
    return mongo.db


def _clients():
    return current_app.extensions[EXTENSION_KEY]


def get_db():
    return _clients()["db"]


def get_identity():
    return _clients()["identity"]


def get_uploader():
    return _clients()["uploader"]


def repository(collection_name):
    return Repository(get_db(), collection_name)
