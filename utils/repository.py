"""
utils/repository.py
-----------------
Generic access to one named document collection.

Every panel goes through Repository instead of touching pymongo
directly. Documents come back as plain dicts carrying "id" in place
of Mongo's "_id", together with created_at/updated_at. The store
assigns ObjectId ids unless the caller supplies one; lookups match
an id in either its string or ObjectId form.
"""

import logging
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from utils.errors import NotFoundError, RemoteServiceError, ValidationError

logger = logging.getLogger(__name__)

RESERVED_FIELDS = ("_id", "id", "created_at", "updated_at")


class Query:
    """Predicate and ordering helpers for Repository.list()."""

    @staticmethod
    def equal(field, value):
        return field, "$eq", value

    @staticmethod
    def not_equal(field, value):
        return field, "$ne", value

    @staticmethod
    def one_of(field, values):
        return field, "$in", list(values)

    @staticmethod
    def greater_than_equal(field, value):
        return field, "$gte", value

    @staticmethod
    def less_than_equal(field, value):
        return field, "$lte", value

    @staticmethod
    def between(field, start, end):
        return field, "$between", (start, end)

    @staticmethod
    def order_asc(field):
        return field, ASCENDING

    @staticmethod
    def order_desc(field):
        return field, DESCENDING


def _id_forms(value):
    """Both stored forms of an id: the string itself and, when it parses, its ObjectId."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return [value, ObjectId(value)]
    return [value]


def _id_clause(op, value):
    if op == "$in":
        return {"$in": [form for v in value for form in _id_forms(v)]}
    forms = _id_forms(value)
    if len(forms) > 1 and op == "$eq":
        return {"$in": forms}
    if len(forms) > 1 and op == "$ne":
        return {"$nin": forms}
    return {op: value}


def id_filter(doc_id):
    return {"_id": _id_clause("$eq", doc_id)}


def build_filter(filters):
    """Turn a sequence of predicates into one Mongo filter (logical AND)."""
    clauses = []
    for field, op, value in filters or ():
        if field == "id" and op != "$between":
            clauses.append({"_id": _id_clause(op, value)})
            continue
        if field == "id":
            field = "_id"
        if op == "$between":
            start, end = value
            clauses.append({field: {"$gte": start, "$lte": end}})
        else:
            clauses.append({field: {op: value}})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _now():
    return datetime.now(timezone.utc)


def _to_doc(raw):
    doc = dict(raw)
    doc["id"] = str(doc.pop("_id"))
    return doc


def _strip_reserved(fields):
    return {k: v for k, v in (fields or {}).items() if k not in RESERVED_FIELDS}


class Repository:

    def __init__(self, db, collection_name):
        self.db = db
        self.name = collection_name

    @property
    def collection(self):
        return self.db[self.name]

    def list(self, filters=None, sort=None, limit=None):
        query = build_filter(filters)
        try:
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort([("_id" if f == "id" else f, d) for f, d in sort])
            if limit:
                cursor = cursor.limit(int(limit))
            return [_to_doc(d) for d in cursor]
        except PyMongoError as e:
            logger.error("Listing %s failed: %s", self.name, e)
            raise RemoteServiceError(str(e)) from e

    def get(self, doc_id):
        try:
            raw = self.collection.find_one(id_filter(doc_id))
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e
        if raw is None:
            raise NotFoundError(f"Document {doc_id} not found in {self.name}")
        return _to_doc(raw)

    def count(self, filters=None):
        try:
            return self.collection.count_documents(build_filter(filters))
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e

    def create(self, fields, doc_id=None):
        now = _now()
        doc = _strip_reserved(fields)
        if doc_id:
            doc["_id"] = doc_id
        doc["created_at"] = now
        doc["updated_at"] = now

        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise ValidationError(f"Document {doc_id} already exists in {self.name}") from e
        except PyMongoError as e:
            logger.error("Creating document in %s failed: %s", self.name, e)
            raise RemoteServiceError(str(e)) from e

        logger.debug("Created %s/%s", self.name, doc["_id"])
        return _to_doc(doc)

    def update(self, doc_id, fields):
        changes = _strip_reserved(fields)
        changes["updated_at"] = _now()

        try:
            raw = self.collection.find_one_and_update(
                id_filter(doc_id),
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Updating %s/%s failed: %s", self.name, doc_id, e)
            raise RemoteServiceError(str(e)) from e

        if raw is None:
            raise NotFoundError(f"Document {doc_id} not found in {self.name}")
        return _to_doc(raw)

    def delete(self, doc_id):
        try:
            result = self.collection.delete_one(id_filter(doc_id))
        except PyMongoError as e:
            logger.error("Deleting %s/%s failed: %s", self.name, doc_id, e)
            raise RemoteServiceError(str(e)) from e

        if result.deleted_count == 0:
            raise NotFoundError(f"Document {doc_id} not found in {self.name}")
        logger.debug("Deleted %s/%s", self.name, doc_id)
