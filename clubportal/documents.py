# clubportal/documents.py

"""Collection-addressed access to the portal's records.

Screens and flows never query models directly; they go through
``DocumentClient`` with a collection name, the way the hosted client
addressed its document database. Documents come back as plain dicts.
"""

import logging

from database import get_db_session
from clubportal.errors import UnknownCollection, InvalidDocument, DocumentNotFound
from clubportal.models import User, Project, Event, SiteSettings, Testimonial, BlogPost, GalleryImage

logger = logging.getLogger(__name__)

USERS = 'users'
PROJECTS = 'projects'
EVENTS = 'events'
SITE_SETTINGS = 'siteSettings'
TESTIMONIALS = 'testimonials'
BLOG_POSTS = 'blogPosts'
GALLERY = 'gallery'

COLLECTIONS = {
    USERS: User,
    PROJECTS: Project,
    EVENTS: Event,
    SITE_SETTINGS: SiteSettings,
    TESTIMONIALS: Testimonial,
    BLOG_POSTS: BlogPost,
    GALLERY: GalleryImage,
}


class DocumentClient:
    """Create/read/update/delete against named collections."""

    def __init__(self, collections=None):
        self._collections = collections or COLLECTIONS

    def _model(self, collection):
        model = self._collections.get(collection)
        if model is None:
            raise UnknownCollection(f"Unknown collection: {collection}")
        return model

    def _check_fields(self, model, data):
        unknown = set(data) - set(model.FIELDS)
        if unknown:
            raise InvalidDocument(f"Unknown field(s) for {model.__tablename__}: {', '.join(sorted(unknown))}")

    def _load(self, s, model, doc_id):
        record = s.get(model, doc_id)
        if record is None:
            raise DocumentNotFound(f"No document {doc_id} in {model.__tablename__}")
        return record

    def add(self, collection, data):
        """Creates a document with a generated id and returns the id."""
        model = self._model(collection)
        self._check_fields(model, data)
        with get_db_session() as s:
            record = model(**data)
            s.add(record)
            s.commit()
            doc_id = getattr(record, model.ID_FIELD)
        logger.debug(f"Added {collection}/{doc_id}")
        return doc_id

    def set(self, collection, doc_id, data):
        """Creates or replaces the document stored under ``doc_id``."""
        model = self._model(collection)
        self._check_fields(model, data)
        with get_db_session() as s:
            record = s.get(model, doc_id)
            if record is None:
                record = model(**{model.ID_FIELD: doc_id})
                s.add(record)
            for field in model.FIELDS:
                if field in data:
                    setattr(record, field, data[field])
            s.commit()
        logger.debug(f"Set {collection}/{doc_id}")
        return doc_id

    def get(self, collection, doc_id):
        model = self._model(collection)
        with get_db_session() as s:
            record = s.get(model, doc_id)
            return record.to_dict() if record is not None else None

    def query(self, collection, where=None, order_by=None, descending=False):
        """
        Returns every document matching the equality filters in ``where``,
        optionally ordered by a single field.
        """
        model = self._model(collection)
        with get_db_session() as s:
            q = s.query(model)
            if where:
                for field in where:
                    if not hasattr(model, field):
                        raise InvalidDocument(f"Cannot filter {collection} by {field}")
                q = q.filter_by(**where)
            if order_by:
                column = getattr(model, order_by, None)
                if column is None:
                    raise InvalidDocument(f"Cannot order {collection} by {order_by}")
                q = q.order_by(column.desc() if descending else column.asc())
            return [record.to_dict() for record in q.all()]

    def update(self, collection, doc_id, data):
        model = self._model(collection)
        self._check_fields(model, data)
        with get_db_session() as s:
            record = self._load(s, model, doc_id)
            for field, value in data.items():
                setattr(record, field, value)
            s.commit()
        logger.debug(f"Updated {collection}/{doc_id}: {sorted(data)}")

    def delete(self, collection, doc_id):
        model = self._model(collection)
        with get_db_session() as s:
            record = self._load(s, model, doc_id)
            s.delete(record)
            s.commit()
        logger.debug(f"Deleted {collection}/{doc_id}")
