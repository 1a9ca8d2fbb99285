# clubportal/services.py

import logging

from clubportal import documents as collections
from clubportal.documents import DocumentClient
from clubportal.errors import InvalidDocument, UsernameTaken
from clubportal.permissions import ROLES, SUPER_ADMIN
from clubportal.utils import utcnow

logger = logging.getLogger(__name__)


class UserDirectory:
    """Role records in the ``users`` collection, keyed by identity uid."""

    def __init__(self, documents=None):
        self.documents = documents or DocumentClient()

    def get_by_uid(self, uid):
        return self.documents.get(collections.USERS, uid)

    def find_by_login(self, login):
        """Looks a record up by username first, then by email."""
        login = (login or '').strip()
        if not login:
            return None
        for field in ('username', 'email'):
            value = login.lower() if field == 'email' else login
            matches = self.documents.query(collections.USERS, where={field: value})
            if matches:
                return matches[0]
        return None

    def username_taken(self, username, exclude_uid=None):
        matches = self.documents.query(collections.USERS, where={'username': (username or '').strip()})
        return any(match['uid'] != exclude_uid for match in matches)

    def list(self, role=None):
        where = {'role': role} if role else None
        return self.documents.query(collections.USERS, where=where, order_by='created_at', descending=True)

    def create_record(self, uid, email, username, role, created_by):
        if role not in ROLES:
            raise InvalidDocument(f"Unknown role: {role}")
        if self.username_taken(username, exclude_uid=uid):
            raise UsernameTaken(f"The username '{username.strip()}' is already taken.")
        self.documents.set(collections.USERS, uid, {
            'email': email.strip().lower(),
            'username': username.strip(),
            'role': role,
            'created_by': created_by,
        })
        logger.info(f"Created {role} record for {uid} (created by {created_by})")
        return self.get_by_uid(uid)

    def update_record(self, uid, data):
        self.documents.update(collections.USERS, uid, data)

    def delete_record(self, uid):
        self.documents.delete(collections.USERS, uid)
        logger.info(f"Deleted user record {uid}")

    def super_admin_exists(self):
        return bool(self.documents.query(collections.USERS, where={'role': SUPER_ADMIN}))


class ContentRepository:
    """List/get/add/update/delete for one flat content collection."""

    def __init__(self, collection, order_by='created_at', documents=None):
        self.collection = collection
        self.order_by = order_by
        self.documents = documents or DocumentClient()

    def list(self):
        return self.documents.query(self.collection, order_by=self.order_by, descending=True)

    def get(self, doc_id):
        return self.documents.get(self.collection, doc_id)

    def add(self, data):
        return self.documents.add(self.collection, data)

    def update(self, doc_id, data):
        self.documents.update(self.collection, doc_id, data)

    def delete(self, doc_id):
        self.documents.delete(self.collection, doc_id)


def projects(documents=None):
    return ContentRepository(collections.PROJECTS, documents=documents)


def events(documents=None):
    return ContentRepository(collections.EVENTS, order_by='date', documents=documents)


def testimonials(documents=None):
    return ContentRepository(collections.TESTIMONIALS, documents=documents)


def blog_posts(documents=None):
    return ContentRepository(collections.BLOG_POSTS, documents=documents)


def gallery(documents=None):
    return ContentRepository(collections.GALLERY, documents=documents)


SITE_SETTINGS_DEFAULTS = {
    'president_name': '',
    'president_image': '',
    'president_title': 'President',
    'president_bio': '',
    'president_facebook': '',
    'president_email': '',
    'vice_president_name': '',
    'vice_president_image': '',
    'vice_president_title': 'Vice President',
    'vice_president_bio': '',
    'vice_president_facebook': '',
    'vice_president_email': '',
    'about_us_title': 'About Us',
    'about_us_content': '',
}


class SiteSettingsService:
    """The single ``siteSettings`` document: created on first save, updated after."""

    def __init__(self, documents=None):
        self.documents = documents or DocumentClient()

    def get(self):
        found = self.documents.query(collections.SITE_SETTINGS, order_by='id')
        return found[0] if found else None

    def get_or_defaults(self):
        return self.get() or dict(SITE_SETTINGS_DEFAULTS)

    def save(self, data):
        payload = dict(data)
        payload.pop('id', None)
        payload['updated_at'] = utcnow()
        existing = self.get()
        if existing is None:
            doc_id = self.documents.add(collections.SITE_SETTINGS, payload)
            logger.info(f"Created site settings {doc_id}")
        else:
            doc_id = existing['id']
            self.documents.update(collections.SITE_SETTINGS, doc_id, payload)
            logger.info(f"Updated site settings {doc_id}")
        return doc_id
