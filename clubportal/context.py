# clubportal/context.py

"""Request-scoped clients bound to the current browser session."""

from flask import session

from clubportal.identity import IdentityClient
from clubportal.services import UserDirectory, SiteSettingsService
from clubportal.session_store import SessionStore


def identity_client():
    return IdentityClient(session)


def session_store():
    return SessionStore(session)


def user_directory():
    return UserDirectory()


def site_settings():
    return SiteSettingsService()
