# config.py

import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_very_secret_key_for_development'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'clubportal.db'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SITE_NAME = os.environ.get('SITE_NAME', 'Rotaract Club of Lamahi')
    PROJECT_CATEGORIES = ['Health', 'Education', 'Sports', 'Awareness', 'Environment']

    # Hosted identity providers reject passwords shorter than this
    MIN_PASSWORD_LENGTH = 6

    API_TOKEN_TTL_HOURS = int(os.environ.get('API_TOKEN_TTL_HOURS', '24'))
    PORTAL_API_URL = os.environ.get('PORTAL_API_URL', 'http://127.0.0.1:5000/api')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    DEBUG = os.environ.get('FLASK_DEBUG') == '1'

    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', '1') == '1'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SECURE = False
    SECRET_KEY = 'testing'
