# clubportal/public/routes.py

import logging
from flask import Blueprint, render_template

from clubportal import services
from clubportal.context import site_settings

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def landing():
    # A failed load leaves that section empty rather than failing the page
    sections = {
        'projects': services.projects,
        'events': services.events,
        'testimonials': services.testimonials,
        'blog_posts': services.blog_posts,
        'gallery': services.gallery,
    }
    content = {}
    for name, repository in sections.items():
        try:
            content[name] = repository().list()
        except Exception as e:
            logger.error(f"Failed to load {name} for landing page: {str(e)}")
            content[name] = []

    try:
        settings = site_settings().get_or_defaults()
    except Exception as e:
        logger.error(f"Failed to load site settings for landing page: {str(e)}")
        settings = dict(services.SITE_SETTINGS_DEFAULTS)

    return render_template('landing.html', settings=settings, **content)
