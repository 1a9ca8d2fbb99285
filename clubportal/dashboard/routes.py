# clubportal/dashboard/routes.py

import logging
from collections import namedtuple
from flask import render_template, redirect, url_for, flash, g, abort

from clubportal import services
from clubportal.context import site_settings
from clubportal.errors import PortalError, DocumentNotFound
from clubportal.guards import login_required, capability_required, evaluate_access
from clubportal.permissions import (
    MANAGE_PROJECTS, MANAGE_EVENTS, MANAGE_CONTENT, MANAGE_SETTINGS, MANAGE_MEMBERS, MANAGE_ADMINS, can,
)
from . import dashboard_bp
from .forms import (
    ProjectForm, EventForm, TestimonialForm, BlogPostForm, GalleryImageForm, SiteSettingsForm, ConfirmDeleteForm,
)

logger = logging.getLogger(__name__)

ContentScreen = namedtuple('ContentScreen', 'title singular repository form_class capability columns')

CONTENT_SCREENS = {
    'projects': ContentScreen('Manage Projects', 'Project', services.projects, ProjectForm, MANAGE_PROJECTS,
                              [('title', 'Title'), ('category', 'Category'), ('year', 'Year')]),
    'events': ContentScreen('Manage Events', 'Event', services.events, EventForm, MANAGE_EVENTS,
                            [('title', 'Title'), ('date', 'Date'), ('location', 'Location')]),
    'testimonials': ContentScreen('Manage Testimonials', 'Testimonial', services.testimonials, TestimonialForm,
                                  MANAGE_CONTENT, [('name', 'Name'), ('role', 'Role')]),
    'blog': ContentScreen('Manage Blog Posts', 'Post', services.blog_posts, BlogPostForm, MANAGE_CONTENT,
                          [('title', 'Title'), ('author', 'Author')]),
    'gallery': ContentScreen('Manage Gallery', 'Image', services.gallery, GalleryImageForm, MANAGE_CONTENT,
                             [('caption', 'Caption'), ('category', 'Category')]),
}

DASHBOARD_TILES = [
    ('Projects', 'Manage and create projects', 'dashboard.manage', {'screen': 'projects'}, MANAGE_PROJECTS),
    ('Events', 'Schedule club events', 'dashboard.manage', {'screen': 'events'}, MANAGE_EVENTS),
    ('Testimonials', 'Quotes shown on the home page', 'dashboard.manage', {'screen': 'testimonials'}, MANAGE_CONTENT),
    ('Blog', 'News and stories', 'dashboard.manage', {'screen': 'blog'}, MANAGE_CONTENT),
    ('Gallery', 'Photos from past activities', 'dashboard.manage', {'screen': 'gallery'}, MANAGE_CONTENT),
    ('Site Settings', 'Leadership team and about us', 'dashboard.settings', {}, MANAGE_SETTINGS),
    ('Members', 'Create member accounts', 'admin.members', {}, MANAGE_MEMBERS),
    ('Admins', 'Create or remove admin accounts', 'admin.admins', {}, MANAGE_ADMINS),
]


def _screen_or_404(screen):
    found = CONTENT_SCREENS.get(screen)
    if found is None:
        abort(404)
    return found


def _deny(content_screen):
    """Redirect for users whose role lacks the screen's capability, else None."""
    target = evaluate_access(g.current_user, content_screen.capability)
    if target is None:
        return None
    flash("You don't have permission to access that page.", 'danger')
    return redirect(url_for(target))


@dashboard_bp.route('')
@login_required
def index():
    tiles = [
        dict(title=title, description=description, url=url_for(endpoint, **values))
        for title, description, endpoint, values, capability in DASHBOARD_TILES
        if can(g.current_user.role, capability)
    ]
    return render_template('dashboard/index.html', tiles=tiles)


@dashboard_bp.route('/manage-projects')
@login_required
def manage_projects_alias():
    return redirect(url_for('dashboard.manage', screen='projects'))


@dashboard_bp.route('/manage-events')
@login_required
def manage_events_alias():
    return redirect(url_for('dashboard.manage', screen='events'))


@dashboard_bp.route('/<screen>', methods=['GET', 'POST'])
@login_required
def manage(screen):
    content_screen = _screen_or_404(screen)
    denied = _deny(content_screen)
    if denied is not None:
        return denied

    repository = content_screen.repository()
    form = content_screen.form_class()
    status = 200

    if form.validate_on_submit():
        try:
            doc_id = repository.add(form.to_document())
            logger.info(f"{g.current_user.uid} created {screen}/{doc_id}")
            flash(f"{content_screen.singular} created successfully!", "success")
            return redirect(url_for('dashboard.manage', screen=screen))
        except PortalError as e:
            flash(str(e), "danger")
            status = 400
        except Exception as e:
            logger.error(f"Failed to create {screen}: {str(e)}")
            flash(f"Failed to save {content_screen.singular.lower()}.", "danger")
            status = 500
    elif form.is_submitted():
        status = 400

    try:
        items = repository.list()
    except Exception as e:
        logger.error(f"Failed to load {screen}: {str(e)}")
        flash(f"Failed to load {screen}.", "danger")
        items = []

    return render_template('dashboard/manage_collection.html', screen=screen, content_screen=content_screen,
                           form=form, items=items, delete_form=ConfirmDeleteForm(), editing=None), status


@dashboard_bp.route('/<screen>/<doc_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(screen, doc_id):
    content_screen = _screen_or_404(screen)
    denied = _deny(content_screen)
    if denied is not None:
        return denied

    repository = content_screen.repository()
    document = repository.get(doc_id)
    if document is None:
        flash(f"{content_screen.singular} not found.", "danger")
        return redirect(url_for('dashboard.manage', screen=screen))

    form = content_screen.form_class.from_document(document)
    status = 200
    if form.validate_on_submit():
        try:
            repository.update(doc_id, form.to_document())
            logger.info(f"{g.current_user.uid} updated {screen}/{doc_id}")
            flash(f"{content_screen.singular} updated successfully!", "success")
            return redirect(url_for('dashboard.manage', screen=screen))
        except PortalError as e:
            flash(str(e), "danger")
            status = 400
        except Exception as e:
            logger.error(f"Failed to update {screen}/{doc_id}: {str(e)}")
            flash(f"Failed to save {content_screen.singular.lower()}.", "danger")
            status = 500
    elif form.is_submitted():
        status = 400

    return render_template('dashboard/manage_collection.html', screen=screen, content_screen=content_screen,
                           form=form, items=[], delete_form=ConfirmDeleteForm(), editing=document), status


@dashboard_bp.route('/<screen>/<doc_id>/delete', methods=['POST'])
@login_required
def delete(screen, doc_id):
    content_screen = _screen_or_404(screen)
    denied = _deny(content_screen)
    if denied is not None:
        return denied

    form = ConfirmDeleteForm()
    if not form.validate_on_submit():
        flash("Delete request was not confirmed.", "danger")
        return redirect(url_for('dashboard.manage', screen=screen))

    try:
        content_screen.repository().delete(doc_id)
        logger.info(f"{g.current_user.uid} deleted {screen}/{doc_id}")
        flash(f"{content_screen.singular} deleted.", "success")
    except DocumentNotFound:
        flash(f"{content_screen.singular} not found.", "danger")
    except Exception as e:
        logger.error(f"Failed to delete {screen}/{doc_id}: {str(e)}")
        flash(f"Failed to delete {content_screen.singular.lower()}.", "danger")
    return redirect(url_for('dashboard.manage', screen=screen))


@dashboard_bp.route('/settings', methods=['GET', 'POST'])
@capability_required(MANAGE_SETTINGS)
def settings():
    service = site_settings()
    try:
        current = service.get_or_defaults()
    except Exception as e:
        logger.error(f"Error loading settings: {str(e)}")
        flash("Failed to load settings.", "danger")
        current = dict(services.SITE_SETTINGS_DEFAULTS)

    form = SiteSettingsForm.from_document(current)
    status = 200
    if form.validate_on_submit():
        try:
            service.save(form.to_document())
            flash("Settings saved successfully!", "success")
            return redirect(url_for('dashboard.settings'))
        except Exception as e:
            logger.error(f"Error saving settings: {str(e)}")
            flash("Failed to save settings.", "danger")
            status = 500
    elif form.is_submitted():
        status = 400

    return render_template('dashboard/settings.html', form=form, settings=current), status
