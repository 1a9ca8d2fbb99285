# clubportal/guards.py

from functools import wraps

from flask import g, redirect, url_for, flash

from clubportal.permissions import can

LOGIN_ENDPOINT = 'auth.login'
DASHBOARD_ENDPOINT = 'dashboard.index'


def evaluate_access(profile, capability=None):
    """
    Returns None when the profile may proceed, otherwise the endpoint
    to redirect to: the login screen for anonymous users, the dashboard
    for signed-in users whose role lacks ``capability``.
    """
    if profile is None:
        return LOGIN_ENDPOINT
    if capability is not None and not can(profile.role, capability):
        return DASHBOARD_ENDPOINT
    return None


def login_required(f):
    """
    Decorator to ensure a user is logged in before accessing a route.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if evaluate_access(g.get('current_user')) is not None:
            flash('Please log in to access this page.', 'info')
            return redirect(url_for(LOGIN_ENDPOINT))
        return f(*args, **kwargs)
    return decorated_function


def capability_required(capability):
    """
    Decorator to ensure the logged-in user's role grants ``capability``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            target = evaluate_access(g.get('current_user'), capability)
            if target == LOGIN_ENDPOINT:
                flash('Please log in to access this page.', 'info')
                return redirect(url_for(LOGIN_ENDPOINT))
            if target is not None:
                flash("You don't have permission to access that page.", 'danger')
                return redirect(url_for(target))
            return f(*args, **kwargs)
        return decorated_function
    return decorator
