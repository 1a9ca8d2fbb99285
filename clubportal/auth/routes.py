# clubportal/auth/routes.py

import logging
from flask import Blueprint, render_template, redirect, url_for, flash, g

from clubportal.context import identity_client, session_store, user_directory
from clubportal.errors import PortalError, InvalidCredentials, SetupDisabled
from clubportal.provisioning import setup_super_admin
from clubportal.session_store import SessionProfile
from .forms import LoginForm, SetupSuperAdminForm

logger = logging.getLogger(__name__)

# Define the Blueprint
auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if g.current_user is not None:
        return redirect(url_for('dashboard.index'))

    form = LoginForm()
    show_setup_link = False
    try:
        show_setup_link = not user_directory().super_admin_exists()
    except Exception as e:
        logger.error(f"Failed to check for a super admin: {str(e)}")

    if form.validate_on_submit():
        identity = identity_client()
        try:
            account = identity.sign_in(form.email.data, form.password.data)
        except InvalidCredentials as e:
            return render_template('auth/login.html', form=form, error=str(e), show_setup_link=show_setup_link), 401
        except Exception as e:
            logger.error(f"Sign-in error: {str(e)}")
            return render_template('auth/login.html', form=form, error="Sign-in failed. Please try again.", show_setup_link=show_setup_link), 500

        record = user_directory().get_by_uid(account.uid)
        if record is None:
            identity.sign_out()
            logger.info(f"Account {account.uid} signed in without a role record")
            return render_template('auth/login.html', form=form, error="This account has no portal access. Contact an administrator.", show_setup_link=show_setup_link), 403

        session_store().set(SessionProfile.from_user(record))
        logger.info(f"{record['username']} ({record['role']}) logged in")
        return redirect(url_for('dashboard.index'))

    return render_template('auth/login.html', form=form, show_setup_link=show_setup_link)


@auth_bp.route('/logout')
def logout():
    identity_client().sign_out()
    session_store().clear()
    flash("You have been logged out.", "info")
    return redirect(url_for('auth.login'))


@auth_bp.route('/setup-super-admin', methods=['GET', 'POST'])
def setup():
    users = user_directory()
    if users.super_admin_exists():
        flash("A Super Admin already exists. This setup page is disabled.", "warning")
        return redirect(url_for('auth.login'))

    form = SetupSuperAdminForm()
    if form.validate_on_submit():
        try:
            setup_super_admin(
                identity_client(),
                users,
                session_store(),
                email=form.email.data,
                password=form.password.data,
                username=form.username.data,
            )
        except SetupDisabled as e:
            flash(str(e), "warning")
            return redirect(url_for('auth.login'))
        except PortalError as e:
            logger.error(f"Super admin setup failed: {str(e)}")
            return render_template('auth/setup_super_admin.html', form=form, error=str(e)), 400

        flash("Super Admin registered!", "success")
        return redirect(url_for('dashboard.index'))

    return render_template('auth/setup_super_admin.html', form=form)
