# clubportal/admin/routes.py

import logging
from flask import Blueprint, render_template, redirect, url_for, flash, g

from clubportal.context import identity_client, session_store, user_directory
from clubportal.errors import PortalError, ProvisioningError, DocumentNotFound
from clubportal.guards import capability_required
from clubportal.permissions import ADMIN, MEMBER, MANAGE_ADMINS, MANAGE_MEMBERS
from clubportal.provisioning import provision_account
from .forms import ProvisionAccountForm, RemoveAccountForm

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/dashboard')

ACCOUNT_SCREENS = {
    MEMBER: {
        'endpoint': 'admin.members',
        'delete_endpoint': 'admin.delete_member',
        'title': 'Manage Members',
        'subtitle': 'Create member accounts and hand credentials to them in person.',
        'noun': 'Member',
    },
    ADMIN: {
        'endpoint': 'admin.admins',
        'delete_endpoint': 'admin.delete_admin',
        'title': 'Manage Admins',
        'subtitle': 'Only the Super Admin can create or remove admin accounts.',
        'noun': 'Admin',
    },
}


def _manage_accounts(role, show_credentials):
    screen = ACCOUNT_SCREENS[role]
    users = user_directory()
    form = ProvisionAccountForm()
    created_credentials = None
    status = 200

    if form.validate_on_submit():
        try:
            result = provision_account(
                identity_client(),
                users,
                session_store(),
                acting_password=form.acting_password.data,
                email=form.email.data,
                password=form.password.data,
                username=form.username.data,
                role=role,
            )
            logger.info(f"{g.current_user.uid} created {role} {result.context['new_uid']}")
            flash(f'{screen["noun"]} "{form.username.data}" created successfully!', "success")
            if show_credentials:
                # Shown once; the password is not stored anywhere readable
                created_credentials = {
                    'username': form.username.data,
                    'email': form.email.data,
                    'password': form.password.data,
                }
            else:
                return redirect(url_for(screen['endpoint']))
            form = ProvisionAccountForm(formdata=None)
        except ProvisioningError as e:
            logger.error(f"Provisioning {role} failed with outcome {e.outcome}: {str(e)}")
            flash(f"Error: {str(e)}", "danger")
            status = 400
        except PortalError as e:
            flash(f"Error: {str(e)}", "danger")
            status = 400
    elif form.is_submitted():
        status = 400

    try:
        accounts = users.list(role)
    except Exception as e:
        logger.error(f"Failed to load {role} accounts: {str(e)}")
        flash(f"Failed to load {screen['noun'].lower()}s.", "danger")
        accounts = []

    return render_template('admin/manage_accounts.html', screen=screen, role=role, form=form, accounts=accounts,
                           delete_form=RemoveAccountForm(), created_credentials=created_credentials), status


def _remove_account(role, uid):
    screen = ACCOUNT_SCREENS[role]
    form = RemoveAccountForm()
    if not form.validate_on_submit():
        flash("Delete request was not confirmed.", "danger")
        return redirect(url_for(screen['endpoint']))

    users = user_directory()
    record = users.get_by_uid(uid)
    if record is None or record['role'] != role:
        flash(f"{screen['noun']} not found.", "danger")
        return redirect(url_for(screen['endpoint']))

    try:
        users.delete_record(uid)
        flash(f'{screen["noun"]} "{record["username"]}" removed.', "success")
    except DocumentNotFound:
        flash(f"{screen['noun']} not found.", "danger")
    except Exception as e:
        logger.error(f"Failed to delete {role} {uid}: {str(e)}")
        flash(f"Failed to delete: {str(e)}", "danger")
    return redirect(url_for(screen['endpoint']))


@admin_bp.route('/members', methods=['GET', 'POST'])
@capability_required(MANAGE_MEMBERS)
def members():
    return _manage_accounts(MEMBER, show_credentials=True)


@admin_bp.route('/members/<uid>/delete', methods=['POST'])
@capability_required(MANAGE_MEMBERS)
def delete_member(uid):
    return _remove_account(MEMBER, uid)


@admin_bp.route('/admins', methods=['GET', 'POST'])
@capability_required(MANAGE_ADMINS)
def admins():
    return _manage_accounts(ADMIN, show_credentials=False)


@admin_bp.route('/admins/<uid>/delete', methods=['POST'])
@capability_required(MANAGE_ADMINS)
def delete_admin(uid):
    return _remove_account(ADMIN, uid)
