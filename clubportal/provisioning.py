# clubportal/provisioning.py

"""Account creation that survives the identity provider's session switch.

Creating an identity account signs the browser in as that account, so an
admin who creates someone else's account would otherwise end up signed in
as them. The flow is a saga: ordered steps, each with a compensation, plus
a finalizer that restores the acting user's session whatever happened.
Every step transition is written to a log so a partial failure can be
read back exactly.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from clubportal.errors import (
    AuthenticationRequired,
    PermissionDenied,
    InvalidCredentials,
    SetupDisabled,
    ProvisioningError,
    UsernameTaken,
)
from clubportal.permissions import SUPER_ADMIN, can_provision
from clubportal.session_store import SessionProfile

logger = logging.getLogger(__name__)


class ProvisioningOutcome(enum.Enum):
    COMPLETED = 'completed'
    ROLLED_BACK = 'rolled_back'
    PARTIAL = 'partial'
    SESSION_NOT_RESTORED = 'session_not_restored'


class StepStatus(enum.Enum):
    COMPLETED = 'completed'
    FAILED = 'failed'
    COMPENSATED = 'compensated'
    COMPENSATION_FAILED = 'compensation_failed'


@dataclass
class LogEntry:
    step: str
    status: StepStatus
    detail: str = ''


@dataclass
class SagaStep:
    name: str
    action: Callable[[dict], None]
    compensation: Optional[Callable[[dict], None]] = None


@dataclass
class SagaResult:
    outcome: ProvisioningOutcome
    context: dict
    log: List[LogEntry] = field(default_factory=list)


class ProvisioningSaga:
    """
    Runs ``steps`` in order against a shared context dict.

    On the first failing step the completed steps are compensated in
    reverse order. The finalizer runs last in every case; if it fails
    after the steps succeeded nothing is compensated and the outcome is
    SESSION_NOT_RESTORED.
    """

    FINALIZER = 'restore_session'

    def __init__(self, steps, finalizer, finalizer_name=FINALIZER):
        self.steps = list(steps)
        self.finalizer = finalizer
        self.finalizer_name = finalizer_name

    def run(self, context):
        log = []
        completed = []
        failure = None

        for step in self.steps:
            try:
                step.action(context)
            except Exception as e:
                logger.error(f"Provisioning step {step.name} failed: {str(e)}")
                log.append(LogEntry(step.name, StepStatus.FAILED, str(e)))
                failure = e
                break
            log.append(LogEntry(step.name, StepStatus.COMPLETED))
            completed.append(step)

        compensation_failed = False
        if failure is not None:
            for step in reversed(completed):
                if step.compensation is None:
                    continue
                try:
                    step.compensation(context)
                except Exception as e:
                    logger.error(f"Compensation for {step.name} failed: {str(e)}")
                    log.append(LogEntry(step.name, StepStatus.COMPENSATION_FAILED, str(e)))
                    compensation_failed = True
                else:
                    log.append(LogEntry(step.name, StepStatus.COMPENSATED))

        restored = True
        try:
            self.finalizer(context)
        except Exception as e:
            logger.error(f"Provisioning finalizer {self.finalizer_name} failed: {str(e)}")
            log.append(LogEntry(self.finalizer_name, StepStatus.FAILED, str(e)))
            restored = False
        else:
            log.append(LogEntry(self.finalizer_name, StepStatus.COMPLETED))

        if failure is None and restored:
            outcome = ProvisioningOutcome.COMPLETED
        elif not restored:
            outcome = ProvisioningOutcome.SESSION_NOT_RESTORED
        elif compensation_failed:
            outcome = ProvisioningOutcome.PARTIAL
        else:
            outcome = ProvisioningOutcome.ROLLED_BACK
        logger.info(f"Provisioning saga finished: {outcome.value}")

        if outcome is not ProvisioningOutcome.COMPLETED:
            raise ProvisioningError(
                _failure_message(outcome, failure),
                outcome=outcome,
                log=log,
                cause=failure,
            )
        return SagaResult(outcome=outcome, context=context, log=log)


def _failure_message(outcome, failure):
    reason = str(failure) if failure is not None else ''
    if outcome is ProvisioningOutcome.SESSION_NOT_RESTORED:
        if reason:
            return f"{reason} Your session could not be restored; please sign in again."
        return "The account was created but your session could not be restored; please sign in again."
    if outcome is ProvisioningOutcome.PARTIAL:
        return f"{reason} Cleanup was incomplete; check the account lists."
    return reason or "Account creation failed."


def _identity_steps(identity, users, role):
    """Steps shared by provisioning and setup: create the identity, then its role record."""

    def create_identity(ctx):
        account = identity.sign_up(ctx['email'], ctx['password'])
        ctx['new_uid'] = account.uid

    def delete_identity(ctx):
        identity.delete_account(ctx['new_uid'])

    def write_role_record(ctx):
        created_by = ctx.get('created_by') or ctx['new_uid']
        users.create_record(ctx['new_uid'], ctx['email'], ctx['username'], role, created_by)

    def delete_role_record(ctx):
        users.delete_record(ctx['new_uid'])

    return [
        SagaStep('create_identity', create_identity, delete_identity),
        SagaStep('write_role_record', write_role_record, delete_role_record),
    ]


def provision_account(identity, users, session_store, acting_password, email, password, username, role):
    """
    Creates an identity account plus a ``role`` record on behalf of the
    signed-in user, leaving that user signed in afterwards.

    Returns the SagaResult; ``result.context['new_uid']`` is the new uid.
    """
    acting = session_store.get()
    if acting is None:
        raise AuthenticationRequired("Please log in to create accounts.")
    if not can_provision(acting.role, role):
        raise PermissionDenied(f"{acting.role} accounts cannot create {role} accounts.")
    if not identity.verify_password(acting.email, acting_password):
        raise InvalidCredentials("Your password is incorrect; no account was created.")
    if users.username_taken(username):
        raise UsernameTaken(f"The username '{username}' is already taken.")

    logger.info(f"{acting.uid} provisioning {role} account for {email}")

    def restore_session(ctx):
        identity.sign_in(acting.email, acting_password)
        session_store.set(acting)

    saga = ProvisioningSaga(_identity_steps(identity, users, role), restore_session)
    return saga.run({
        'email': email,
        'password': password,
        'username': username,
        'created_by': acting.uid,
    })


def setup_super_admin(identity, users, session_store, email, password, username):
    """
    One-time registration of the first SUPER_ADMIN. The existence check
    is best-effort: two concurrent setups can both pass it.
    """
    if users.super_admin_exists():
        raise SetupDisabled("A Super Admin already exists. This setup page is disabled.")
    if users.username_taken(username):
        raise UsernameTaken(f"The username '{username}' is already taken.")

    def establish_session(ctx):
        record = users.get_by_uid(ctx['new_uid']) if 'new_uid' in ctx else None
        if record is None:
            identity.sign_out()
            return
        session_store.set(SessionProfile.from_user(record))

    saga = ProvisioningSaga(_identity_steps(identity, users, SUPER_ADMIN), establish_session,
                            finalizer_name='establish_session')
    return saga.run({'email': email, 'password': password, 'username': username})
