# clubportal/errors.py

"""Exceptions raised by the portal's clients and flows.

Screens catch ``PortalError`` and show its message to the user, so every
message here should read well in a flash banner.
"""


class PortalError(Exception):
    """Base class for errors that are safe to show to the user."""


# Identity provider

class IdentityError(PortalError):
    pass


class EmailAlreadyInUse(IdentityError):
    pass


class WeakPassword(IdentityError):
    pass


class InvalidCredentials(IdentityError):
    pass


class AccountNotFound(IdentityError):
    pass


# Document store

class DocumentError(PortalError):
    pass


class UnknownCollection(DocumentError):
    pass


class InvalidDocument(DocumentError):
    pass


class DocumentNotFound(DocumentError):
    pass


class UsernameTaken(DocumentError):
    pass


# Access control

class AuthenticationRequired(PortalError):
    pass


class PermissionDenied(PortalError):
    pass


# Flows

class SetupDisabled(PortalError):
    pass


class ProvisioningError(PortalError):
    """Raised when the provisioning saga did not complete.

    ``outcome`` is a ``ProvisioningOutcome`` and ``log`` is the list of
    ``LogEntry`` records, so callers can tell exactly which steps ran,
    which were compensated and whether the session was restored.
    """

    def __init__(self, message, outcome=None, log=None, cause=None):
        super().__init__(message)
        self.outcome = outcome
        self.log = list(log or [])
        self.cause = cause
