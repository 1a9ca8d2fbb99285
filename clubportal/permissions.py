# clubportal/permissions.py

"""Role → capability table.

Route guards, templates and the provisioning flow all ask ``can()``;
no other module compares role strings.
"""

SUPER_ADMIN = 'SUPER_ADMIN'
ADMIN = 'ADMIN'
MEMBER = 'MEMBER'
ROLES = (SUPER_ADMIN, ADMIN, MEMBER)

VIEW_DASHBOARD = 'dashboard:view'
MANAGE_PROJECTS = 'projects:manage'
MANAGE_EVENTS = 'events:manage'
MANAGE_SETTINGS = 'settings:manage'
MANAGE_CONTENT = 'content:manage'
MANAGE_MEMBERS = 'members:manage'
MANAGE_ADMINS = 'admins:manage'

_ANY_SIGNED_IN = {
    VIEW_DASHBOARD,
    MANAGE_PROJECTS,
    MANAGE_EVENTS,
    MANAGE_SETTINGS,
    MANAGE_CONTENT,
}

ROLE_CAPABILITIES = {
    SUPER_ADMIN: _ANY_SIGNED_IN | {MANAGE_MEMBERS, MANAGE_ADMINS},
    ADMIN: _ANY_SIGNED_IN | {MANAGE_MEMBERS},
    MEMBER: set(_ANY_SIGNED_IN),
}

# Capability the acting user needs to provision an account with a given role.
# SUPER_ADMIN is only ever created by the one-time setup.
PROVISIONING_CAPABILITY = {
    ADMIN: MANAGE_ADMINS,
    MEMBER: MANAGE_MEMBERS,
}


def can(role, capability):
    return capability in ROLE_CAPABILITIES.get(role, ())


def can_provision(role, target_role):
    capability = PROVISIONING_CAPABILITY.get(target_role)
    return capability is not None and can(role, capability)


def allowed_roles(capability):
    return [role for role in ROLES if can(role, capability)]
