import pytest

from clubportal import documents as collections
from clubportal.documents import DocumentClient
from clubportal.errors import InvalidDocument, UsernameTaken
from clubportal.permissions import SUPER_ADMIN, ADMIN, MEMBER
from clubportal.services import UserDirectory, SiteSettingsService, SITE_SETTINGS_DEFAULTS


def test_user_directory_lookup_by_username_or_email(app):
    users = UserDirectory()
    users.create_record('uid-ram', 'Ram@Example.org', 'ram', ADMIN, 'uid-root')

    assert users.find_by_login('ram')['uid'] == 'uid-ram'
    assert users.find_by_login('RAM@example.org')['uid'] == 'uid-ram'
    assert users.find_by_login('sita') is None
    assert users.find_by_login('') is None


def test_user_directory_lists_by_role(app):
    users = UserDirectory()
    users.create_record('uid-1', 'one@example.org', 'one', MEMBER, 'uid-root')
    users.create_record('uid-2', 'two@example.org', 'two', ADMIN, 'uid-root')
    users.create_record('uid-3', 'three@example.org', 'three', MEMBER, 'uid-root')

    assert sorted(u['username'] for u in users.list(MEMBER)) == ['one', 'three']
    assert [u['username'] for u in users.list(ADMIN)] == ['two']
    assert len(users.list()) == 3


def test_create_record_rejects_unknown_roles(app):
    with pytest.raises(InvalidDocument):
        UserDirectory().create_record('uid-x', 'x@example.org', 'x', 'OWNER', 'uid-root')


def test_super_admin_exists(app):
    users = UserDirectory()
    assert not users.super_admin_exists()
    users.create_record('uid-root', 'root@example.org', 'root', SUPER_ADMIN, 'uid-root')
    assert users.super_admin_exists()


def test_delete_record_keeps_other_records(app):
    users = UserDirectory()
    users.create_record('uid-1', 'one@example.org', 'one', MEMBER, 'uid-root')
    users.create_record('uid-2', 'two@example.org', 'two', MEMBER, 'uid-root')
    users.delete_record('uid-1')
    assert [u['uid'] for u in users.list(MEMBER)] == ['uid-2']


def test_site_settings_defaults_when_never_saved(app):
    service = SiteSettingsService()
    assert service.get() is None
    assert service.get_or_defaults() == SITE_SETTINGS_DEFAULTS


def test_site_settings_is_a_singleton(app):
    service = SiteSettingsService()
    first_id = service.save(dict(SITE_SETTINGS_DEFAULTS, president_name='Asha'))
    second_id = service.save(dict(SITE_SETTINGS_DEFAULTS, president_name='Bikash', id='ignored'))

    assert first_id == second_id
    stored = DocumentClient().query(collections.SITE_SETTINGS)
    assert len(stored) == 1
    assert stored[0]['president_name'] == 'Bikash'
    assert stored[0]['updated_at'] is not None


def test_create_record_rejects_a_taken_username(app):
    users = UserDirectory()
    users.create_record('uid-1', 'one@example.org', 'ram', MEMBER, 'uid-root')

    with pytest.raises(UsernameTaken):
        users.create_record('uid-2', 'two@example.org', ' ram ', MEMBER, 'uid-root')
    assert users.username_taken('ram')
    assert not users.username_taken('ram', exclude_uid='uid-1')
    assert users.get_by_uid('uid-2') is None
