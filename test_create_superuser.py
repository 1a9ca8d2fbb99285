import create_superuser
from clubportal.services import UserDirectory


def test_command_registers_the_super_admin_once(app, monkeypatch):
    monkeypatch.setattr(create_superuser, 'create_app', lambda: app)

    args = ['--email', 'root@example.org', '--username', 'root', '--password', 'rootpass']
    assert create_superuser.main(args) == 0
    assert UserDirectory().find_by_login('root')['role'] == 'SUPER_ADMIN'

    args = ['--email', 'other@example.org', '--username', 'other', '--password', 'rootpass']
    assert create_superuser.main(args) == 1
    assert UserDirectory().find_by_login('other') is None
