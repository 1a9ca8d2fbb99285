#!/usr/bin/env python3
"""
Script to register the portal's first Super Admin from the command line.
Does the same as the /setup-super-admin page and refuses to run once a
Super Admin exists.
"""

import sys
import os
import argparse
import getpass
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv
load_dotenv()

from clubportal import create_app  # noqa: E402
from clubportal.errors import PortalError  # noqa: E402
from clubportal.identity import IdentityClient  # noqa: E402
from clubportal.provisioning import setup_super_admin  # noqa: E402
from clubportal.services import UserDirectory  # noqa: E402
from clubportal.session_store import SessionStore  # noqa: E402


def create_superuser(email, username, password):
    """Register the Super Admin; returns True on success"""
    app = create_app()
    with app.app_context():
        # No browser here, so the identity and profile sessions are throwaway dicts
        state = {}
        try:
            result = setup_super_admin(
                IdentityClient(state),
                UserDirectory(),
                SessionStore(state),
                email=email,
                password=password,
                username=username,
            )
        except PortalError as e:
            print(f"  ✗ {str(e)}")
            return False

    print(f"  ✓ Super Admin {username} <{email}> created (uid {result.context['new_uid']})")
    print("Login at /login to manage admins and members.")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the portal's Super Admin account.")
    parser.add_argument('--email', required=True)
    parser.add_argument('--username', required=True)
    parser.add_argument('--password', help="Prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    return 0 if create_superuser(args.email, args.username, password) else 1


if __name__ == "__main__":
    sys.exit(main())
