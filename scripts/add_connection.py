#!/usr/bin/env python3
"""
Register or update a remote vault connection
"""

import argparse
import sys
from getpass import getpass
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from vault_settings.database import Base, SessionLocal, sync_engine
from vault_settings.models import Connection


def add_connection(api_name: str, base_url: str, auth_token: str = None):
    """Create the connection, or update it if api_name already exists"""
    if not base_url.startswith(("http://", "https://")):
        print("Error: base URL must start with http:// or https://")
        sys.exit(1)

    Base.metadata.create_all(sync_engine, checkfirst=True)
    db = SessionLocal()

    try:
        connection = (
            db.query(Connection).filter(Connection.api_name == api_name).first()
        )
        if connection:
            connection.base_url = base_url.rstrip("/")
            if auth_token:
                connection.auth_token = auth_token
            action = "updated"
        else:
            connection = Connection(
                api_name=api_name,
                base_url=base_url.rstrip("/"),
                auth_token=auth_token,
            )
            db.add(connection)
            action = "created"

        db.commit()
        print(f"Connection '{api_name}' {action} (id={connection.id})")

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Register a remote vault connection")
    parser.add_argument("--name", required=True, help="Connection API name")
    parser.add_argument("--url", required=True, help="Base URL of the remote vault")
    parser.add_argument(
        "--token",
        action="store_true",
        help="Prompt for a session token to send with remote calls",
    )

    args = parser.parse_args()
    token = getpass("Session token: ") if args.token else None
    add_connection(args.name, args.url, token)
