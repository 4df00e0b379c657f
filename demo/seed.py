#!/usr/bin/env python3
"""
Demo seed script — populates the database with sample accounts for demos.

!! NOT FOR PRODUCTION !!
This script registers users with known passwords. It is intended ONLY for
local demos and frontend development.

Usage:
    # With the API server running on localhost:8000:
    python demo/seed.py

    # Reset the database (restart the server afterwards):
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000

Login credentials after seeding:
    ┌──────────────────────────────┬───────────────────┬────────┐
    │ Email                        │ Password          │ Role   │
    ├──────────────────────────────┼───────────────────┼────────┤
    │ admin@accountsdemo.com       │ AdminDemo1        │ ADMIN  │
    │ ana.ruiz@example.com         │ AnaDemo1          │ CLIENT │
    │ bruno.diaz@example.com       │ BrunoDemo1        │ CLIENT │
    │ carla.vega@example.com       │ CarlaDemo1        │ CLIENT │
    └──────────────────────────────┴───────────────────┴────────┘
"""

import argparse
import asyncio
import os

import httpx

BASE_URL = "http://localhost:8000"

# ---------------------------------------------------------------------------
# Demo users
# ---------------------------------------------------------------------------

ADMIN = {
    "first_name": "Admin",
    "last_name": "User",
    "email": "admin@accountsdemo.com",
    "password": "AdminDemo1",
    "role": "ADMIN",
}

CLIENTS = [
    {
        "first_name": "Ana",
        "last_name": "Ruiz",
        "email": "ana.ruiz@example.com",
        "password": "AnaDemo1",
        "role": "CLIENT",
        "address": "Calle 1 #23",
        "phone": "555-0101",
        "document": "CI-4410021",
    },
    {
        "first_name": "Bruno",
        "last_name": "Diaz",
        "email": "bruno.diaz@example.com",
        "password": "BrunoDemo1",
        "role": "CLIENT",
        "address": "Av. Central 400",
        "phone": "555-0102",
    },
    {
        "first_name": "Carla",
        "last_name": "Vega",
        "email": "carla.vega@example.com",
        "password": "CarlaDemo1",
        "role": "CLIENT",
    },
]


def log(msg: str) -> None:
    print(f"  {msg}")


async def register(client: httpx.AsyncClient, base_url: str, user: dict) -> dict | None:
    """Register a user; returns the account, or None if the email is taken."""
    resp = await client.post(f"{base_url}/auth/register", json=user)
    if resp.status_code == 409:
        log(f"{user['email']} already registered, skipping")
        return None
    resp.raise_for_status()
    return resp.json()


async def seed(base_url: str) -> None:
    async with httpx.AsyncClient(timeout=30) as client:
        print("\nRegistering users...")
        for user in [ADMIN, *CLIENTS]:
            account = await register(client, base_url, user)
            if account:
                log(f"{account['email']:<30s} {account['role']}")

        # Admin credentials are sent with every request (HTTP Basic)
        auth = (ADMIN["email"], ADMIN["password"])

        print("\nClient profiles:")
        resp = await client.get(f"{base_url}/profiles", auth=auth)
        resp.raise_for_status()
        for profile in resp.json():
            log(f"{profile['code']:<10s} {profile['account']['email']}")

    print("\n========================================")
    print("  SEED COMPLETE — Login Credentials")
    print("========================================")
    print(f"\n  {'Email':<30s} {'Password':<20s} {'Role'}")
    print(f"  {'─' * 30} {'─' * 20} {'─' * 6}")
    for user in [ADMIN, *CLIENTS]:
        print(f"  {user['email']:<30s} {user['password']:<20s} {user['role']}")
    print()


def reset_database() -> None:
    """Delete the SQLite database file so the server recreates it on restart."""
    db_path = os.path.join(os.path.dirname(__file__), "..", "data", "accounts.db")
    db_path = os.path.normpath(db_path)

    if os.path.exists(db_path):
        os.remove(db_path)
        print(f"\n  Deleted {db_path}")
        print("  Restart the server to recreate empty tables.\n")
    else:
        print(f"\n  No database found at {db_path}\n")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Demo seed script — NOT FOR PRODUCTION",
        epilog="Registers a sample admin and clients for demos.",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"Base URL of the running API (default: {BASE_URL})",
    )
    parser.add_argument(
        "--reset", action="store_true",
        help="Delete the database file and exit (restart server to recreate)",
    )
    args = parser.parse_args()

    if args.reset:
        reset_database()
        return

    await seed(args.base_url)


if __name__ == "__main__":
    asyncio.run(main())
