"""
Account administration CLI for Chatbox.

Usage:
    chatbox-admin create-admin --username root --email root@mail.com
    chatbox-admin list-users
    chatbox-admin chat-log --limit 50
"""

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional, Tuple

from loguru import logger

from .config import Settings
from .core.exceptions import EmailAlreadyExistsError
from .core.security import MAX_PASSWORD_BYTES, Role, password_too_long
from .database import Account, ChatMessage, create_engine, create_session_maker, init_db
from .log import setup_logging
from .repositories import AccountRepository, ChatMessageRepository
from .services import AccountService


async def create_admin(
    settings: Settings,
    username: str,
    email: str,
    password: str,
) -> Account:
    """Create an admin account in the configured database."""
    engine = create_engine(settings.DATABASE_URL)
    try:
        await init_db(engine)
        async with create_session_maker(engine)() as session:
            service = AccountService(
                AccountRepository(Account, session),
                bcrypt_rounds=settings.BCRYPT_ROUNDS,
            )
            return await service.create(username, email, password, role=Role.ADMIN)
    finally:
        await engine.dispose()


async def list_users(settings: Settings) -> List[Account]:
    """All accounts in the configured database."""
    engine = create_engine(settings.DATABASE_URL)
    try:
        await init_db(engine)
        async with create_session_maker(engine)() as session:
            service = AccountService(AccountRepository(Account, session))
            return await service.list_accounts()
    finally:
        await engine.dispose()


async def chat_log(settings: Settings, limit: int = 20) -> Tuple[List[ChatMessage], int]:
    """Latest chat turns in sequence order, and the total number stored."""
    engine = create_engine(settings.DATABASE_URL)
    try:
        await init_db(engine)
        async with create_session_maker(engine)() as session:
            repo = ChatMessageRepository(ChatMessage, session)
            return await repo.get_log(limit=limit), await repo.count()
    finally:
        await engine.dispose()


def _read_password(password: Optional[str]) -> str:
    if password:
        return password

    password = getpass.getpass("Password: ")
    if not password:
        print("Error: Password cannot be empty")
        sys.exit(1)

    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        print("Error: Passwords don't match!")
        sys.exit(1)

    return password


def _cmd_create_admin(args, settings: Settings) -> int:
    password = _read_password(args.password)
    if password_too_long(password):
        print(f"Error: Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return 1

    try:
        account = asyncio.run(create_admin(settings, args.username, args.email, password))
    except EmailAlreadyExistsError as e:
        print(f"Error: {e.message}")
        return 1

    print("Admin account created.")
    print(f"  ID:       {account.id}")
    print(f"  Username: {account.username}")
    print(f"  Email:    {account.email}")
    return 0


def _cmd_list_users(args, settings: Settings) -> int:
    accounts = asyncio.run(list_users(settings))

    if not accounts:
        print("No users found.")
        return 0

    print(f"\n{'Username':<20} {'Email':<30} {'Role':<8} {'ID':<36}")
    print("-" * 96)
    for account in accounts:
        print(f"{account.username:<20} {account.email:<30} {account.role:<8} {str(account.id):<36}")
    print(f"\nTotal: {len(accounts)} users")
    return 0


def _cmd_chat_log(args, settings: Settings) -> int:
    messages, total = asyncio.run(chat_log(settings, args.limit))

    if not messages:
        print("No chat messages.")
        return 0

    for message in messages:
        sender = str(message.account_id) if message.account_id else "assistant"
        print(f"#{message.id:<6} {sender:<36} {message.message}")
    print(f"\nShowing {len(messages)} of {total} messages")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chatbox-admin", description="Chatbox account administration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-admin", help="Create an admin account")
    create.add_argument("--username", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted")
    create.set_defaults(func=_cmd_create_admin)

    listing = subparsers.add_parser("list-users", help="List all accounts")
    listing.set_defaults(func=_cmd_list_users)

    log = subparsers.add_parser("chat-log", help="Show the latest chat turns")
    log.add_argument("--limit", type=int, default=20)
    log.set_defaults(func=_cmd_chat_log)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    logger.debug(f"Using database {settings.DATABASE_URL}")
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
