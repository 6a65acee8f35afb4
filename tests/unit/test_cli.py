"""Unit tests for the chatbox-admin CLI."""

import asyncio
from uuid import uuid4

import pytest

from chatbox.cli import main
from chatbox.database import ChatMessage, create_engine, create_session_maker, init_db
from chatbox.repositories import ChatMessageRepository


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return url


def _store_turns(database_url, turns):
    async def _store():
        engine = create_engine(database_url)
        await init_db(engine)
        async with create_session_maker(engine)() as session:
            repo = ChatMessageRepository(ChatMessage, session)
            for account_id, message in turns:
                await repo.append(account_id, message)
            await repo.commit()
        await engine.dispose()

    asyncio.run(_store())


def test_create_admin_and_list(database_url, capsys):
    """Created admins show up in the listing."""
    code = main([
        "create-admin",
        "--username", "root",
        "--email", "root@mail.com",
        "--password", "rootpass",
    ])
    assert code == 0
    assert "Admin account created." in capsys.readouterr().out

    assert main(["list-users"]) == 0
    out = capsys.readouterr().out
    assert "root@mail.com" in out
    assert "admin" in out
    assert "Total: 1 users" in out


def test_create_admin_duplicate(database_url, capsys):
    """Existing email is reported, not overwritten."""
    args = ["create-admin", "--username", "root", "--email", "root@mail.com", "--password", "x"]
    assert main(args) == 0
    assert main(args) == 1
    assert "already exists" in capsys.readouterr().out


def test_create_admin_password_over_72_bytes(database_url, capsys):
    """72 characters but 144 bytes: refused before hashing."""
    code = main([
        "create-admin",
        "--username", "root",
        "--email", "root@mail.com",
        "--password", "é" * 72,
    ])
    assert code == 1
    assert "at most 72 bytes" in capsys.readouterr().out

    assert main(["list-users"]) == 0
    assert "No users found." in capsys.readouterr().out


def test_list_users_empty(database_url, capsys):
    assert main(["list-users"]) == 0
    assert "No users found." in capsys.readouterr().out


def test_chat_log(database_url, capsys):
    """Latest turns in sequence order, replies shown as assistant."""
    account_id = uuid4()
    _store_turns(database_url, [
        (account_id, "first"),
        (None, "reply one"),
        (account_id, "second"),
        (None, "reply two"),
    ])

    assert main(["chat-log", "--limit", "2"]) == 0
    out = capsys.readouterr().out
    assert "first" not in out
    assert out.index("second") < out.index("reply two")
    assert str(account_id) in out
    assert "assistant" in out
    assert "Showing 2 of 4 messages" in out


def test_chat_log_empty(database_url, capsys):
    assert main(["chat-log"]) == 0
    assert "No chat messages." in capsys.readouterr().out
