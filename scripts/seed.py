"""Seed sample users, keys and follow edges for local development."""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from followgraph import models  # noqa: E402
from followgraph.config import get_settings  # noqa: E402
from followgraph.db import create_all, get_sessionmaker  # noqa: E402
from followgraph.services.follows import apply_action, decide  # noqa: E402
from followgraph.utils.apikey import gen_key  # noqa: E402


def main() -> None:
    settings = get_settings()
    print(f"Using database: {settings.database_url}")

    create_all()
    session = get_sessionmaker()()

    try:
        alice = models.User(name="alice", email="alice@example.com")
        bob = models.User(name="bob", email="bob@example.com")
        carol = models.User(name="carol", email="carol@example.com", account_type=models.AccountType.PRIVATE)
        session.add_all([alice, bob, carol])
        session.commit()

        keys = {}
        for user in (alice, bob, carol):
            raw, prefix, key_hash = gen_key()
            session.add(
                models.ApiKey(
                    name=f"seed-{user.name}",
                    prefix=prefix,
                    key_hash=key_hash,
                    scope=models.ApiScope.user,
                    user_id=user.id,
                )
            )
            keys[user.name] = raw
        session.commit()

        apply_action(session, alice.id, bob.id, "follow")
        apply_action(session, bob.id, carol.id, "request")
        apply_action(session, alice.id, carol.id, "request")
        pending = session.query(models.Follow).filter_by(user_id=alice.id, target_id=carol.id).one()
        decide(session, pending.id, carol.id, "approve")

        print("Seed data inserted. API keys:")
        for name, raw in keys.items():
            print(f"    {name}: {raw}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
