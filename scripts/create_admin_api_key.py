"""Bootstrap an admin API key for a fresh deployment."""
from __future__ import annotations

import argparse

from dotenv import load_dotenv

load_dotenv()

from followgraph.db import get_sessionmaker, init_engine  # noqa: E402
from followgraph.models.api_key import ApiKey, ApiScope  # noqa: E402
from followgraph.utils.apikey import gen_key  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--name", default="bootstrap-admin")
    args = parser.parse_args()

    init_engine()
    db = get_sessionmaker()()
    raw, prefix, key_hash = gen_key()

    try:
        api_key = ApiKey(
            name=args.name,
            prefix=prefix,
            key_hash=key_hash,
            scope=ApiScope.admin,
            is_active=True,
        )
        db.add(api_key)
        db.commit()
        db.refresh(api_key)

        print("Admin API key created. It will not be shown again:")
        print(f"    Authorization: Bearer {raw}")
        print(f"(DB id: {api_key.id}, scope: {api_key.scope.value})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
