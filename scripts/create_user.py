"""Create a user account. Run with: python -m scripts.create_user NAME EMAIL PASSWORD"""
import asyncio
import sys

from imgupper.config import get_settings
from imgupper.core.exceptions import AppError
from imgupper.db.session import build_engine, build_session_factory
from imgupper.users.service import add_user


async def main(name: str, email: str, password: str) -> int:
    engine = build_engine(get_settings())
    session_factory = build_session_factory(engine)
    try:
        async with session_factory() as db:
            user = await add_user(db, name, email, password)
    except AppError as exc:
        print(f"  Failed: {exc.message}")
        return 1
    finally:
        await engine.dispose()
    print(f"  Created: id={user.id} email={user.email}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(*sys.argv[1:4])))
