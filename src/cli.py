"""Command line entry point: serve the API, recreate the schema or seed demo data."""

import argparse
import asyncio
from decimal import Decimal

import structlog
import uvicorn

from src.core.config import settings
from src.core.logging import setup_logging
from src.core.security import PasswordHasher
from src.domain.entities import GiftCard, GiftCardStatus, User
from src.infrastructure.database import db_manager
from src.infrastructure.repositories import (
    PostgresGiftCardRepository,
    PostgresUserRepository,
)

logger = structlog.get_logger(__name__)

SEED_USER_COUNT = 2
SEED_PASSWORD = "password"
SEED_AMOUNT = Decimal("100")
SEED_CARDS_PER_STATUS = 2
SEED_STATUSES = (GiftCardStatus.ACCEPTED, GiftCardStatus.REJECTED)


async def migrate(database_url: str | None = None) -> None:
    """Drop and recreate every table."""
    db_manager.init(database_url)
    try:
        await db_manager.recreate_schema()
    finally:
        await db_manager.close()


async def seed(database_url: str | None = None) -> None:
    """
    Insert demo users and gift cards.

    Creates test0@example.com and test1@example.com, then four cards of
    100 sent by the first user to itself: two accepted and two rejected.
    """
    db_manager.init(database_url)
    hasher = PasswordHasher()

    try:
        async with db_manager.session() as session:
            users = PostgresUserRepository(session)
            gift_cards = PostgresGiftCardRepository(session)

            created = []
            for i in range(SEED_USER_COUNT):
                user = User(
                    email=f"test{i}@example.com",
                    password_hash=hasher.hash(SEED_PASSWORD),
                )
                created.append(await users.create(user))

            owner_id = created[0].id
            seeded_cards = 0
            for status in SEED_STATUSES:
                for _ in range(SEED_CARDS_PER_STATUS):
                    card = await gift_cards.create(
                        GiftCard(amount=SEED_AMOUNT, sender_id=owner_id, receiver_id=owner_id)
                    )
                    await gift_cards.update_status(card.id, status)
                    seeded_cards += 1

        logger.info("database_seeded", users=len(created), gift_cards=seeded_cards)
    finally:
        await db_manager.close()


def serve(host: str, port: int) -> None:
    uvicorn.run("src.main:app", host=host, port=port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gift-card-service", description="Gift card service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)

    for name, help_text in (
        ("migrate", "Drop and recreate all tables"),
        ("seed", "Insert demo users and gift cards"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument(
            "--database-url",
            default=None,
            help="Override DATABASE_URL",
        )

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging()

    if args.command == "serve":
        serve(args.host, args.port)
    elif args.command == "migrate":
        asyncio.run(migrate(args.database_url))
    elif args.command == "seed":
        asyncio.run(seed(args.database_url))


if __name__ == "__main__":
    main()
