# scripts/seed_recipes.py
import argparse
import logging
from pathlib import Path

from sqlmodel import Session

from catalog.core.config import settings
from catalog.db import engine, init_db
from catalog.services.seeding import load_seed_recipes, seed_recipes


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Insert the bundled recipe dataset.")
    parser.add_argument("--data", type=Path, default=settings.seed_data_path)
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    # ensure recipes and cuisine tables exist
    init_db()

    with Session(engine) as session:
        return seed_recipes(session, load_seed_recipes(args.data))


if __name__ == "__main__":
    main()
