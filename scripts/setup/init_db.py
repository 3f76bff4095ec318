# scripts/setup/init_db.py
"""
Initialize the database: creates the tables and reports what is stored.
Run once before first launch.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
import asyncio
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from parking_manager.database import SessionLocal, create_tables, engine
from parking_manager.config import settings
from parking_manager.services.storage_service import StorageService
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError


def main():
    print("Parking Manager DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except SQLAlchemyError as e:
        print(f"Cannot connect to database: {e}")
        print("\nCheck DATABASE_URL in .env")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    storage = StorageService(SessionLocal)
    document = asyncio.run(storage.load())
    print(f"\nStorage key '{storage.key}': {len(document.employees)} employees, "
          f"{len(document.parking_spaces)} spaces, {len(document.assignments)} assignments")

    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn parking_manager.main:app --host {settings.BACKEND_HOST} "
          f"--port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
