# backend/migrate.py
import sys
from sitefactory.config import settings
from sitefactory.errors import MigrationError
from sitefactory.stores import SqlProjectStore

def main():
    if settings.STORAGE_BACKEND != "sqlite":
        print("Migrations only apply to the embedded sqlite store")
        sys.exit(1)

    try:
        store = SqlProjectStore.from_url(settings.DATABASE_URL, settings.MIGRATIONS_PATH)
    except MigrationError as e:
        print(f"Error running migrations: {e}")
        sys.exit(1)

    applied = ", ".join(store.applied_migrations) or "none pending"
    print(f"Migrations executed successfully ({applied}). Database located at {settings.DATABASE_URL}")
    store.close()

if __name__ == "__main__":
    main()
