# reset_seed.py
# one-time helper to put the configured database back to the seed fixtures

from fileshelf_backend.app.database import SessionLocal, init_db
from fileshelf_backend.app.seed import reset_to_seed, SEED_USERS
from fileshelf_backend.app.core.config import settings

init_db()
db = SessionLocal()

try:
    rows = reset_to_seed(db)
    print(f"Stored {len(rows)} seed file(s) for {', '.join(SEED_USERS)}.")
    print(f"Seed users log in with password {settings.SEED_PASSWORD!r}.")
finally:
    db.close()
