from pathlib import Path
from datetime import datetime

from peoria.db import Base, SessionLocal, engine
from peoria import crud
from peoria.storage import export_to_json

# Paths
BASE_DIR = Path(__file__).resolve().parent
BACKUP_DIR = BASE_DIR / "backups"


def backup(slot: str = crud.DEFAULT_SLOT) -> Path | None:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        state = crud.load_state(db, slot)
    finally:
        db.close()

    if state is None:
        return None

    BACKUP_DIR.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M")
    backup_file = BACKUP_DIR / f"peoria_{timestamp}.json"
    backup_file.write_text(export_to_json(state), encoding="utf-8")
    return backup_file


if __name__ == "__main__":
    backup_file = backup()
    if backup_file:
        print(f"✅ Backup written: {backup_file.name}")
    else:
        print("❌ No saved competition")
