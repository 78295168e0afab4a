from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime

from .db import Base


class SavedState(Base):
    __tablename__ = "saved_states"

    id = Column(Integer, primary_key=True, index=True)
    slot = Column(String, unique=True, nullable=False, index=True)

    # {config, players} document, camelCase JSON
    state_json = Column(Text, nullable=False)

    # ranked results of the last save, source of previousRank
    results_json = Column(Text, nullable=False, default="[]")

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
