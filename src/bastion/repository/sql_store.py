"""SQLAlchemy-backed repository storing world snapshots in a single table.

Each row keeps the JSON-serialized world next to a few denormalized columns
(turn, timestamps) so the table can be inspected without decoding payloads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import DateTime, Integer, Text, create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from bastion.domain import models as dm
from bastion.repository.base import WORLD_ADAPTER, GameNotFoundError


class Base(DeclarativeBase):
    """Declarative base for repository tables."""

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """Adds created_at and updated_at columns maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class GameRecord(TimestampMixin, Base):
    """One stored world."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    turn: Mapped[int] = mapped_column(Integer, nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)


def _configure_sqlite(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Enable WAL journaling and foreign keys on every new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine, applying SQLite pragmas where relevant."""

    engine = create_engine(database_url, echo=echo, pool_pre_ping=True)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _configure_sqlite)
    return engine


class SqlGameRepository:
    """Persist worlds through SQLAlchemy."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.engine = create_db_engine(database_url, echo=echo)
        Base.metadata.create_all(bind=self.engine)
        self._sessions: sessionmaker[Session] = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def save(self, state: dm.WorldState) -> None:
        payload = WORLD_ADAPTER.dump_json(state).decode("utf-8")
        with self._sessions.begin() as session:
            record = session.get(GameRecord, int(state.game_id))
            if record is None:
                session.add(GameRecord(id=int(state.game_id), turn=state.turn, payload=payload))
            else:
                record.turn = state.turn
                record.payload = payload

    def load(self, game_id: dm.GameID) -> dm.WorldState:
        with self._sessions() as session:
            record = session.get(GameRecord, int(game_id))
            if record is None:
                raise GameNotFoundError(game_id)
            return WORLD_ADAPTER.validate_json(record.payload)

    def list_games(self) -> list[dm.GameID]:
        with self._sessions() as session:
            ids = session.scalars(select(GameRecord.id).order_by(GameRecord.id)).all()
        return [dm.GameID(game_id) for game_id in ids]

    def delete(self, game_id: dm.GameID) -> None:
        with self._sessions.begin() as session:
            record = session.get(GameRecord, int(game_id))
            if record is not None:
                session.delete(record)

    def dispose(self) -> None:
        self.engine.dispose()
