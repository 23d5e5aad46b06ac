"""SQLAlchemy models for commtrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, scoped_session, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class EntityType(Base):
    """Entity type (product category) model."""

    __tablename__ = "entity_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    entities = relationship("Entity", back_populates="entity_type", cascade="all, delete-orphan")


class Entity(Base):
    """Commission-paying partner model."""

    __tablename__ = "entities"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type_id = Column(Integer, ForeignKey("entity_types.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index("entities_type_id_idx", "type_id"),
        Index("entities_name_idx", "name"),
        Index("entities_created_at_idx", "created_at"),
    )

    # Relationships
    entity_type = relationship("EntityType", back_populates="entities")
    transactions = relationship("EntityTransaction", back_populates="entity", cascade="all, delete-orphan")


class EntityTransaction(Base):
    """Monthly commission amount for an entity."""

    __tablename__ = "entity_transactions"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id", ondelete="CASCADE"), nullable=False)
    # Always the first day of the month, e.g. 2025-04-01 for Apr/2025
    month = Column(Date, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index("entity_transactions_entity_id_idx", "entity_id"),
        Index("entity_transactions_month_idx", "month"),
        Index("entity_transactions_created_at_idx", "created_at"),
        Index("entity_transactions_entity_id_month_idx", "entity_id", "month"),
    )

    # Relationships
    entity = relationship("Entity", back_populates="transactions")


def create_session_factory(database_url: str) -> scoped_session[Session]:
    """Create a thread-local SQLAlchemy session registry."""
    engine_options = {"echo": False}
    if not database_url.startswith("sqlite"):
        engine_options["pool_pre_ping"] = True
    engine = create_engine(database_url, **engine_options)
    Base.metadata.create_all(engine)
    return scoped_session(sessionmaker(bind=engine))
