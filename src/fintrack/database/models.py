"""SQLAlchemy models for the fintrack record store."""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Transaction(Base):
    """Transaction model.

    ``account_id`` is a plain column: deleting an account never touches
    its transactions.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    sequence = Column(Integer, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Float, nullable=False, default=0.0)
    category = Column(String, nullable=False, default="")
    type = Column(String, nullable=False)
    account_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    sequence = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    balance = Column(Float, nullable=False, default=0.0)
    last_sync = Column(DateTime(timezone=True), nullable=False)


class Budget(Base):
    """Budget model."""

    __tablename__ = "budgets"

    id = Column(String, primary_key=True)
    sequence = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    total_amount = Column(Float, nullable=False)
    period = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    categories = Column(JSON, nullable=False, default=list)


class Goal(Base):
    """Goal model."""

    __tablename__ = "goals"

    id = Column(String, primary_key=True)
    sequence = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    category = Column(String, nullable=False)
    deadline = Column(Date, nullable=True)
    milestones = Column(JSON, nullable=False, default=list)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    In-memory SQLite URLs share one connection so every session sees the
    same tables.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
