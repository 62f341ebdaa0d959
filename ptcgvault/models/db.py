"""
SQLAlchemy ORM models for persistent storage.

Users own inventory rows and decks; cards belong to expansions.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserDB(Base):
    """An account that owns inventory and decks."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<UserDB(id={self.id}, email={self.email})>"


class ExpansionDB(Base):
    """A released card set."""

    __tablename__ = "expansions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    series: Mapped[str | None] = mapped_column(String(255), nullable=True)
    set_code: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_cards: Mapped[int | None] = mapped_column(Integer, nullable=True)
    official_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    cards: Mapped[list["CardDB"]] = relationship(back_populates="expansion")

    def __repr__(self) -> str:
        return f"<ExpansionDB(set_code={self.set_code}, name={self.name})>"


class CardDB(Base):
    """
    A card definition in the catalog.

    card_type holds one of the CardType values. meta_win_rate is an
    externally computed statistic and may be absent.
    """

    __tablename__ = "cards"
    __table_args__ = (UniqueConstraint("expansion_id", "card_number", name="uq_expansion_number"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    expansion_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("expansions.id", ondelete="CASCADE"), index=True
    )
    card_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rarity: Mapped[str | None] = mapped_column(String(64), nullable=True)
    card_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    subtype: Mapped[str | None] = mapped_column(String(64), nullable=True)
    hp: Mapped[int | None] = mapped_column(Integer, nullable=True)
    retreat_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weakness: Mapped[str | None] = mapped_column(String(64), nullable=True)
    resistance: Mapped[str | None] = mapped_column(String(64), nullable=True)
    illustrator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    legal_standard: Mapped[bool] = mapped_column(Boolean, default=False)
    legal_expanded: Mapped[bool] = mapped_column(Boolean, default=False)
    is_basic_energy: Mapped[bool] = mapped_column(Boolean, default=False)
    meta_win_rate: Mapped[float | None] = mapped_column(Float, nullable=True)

    expansion: Mapped["ExpansionDB"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name})>"


class InventoryDB(Base):
    """How many copies of a card a user owns."""

    __tablename__ = "inventory"
    __table_args__ = (UniqueConstraint("user_id", "card_id", name="uq_user_card"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), index=True
    )
    count: Mapped[int] = mapped_column(Integer, default=1)

    def __repr__(self) -> str:
        return f"<InventoryDB(user={self.user_id}, card={self.card_id}, count={self.count})>"


class DeckDB(Base):
    """A user's deck."""

    __tablename__ = "decks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    format: Mapped[str] = mapped_column(String(50), default="Standard")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    cards: Mapped[list["DeckCardDB"]] = relationship(
        back_populates="deck", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<DeckDB(id={self.id}, name={self.name})>"


class DeckCardDB(Base):
    """Association between a deck and a card, with copy count."""

    __tablename__ = "deck_cards"
    __table_args__ = (UniqueConstraint("deck_id", "card_id", name="uq_deck_card"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    deck_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("decks.id", ondelete="CASCADE"), index=True
    )
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), index=True
    )
    count: Mapped[int] = mapped_column(Integer, default=1)

    deck: Mapped["DeckDB"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<DeckCardDB(deck={self.deck_id}, card={self.card_id}, count={self.count})>"
