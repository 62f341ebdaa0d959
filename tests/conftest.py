import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ptcgvault.db.database import get_session
from ptcgvault.main import app, limiter
from ptcgvault.models.card import CardType, OwnedCard
from ptcgvault.models.db import Base, CardDB, ExpansionDB, UserDB
from ptcgvault.services.auth import hash_password, issue_token


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_maker):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
async def user(session_maker) -> UserDB:
    """A registered user."""
    async with session_maker() as session:
        user = UserDB(email="ash@example.com", password_hash=hash_password("pikachu"))
        session.add(user)
        await session.commit()
    return user


@pytest.fixture
def auth_headers(user: UserDB) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest.fixture
async def catalog(session_maker) -> dict[str, CardDB]:
    """
    A small catalog in one expansion.

    Keys are card names. Stats are chosen so the score order is
    Iono > Pikachu ex > Basic Lightning Energy > Double Turbo Energy.
    """
    async with session_maker() as session:
        expansion = ExpansionDB(name="Paldea Evolved", set_code="PAL", series="Scarlet & Violet")
        session.add(expansion)
        await session.flush()

        cards = {
            "Pikachu ex": CardDB(
                name="Pikachu ex",
                expansion_id=expansion.id,
                card_number="63",
                card_type="Pokemon",
                legal_standard=True,
                legal_expanded=True,
                meta_win_rate=0.55,
            ),
            "Iono": CardDB(
                name="Iono",
                expansion_id=expansion.id,
                card_number="185",
                card_type="Trainer",
                legal_standard=True,
                legal_expanded=True,
                meta_win_rate=0.6,
            ),
            "Basic Lightning Energy": CardDB(
                name="Basic Lightning Energy",
                expansion_id=expansion.id,
                card_number="257",
                card_type="Energy",
                is_basic_energy=True,
                legal_standard=True,
                legal_expanded=True,
            ),
            "Double Turbo Energy": CardDB(
                name="Double Turbo Energy",
                expansion_id=expansion.id,
                card_number="151",
                card_type="Energy",
                legal_standard=False,
                legal_expanded=True,
            ),
        }
        session.add_all(cards.values())
        await session.commit()

    return cards


def _make_card(
    card_id: int | str,
    card_type: CardType = CardType.TRAINER,
    *,
    basic: bool = False,
    standard: bool = True,
    expanded: bool = True,
    times: float = 0.0,
    win_rate: float = 0.0,
) -> OwnedCard:
    """Shorthand OwnedCard constructor for core tests."""
    return OwnedCard(
        card_id=card_id,
        card_type=card_type,
        is_basic_energy=basic,
        legal_standard=standard,
        legal_expanded=expanded,
        times_in_decks=times,
        meta_win_rate=win_rate,
    )


@pytest.fixture
def make_card():
    return _make_card
