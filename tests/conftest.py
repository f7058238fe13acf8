# ruff: noqa: S101
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import tablemaster.models  # noqa: F401 - register tables on Base.metadata
from tablemaster.database import Base
from tablemaster.models import MenuCategory, User, UserRole


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


def _make_user(db: Session, email: str, role: UserRole, full_name: str) -> User:
    user = User(email=email, full_name=full_name, role=role.value, password=None)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db: Session) -> User:
    return _make_user(db, "manager@tablemaster.test", UserRole.ADMIN, "Floor Manager")


@pytest.fixture
def staff(db: Session) -> User:
    return _make_user(db, "server@tablemaster.test", UserRole.STAFF, "Sam Server")


@pytest.fixture
def categories(db: Session) -> dict[str, MenuCategory]:
    rows = {
        slug: MenuCategory(slug=slug, name=name, sort_order=i)
        for i, (slug, name) in enumerate([("appetizers", "Appetizers"), ("steaks", "Steaks"), ("sides", "Sides")])
    }
    db.add_all(rows.values())
    db.commit()
    for row in rows.values():
        db.refresh(row)
    return rows
