from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pdf_rg.core.security import ROLE_ADMIN, create_access_token
from pdf_rg.database.init_db import registrar_modelos
from pdf_rg.database.session import get_db
from pdf_rg.db.base import Base
from pdf_rg.main import app
from pdf_rg.models.user import User
from pdf_rg.models.wallet import Wallet

registrar_modelos()


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def criar_usuario(db):
    def _criar(nome="Maria", email=None, cpf=None, saldo="0", saldo_plano="0", plano_nome=None, desconto="0"):
        n = db.query(User).count() + 1
        u = User(
            nome=nome,
            email=email or f"user{n}@example.com",
            cpf=cpf or f"{n:011d}",
        )
        db.add(u)
        db.flush()
        db.add(
            Wallet(
                user_id=u.id,
                saldo_atual=Decimal(saldo),
                saldo_plano=Decimal(saldo_plano),
                plano_nome=plano_nome,
                desconto_plano=Decimal(desconto),
            )
        )
        db.commit()
        return u
    return _criar


@pytest.fixture
def usuario(criar_usuario):
    return criar_usuario(saldo="100.00")


@pytest.fixture
def admin(criar_usuario):
    return criar_usuario(nome="Admin", email="admin@example.com")


def auth(user, admin=False) -> dict:
    token = create_access_token(sub=str(user.id), role=ROLE_ADMIN if admin else "user")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(usuario):
    return auth(usuario)


@pytest.fixture
def admin_headers(admin):
    return auth(admin, admin=True)
