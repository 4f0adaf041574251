"""Cria usuário, admin e carteira de desenvolvimento e imprime os tokens.

Uso: python backend/scripts/seed_dev.py [--saldo 100] [--saldo-plano 0]
"""
import argparse
import sys
from decimal import Decimal

from pdf_rg.core.config import settings
from pdf_rg.core.security import ROLE_ADMIN, create_access_token
from pdf_rg.database.init_db import init_db
from pdf_rg.database.session import SessionLocal
from pdf_rg.models.user import User
from pdf_rg.models.wallet import Wallet


def _usuario(db, nome: str, email: str, cpf: str) -> User:
    u = db.query(User).filter(User.email == email).first()
    if u is None:
        u = User(nome=nome, email=email, cpf=cpf)
        db.add(u)
        db.flush()
        print(f"[seed] usuário criado: {email} (id={u.id})")
    return u


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--saldo", default="100.00")
    ap.add_argument("--saldo-plano", default="0")
    ap.add_argument("--plano", default=None, help="nome do plano ativo (habilita desconto)")
    ap.add_argument("--desconto", default="0")
    args = ap.parse_args(argv)

    print(f"[seed] DB: {settings.DATABASE_URL}")
    init_db()

    db = SessionLocal()
    try:
        user = _usuario(db, "Usuário Dev", "dev@example.com", "00000000191")
        admin = _usuario(db, "Admin Dev", "admin@example.com", "00000000272")

        w = db.query(Wallet).filter(Wallet.user_id == user.id).first()
        if w is None:
            w = Wallet(user_id=user.id)
            db.add(w)
        w.saldo_atual = Decimal(args.saldo)
        w.saldo_plano = Decimal(args.saldo_plano)
        w.plano_nome = args.plano
        w.desconto_plano = Decimal(args.desconto)
        db.commit()
        print(f"[seed] carteira: saldo={w.saldo_atual} saldo_plano={w.saldo_plano} plano={w.plano_nome}")

        print("[seed] token usuário:", create_access_token(sub=str(user.id)))
        print("[seed] token admin:  ", create_access_token(sub=str(admin.id), role=ROLE_ADMIN))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
