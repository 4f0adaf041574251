# pdf_rg/services/carteira.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdf_rg.core.errors import CobrancaError
from pdf_rg.models.transaction import Transaction
from pdf_rg.models.wallet import Wallet

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

SALDO_PLANO = "plano"
SALDO_MISTO = "misto"
SALDO_CARTEIRA = "carteira"


@dataclass(frozen=True)
class Saldos:
    plano: Decimal = ZERO
    carteira: Decimal = ZERO
    plano_nome: str | None = None
    desconto: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.plano + self.carteira


@dataclass(frozen=True)
class DivisaoCobranca:
    saldo_usado: str  # plano | misto | carteira
    debito_plano: Decimal
    debito_carteira: Decimal

    @property
    def total(self) -> Decimal:
        return self.debito_plano + self.debito_carteira


def _dec(v) -> Decimal:
    return Decimal(str(v)) if v is not None else ZERO


def dividir_cobranca(saldo_plano, saldo_carteira, valor) -> DivisaoCobranca:
    """Escolhe de onde sai o dinheiro de uma cobrança.

    - plano cobre tudo  -> "plano"
    - plano positivo + carteira cobrem -> "misto", carteira paga só valor - plano
    - senão -> "carteira" paga tudo (pode ficar negativa)
    """
    plano, carteira, valor = _dec(saldo_plano), _dec(saldo_carteira), _dec(valor)
    if plano >= valor:
        return DivisaoCobranca(SALDO_PLANO, valor, ZERO)
    if plano > 0 and plano + carteira >= valor:
        return DivisaoCobranca(SALDO_MISTO, plano, valor - plano)
    return DivisaoCobranca(SALDO_CARTEIRA, ZERO, valor)


class CarteiraService:
    def __init__(self, db: Session):
        self.db = db

    def _wallet(self, user_id: int, lock: bool = False) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.user_id == user_id)
        if lock:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def saldos(self, user_id: int | None) -> Saldos:
        if user_id is None:
            return Saldos()
        w = self._wallet(user_id)
        if w is None:
            return Saldos()
        return Saldos(
            plano=_dec(w.saldo_plano),
            carteira=_dec(w.saldo_atual),
            plano_nome=w.plano_nome,
            desconto=_dec(w.desconto_plano) if w.plano_nome else ZERO,
        )

    def reservar(self, user_id: int | None, valor, memo: str) -> DivisaoCobranca:
        """Confere e debita numa única transação (linha da carteira travada).

        Qualquer falha desfaz tudo e vira ``CobrancaError``.
        """
        valor = _dec(valor)
        if user_id is None:
            raise CobrancaError("Pedido sem usuário: não há carteira para cobrar.")
        try:
            w = self._wallet(user_id, lock=True)
            if w is None:
                raise CobrancaError(f"Carteira não encontrada para o usuário {user_id}")

            divisao = dividir_cobranca(w.saldo_plano, w.saldo_atual, valor)
            w.saldo_plano = _dec(w.saldo_plano) - divisao.debito_plano
            w.saldo_atual = _dec(w.saldo_atual) - divisao.debito_carteira

            lancamentos = []
            if divisao.debito_plano > 0:
                lancamentos.append(
                    Transaction(wallet_id=w.id, tipo="DEBITO", origem=SALDO_PLANO,
                                valor=divisao.debito_plano, referencia=memo)
                )
            if divisao.debito_carteira > 0:
                lancamentos.append(
                    Transaction(wallet_id=w.id, tipo="DEBITO", origem=SALDO_CARTEIRA,
                                valor=divisao.debito_carteira, referencia=memo)
                )
            self.db.add_all([w, *lancamentos])
            self.db.commit()
        except CobrancaError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Falha ao debitar R$ %s do usuário %s", valor, user_id)
            raise CobrancaError() from exc

        logger.info(
            "Debitado R$ %s do usuário %s (%s: plano=%s carteira=%s)",
            valor, user_id, divisao.saldo_usado, divisao.debito_plano, divisao.debito_carteira,
        )
        return divisao
