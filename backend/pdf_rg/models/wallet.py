from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column
from pdf_rg.db.base import Base

class Wallet(Base):
    __tablename__ = "wallets"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)
    saldo_atual: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    # saldo da assinatura; consumido antes do saldo_atual
    saldo_plano: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    plano_nome: Mapped[str | None] = mapped_column(String(80), nullable=True)  # None = pré-pago
    desconto_plano: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0, nullable=False)
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
