from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Integer, Numeric, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column
from pdf_rg.db.base import Base

class Consulta(Base):
    """Registro de gasto de um módulo (uma linha por cobrança)."""

    __tablename__ = "consultas"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    module_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    documento: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="completed", nullable=False)
    custo: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    saldo_usado: Mapped[str] = mapped_column(String(16), nullable=False)  # plano | misto | carteira
    resultado: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    metadados: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
