from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from pdf_rg.db.base import Base
from pdf_rg.models.status import StatusPedido

QR_PLAN_PADRAO = "1m"


class PdfRgPedido(Base):
    __tablename__ = "pdf_rg_pedidos"

    id: Mapped[int] = mapped_column(primary_key=True)
    module_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)

    # dados do RG
    cpf: Mapped[str] = mapped_column(String(32), index=True, nullable=False)  # somente dígitos
    nome: Mapped[str | None] = mapped_column(String(255), index=True)
    dt_nascimento: Mapped[str | None] = mapped_column(String(20))
    naturalidade: Mapped[str | None] = mapped_column(String(120))
    filiacao_mae: Mapped[str | None] = mapped_column(String(255))
    filiacao_pai: Mapped[str | None] = mapped_column(String(255))
    diretor: Mapped[str | None] = mapped_column(String(60))

    # arquivos enviados pelo cliente (base64 / data URL)
    assinatura_base64: Mapped[str | None] = mapped_column(Text)
    foto_base64: Mapped[str | None] = mapped_column(Text)
    anexo1_base64: Mapped[str | None] = mapped_column(Text)
    anexo1_nome: Mapped[str | None] = mapped_column(String(255))
    anexo2_base64: Mapped[str | None] = mapped_column(Text)
    anexo2_nome: Mapped[str | None] = mapped_column(String(255))
    anexo3_base64: Mapped[str | None] = mapped_column(Text)
    anexo3_nome: Mapped[str | None] = mapped_column(String(255))

    qr_plan: Mapped[str] = mapped_column(String(4), default=QR_PLAN_PADRAO, nullable=False)
    status: Mapped[int] = mapped_column(Integer, default=int(StatusPedido.REALIZADO), index=True, nullable=False)
    preco_pago: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    desconto_aplicado: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0, nullable=False)

    # documento final, preenchido pelo admin na entrega
    pdf_entrega_base64: Mapped[str | None] = mapped_column(Text)
    pdf_entrega_nome: Mapped[str | None] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
