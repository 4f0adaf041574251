# pdf_rg/services/consultas.py
from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdf_rg.core.errors import CobrancaError
from pdf_rg.models.consulta import Consulta

logger = logging.getLogger(__name__)


class ConsultaService:
    """Contabiliza o gasto de cada pedido (histórico de consultas do usuário)."""

    def __init__(self, db: Session):
        self.db = db

    def registrar(
        self,
        *,
        documento: str,
        custo: Decimal,
        saldo_usado: str,
        module_id: int = 0,
        user_id: int | None = None,
        resultado: dict | None = None,
        metadados: dict | None = None,
    ) -> int:
        consulta = Consulta(
            user_id=user_id,
            module_id=module_id,
            documento=documento,
            status="completed",
            custo=custo,
            saldo_usado=saldo_usado,
            resultado=resultado or {},
            metadados=metadados or {},
        )
        try:
            self.db.add(consulta)
            self.db.commit()
            self.db.refresh(consulta)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Falha ao registrar consulta do documento %s", documento)
            raise CobrancaError("Pedido criado, mas houve erro ao registrar a consulta.") from exc
        return consulta.id
