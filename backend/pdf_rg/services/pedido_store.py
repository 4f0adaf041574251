# pdf_rg/services/pedido_store.py
"""Persistência dos pedidos PDF RG.

Só traduz entre o payload do cliente e as linhas de ``pdf_rg_pedidos``;
cobrança, notificação e regras de status ficam no workflow.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdf_rg.core.errors import PersistenciaError, ValidacaoError
from pdf_rg.models.pedido import QR_PLAN_PADRAO, PdfRgPedido
from pdf_rg.models.status import StatusPedido

logger = logging.getLogger(__name__)

_NAO_DIGITO = re.compile(r"\D")

CAMPOS_TEXTO = (
    "nome",
    "dt_nascimento",
    "naturalidade",
    "filiacao_mae",
    "filiacao_pai",
    "diretor",
)
CAMPOS_ARQUIVO = (
    "assinatura_base64",
    "foto_base64",
    "anexo1_base64",
    "anexo1_nome",
    "anexo2_base64",
    "anexo2_nome",
    "anexo3_base64",
    "anexo3_nome",
)

# Projeção da listagem: sem os campos base64 (pesados)
COLUNAS_LISTAGEM = (
    PdfRgPedido.id,
    PdfRgPedido.module_id,
    PdfRgPedido.user_id,
    PdfRgPedido.cpf,
    PdfRgPedido.nome,
    PdfRgPedido.dt_nascimento,
    PdfRgPedido.naturalidade,
    PdfRgPedido.filiacao_mae,
    PdfRgPedido.filiacao_pai,
    PdfRgPedido.diretor,
    PdfRgPedido.qr_plan,
    PdfRgPedido.status,
    PdfRgPedido.preco_pago,
    PdfRgPedido.desconto_aplicado,
    PdfRgPedido.anexo1_nome,
    PdfRgPedido.anexo2_nome,
    PdfRgPedido.anexo3_nome,
    PdfRgPedido.pdf_entrega_nome,
    PdfRgPedido.created_at,
    PdfRgPedido.updated_at,
)

NUMERICOS = ("preco_pago", "desconto_aplicado")


@dataclass(frozen=True)
class DocumentoEntrega:
    """Campos opcionais gravados junto com a mudança de status."""

    pdf_entrega_base64: str | None = None
    pdf_entrega_nome: str | None = None


def somente_digitos(valor: Any) -> str:
    if valor is None:
        return ""
    return _NAO_DIGITO.sub("", str(valor))


def _agora() -> datetime:
    return datetime.now(timezone.utc)


def _texto(valor: Any) -> str | None:
    if valor is None:
        return None
    texto = str(valor).strip()
    return texto or None


def _to_int(valor: Any, fallback: int | None) -> int | None:
    if valor is None or valor == "":
        return fallback
    try:
        return int(Decimal(str(valor).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return fallback


def _to_decimal(valor: Any) -> Decimal:
    if valor is None or valor == "":
        return Decimal("0")
    try:
        numero = Decimal(str(valor).strip())
    except InvalidOperation:
        return Decimal("0")
    return numero if numero.is_finite() else Decimal("0")


def _status_inicial(valor: Any) -> int:
    if valor is None or valor == "":
        return int(StatusPedido.inicial())
    try:
        return int(StatusPedido.parse(valor))
    except ValidacaoError:
        return int(StatusPedido.inicial())


def _linha(mapping: Mapping[str, Any]) -> dict:
    out = dict(mapping)
    for campo in NUMERICOS:
        if campo in out and out[campo] is not None:
            out[campo] = float(out[campo])
    return out


def pedido_para_dict(pedido: PdfRgPedido) -> dict:
    return _linha({c.key: getattr(pedido, c.key) for c in PdfRgPedido.__table__.columns})


class PdfRgStore:
    def __init__(self, db: Session):
        self.db = db

    # ---------- escrita ----------
    def criar_pedido(self, dados: Mapping[str, Any]) -> int:
        """Grava um novo pedido e devolve o id.

        ``ValidacaoError`` se o CPF ficar vazio depois de normalizado;
        ``PersistenciaError`` se o banco falhar.
        """
        cpf = somente_digitos(dados.get("cpf"))
        if cpf == "":
            raise ValidacaoError("CPF é obrigatório")

        agora = _agora()
        payload: dict[str, Any] = {
            "module_id": _to_int(dados.get("module_id"), 0),
            "user_id": _to_int(dados.get("user_id"), None),
            "cpf": cpf,
            "qr_plan": _texto(dados.get("qr_plan")) or QR_PLAN_PADRAO,
            "status": _status_inicial(dados.get("status")),
            "preco_pago": _to_decimal(dados.get("preco_pago")),
            "desconto_aplicado": _to_decimal(dados.get("desconto_aplicado")),
            "created_at": agora,
            "updated_at": agora,
        }
        for campo in CAMPOS_TEXTO:
            payload[campo] = _texto(dados.get(campo))
        for campo in CAMPOS_ARQUIVO:
            payload[campo] = dados.get(campo)

        payload = {k: (None if v == "" else v) for k, v in payload.items()}

        pedido = PdfRgPedido(**payload)
        try:
            self.db.add(pedido)
            self.db.commit()
            self.db.refresh(pedido)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Erro ao gravar pedido PDF RG (cpf=%s)", cpf)
            raise PersistenciaError("Erro ao criar pedido. Tente novamente.") from exc
        logger.info("Pedido PDF RG %s criado (user_id=%s)", pedido.id, pedido.user_id)
        return pedido.id

    def atualizar_status(
        self,
        pedido_id: int,
        status: StatusPedido | int,
        extra: DocumentoEntrega | None = None,
    ) -> bool:
        pedido = self.db.get(PdfRgPedido, pedido_id)
        if pedido is None:
            return False

        pedido.status = int(status)
        pedido.updated_at = _agora()
        if extra is not None:
            if extra.pdf_entrega_base64 is not None:
                pedido.pdf_entrega_base64 = extra.pdf_entrega_base64
            if extra.pdf_entrega_nome is not None:
                pedido.pdf_entrega_nome = extra.pdf_entrega_nome
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro ao atualizar status do pedido %s", pedido_id)
            return False
        return True

    def deletar_pedido(self, pedido_id: int) -> bool:
        pedido = self.db.get(PdfRgPedido, pedido_id)
        if pedido is None:
            return False
        try:
            self.db.delete(pedido)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro ao excluir pedido %s", pedido_id)
            return False
        logger.info("Pedido PDF RG %s excluído", pedido_id)
        return True

    # ---------- leitura ----------
    def _filtros(self, user_id: int | None, status: int | None, search: str | None) -> list:
        conds = []
        if user_id is not None:
            conds.append(PdfRgPedido.user_id == user_id)
        if status is not None:
            conds.append(PdfRgPedido.status == int(status))

        termo = (search or "").strip()
        if termo:
            alternativas = [PdfRgPedido.nome.icontains(termo, autoescape=True)]
            digitos = somente_digitos(termo)
            if digitos:
                alternativas.append(PdfRgPedido.cpf.contains(digitos, autoescape=True))
            conds.append(or_(*alternativas))
        return conds

    def listar_pedidos(
        self,
        user_id: int | None = None,
        status: int | None = None,
        limit: int | None = 20,
        offset: int = 0,
        search: str | None = None,
    ) -> list[dict]:
        q = (
            self.db.query(*COLUNAS_LISTAGEM)
            .filter(*self._filtros(user_id, status, search))
            .order_by(PdfRgPedido.id.desc())
        )
        if offset:
            q = q.offset(offset)
        if limit is not None:
            q = q.limit(limit)
        return [_linha(row._mapping) for row in q.all()]

    def contar_pedidos(
        self,
        user_id: int | None = None,
        status: int | None = None,
        search: str | None = None,
    ) -> int:
        total = (
            self.db.query(func.count(PdfRgPedido.id))
            .filter(*self._filtros(user_id, status, search))
            .scalar()
        )
        return int(total or 0)

    def obter_pedido(self, pedido_id: int) -> dict | None:
        pedido = self.db.get(PdfRgPedido, pedido_id)
        if pedido is None:
            return None
        return pedido_para_dict(pedido)
