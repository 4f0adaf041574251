# pdf_rg/services/workflow.py
"""Orquestra os efeitos em volta do store de pedidos.

Criação: valida saldo -> grava pedido -> cobra (best-effort).
Status (admin): exige o PDF antes de "Entregue" -> grava -> notifica (best-effort).

Falhas depois que o pedido já existe não desfazem nada: viram avisos no
``ResultadoOperacao``.
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from sqlalchemy.orm import Session

from pdf_rg.core.config import settings
from pdf_rg.core.errors import (
    CobrancaError,
    NotificacaoError,
    PedidoNaoEncontradoError,
    PersistenciaError,
    SaldoInsuficienteError,
    ValidacaoError,
)
from pdf_rg.models.pedido import QR_PLAN_PADRAO
from pdf_rg.models.status import StatusPedido
from pdf_rg.services.carteira import CarteiraService
from pdf_rg.services.consultas import ConsultaService
from pdf_rg.services.notificacoes import NotificacaoService
from pdf_rg.services.pedido_store import DocumentoEntrega, PdfRgStore, somente_digitos
from pdf_rg.services.precos import TabelaPrecos

logger = logging.getLogger(__name__)

MODULE_TITLE = "PDF RG"
MODULE_ROUTE = "/dashboard/pdf-rg"
PDF_MIME = "application/pdf"


@dataclass
class ResultadoOperacao:
    pedido_id: int
    avisos: list[str] = field(default_factory=list)
    pedido: dict | None = None


@dataclass(frozen=True)
class ArquivoEntrega:
    conteudo: bytes
    content_type: str | None = None
    nome_original: str | None = None


def _agora() -> datetime:
    return datetime.now(timezone.utc)


def codificar_pdf(arquivo: ArquivoEntrega) -> str:
    if not arquivo.conteudo:
        raise ValidacaoError("Arquivo PDF vazio")
    limite = settings.MAX_PDF_MB * 1024 * 1024
    if len(arquivo.conteudo) > limite:
        raise ValidacaoError(f"PDF muito grande (máx {settings.MAX_PDF_MB}MB)")
    if arquivo.content_type != PDF_MIME and not arquivo.conteudo.startswith(b"%PDF"):
        raise ValidacaoError("O documento de entrega deve ser um PDF")
    return f"data:{PDF_MIME};base64," + base64.b64encode(arquivo.conteudo).decode("ascii")


def nome_documento(user_id: int | None, cpf: str, quando: datetime) -> str:
    return f"pdf_rg_{user_id if user_id is not None else 'anon'}_{cpf}_{quando:%Y%m%d%H%M%S}.pdf"


def tem_documento(pedido: Mapping[str, Any]) -> bool:
    return bool(pedido.get("pdf_entrega_base64")) and bool(pedido.get("pdf_entrega_nome"))


class PedidoWorkflow:
    def __init__(
        self,
        db: Session,
        *,
        store: PdfRgStore | None = None,
        carteira: CarteiraService | None = None,
        consultas: ConsultaService | None = None,
        notificacoes: NotificacaoService | None = None,
        precos: TabelaPrecos | None = None,
        relogio: Callable[[], datetime] = _agora,
    ):
        self.store = store or PdfRgStore(db)
        self.carteira = carteira or CarteiraService(db)
        self.consultas = consultas or ConsultaService(db)
        self.notificacoes = notificacoes or NotificacaoService(db)
        self.precos = precos or TabelaPrecos.from_settings()
        self.relogio = relogio

    # ------------------------------------------------------------------ criação
    def cotar(self, user_id: int | None, qr_plan: str = QR_PLAN_PADRAO):
        saldos = self.carteira.saldos(user_id)
        return self.precos.calcular(qr_plan, saldos.desconto), saldos

    def criar_pedido(self, user_id: int | None, dados: Mapping[str, Any]) -> ResultadoOperacao:
        cpf = somente_digitos(dados.get("cpf"))
        if not cpf:
            raise ValidacaoError("CPF é obrigatório")

        cotacao, saldos = self.cotar(user_id, dados.get("qr_plan") or QR_PLAN_PADRAO)
        total = cotacao.total
        if total > saldos.total:
            raise SaldoInsuficienteError(f"Saldo insuficiente. Necessário: R$ {total:.2f}")

        payload = dict(dados)
        payload.update(
            user_id=user_id,
            module_id=settings.PDF_RG_MODULE_ID,
            qr_plan=cotacao.qr_plan,
            preco_pago=total,
            desconto_aplicado=cotacao.desconto,
        )
        payload.pop("status", None)
        pedido_id = self.store.criar_pedido(payload)

        resultado = ResultadoOperacao(pedido_id=pedido_id)
        try:
            self._cobrar(user_id, cpf, total, pedido_id)
        except CobrancaError as exc:
            logger.error("Erro ao registrar cobrança do pedido %s: %s", pedido_id, exc)
            resultado.avisos.append(CobrancaError.mensagem_padrao)
        return resultado

    def _cobrar(self, user_id, cpf, total, pedido_id) -> None:
        divisao = self.carteira.reservar(user_id, total, f"Pedido PDF RG - CPF {cpf}")
        module_id = settings.PDF_RG_MODULE_ID
        self.consultas.registrar(
            documento=cpf,
            custo=total,
            saldo_usado=divisao.saldo_usado,
            module_id=module_id,
            user_id=user_id,
            resultado={"pedido_id": pedido_id},
            metadados={
                "page_route": MODULE_ROUTE,
                "module_name": MODULE_TITLE,
                "module_id": module_id,
                "saldo_usado": divisao.saldo_usado,
                "source": "pdf-rg",
                "timestamp": self.relogio().isoformat(),
            },
        )

    # ------------------------------------------------------------------ status
    def atualizar_status(
        self,
        pedido_id: int,
        novo_status,
        arquivo: ArquivoEntrega | None = None,
    ) -> ResultadoOperacao:
        status = StatusPedido.parse(novo_status)
        pedido = self.store.obter_pedido(pedido_id)
        if pedido is None:
            raise PedidoNaoEncontradoError()

        documento = None
        if arquivo is not None:
            if not status.terminal:
                raise ValidacaoError("O PDF do RG só pode ser anexado ao marcar o pedido como entregue")
            documento = DocumentoEntrega(
                pdf_entrega_base64=codificar_pdf(arquivo),
                pdf_entrega_nome=nome_documento(pedido.get("user_id"), pedido["cpf"], self.relogio()),
            )

        if status.terminal and documento is None and not tem_documento(pedido):
            raise ValidacaoError("Anexe o PDF do RG antes de marcar o pedido como entregue")

        if not self.store.atualizar_status(pedido_id, status, documento):
            raise PersistenciaError("Erro ao atualizar status")
        if arquivo is not None:
            logger.info(
                "Pedido %s -> %s (PDF %s, %d bytes)",
                pedido_id, status.rotulo, arquivo.nome_original or "sem nome", len(arquivo.conteudo),
            )
        else:
            logger.info("Pedido %s -> %s", pedido_id, status.rotulo)

        resultado = ResultadoOperacao(pedido_id=pedido_id)
        user_id = pedido.get("user_id")
        if user_id is not None:
            try:
                self.notificacoes.notificar(
                    user_id,
                    "Pedido PDF RG atualizado",
                    f"Seu pedido #{pedido_id} agora está: {status.rotulo}",
                    "alta" if status.terminal else "media",
                )
            except NotificacaoError as exc:
                logger.warning("Falha ao notificar usuário %s do pedido %s: %s", user_id, pedido_id, exc)
                resultado.avisos.append(NotificacaoError.mensagem_padrao)

        resultado.pedido = self.store.obter_pedido(pedido_id)
        return resultado
