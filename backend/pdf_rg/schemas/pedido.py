from __future__ import annotations

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from pdf_rg.core.config import settings

IMAGENS = ("image/jpeg", "image/jpg", "image/png", "image/gif")
ANEXOS = IMAGENS + ("application/pdf",)

_DATA_URL = re.compile(r"^data:(?P<mime>[\w/+.-]+)?(;[\w=-]+)*;base64,", re.IGNORECASE)

QrPlan = Literal["1m", "3m", "6m"]


def _checar_arquivo(valor: str | None, rotulo: str, permitidos: tuple[str, ...], max_mb: int) -> str | None:
    if not valor:
        return valor
    corpo = valor
    m = _DATA_URL.match(valor)
    if m:
        mime = (m.group("mime") or "").lower()
        if mime not in permitidos:
            raise ValueError(f"Formato inválido para {rotulo}: {mime or 'desconhecido'}")
        corpo = valor[m.end():]
    # tamanho aproximado do arquivo decodificado
    if len(corpo) * 3 // 4 > max_mb * 1024 * 1024:
        raise ValueError(f"{rotulo} muito grande (máx {max_mb}MB)")
    return valor


class PedidoIn(BaseModel):
    # limites iguais aos das colunas de pdf_rg_pedidos
    cpf: str | None = Field(None, max_length=32)
    nome: str | None = Field(None, max_length=255)
    dt_nascimento: str | None = Field(None, max_length=20)
    naturalidade: str | None = Field(None, max_length=120)
    filiacao_mae: str | None = Field(None, max_length=255)
    filiacao_pai: str | None = Field(None, max_length=255)
    diretor: str | None = Field(None, max_length=60)

    assinatura_base64: str | None = None
    foto_base64: str | None = None
    anexo1_base64: str | None = None
    anexo1_nome: str | None = Field(None, max_length=255)
    anexo2_base64: str | None = None
    anexo2_nome: str | None = Field(None, max_length=255)
    anexo3_base64: str | None = None
    anexo3_nome: str | None = Field(None, max_length=255)

    qr_plan: QrPlan = "1m"

    @field_validator("foto_base64")
    @classmethod
    def _foto(cls, v):
        return _checar_arquivo(v, "Foto", IMAGENS, settings.MAX_IMAGEM_MB)

    @field_validator("assinatura_base64")
    @classmethod
    def _assinatura(cls, v):
        return _checar_arquivo(v, "Assinatura", IMAGENS, settings.MAX_IMAGEM_MB)

    @field_validator("anexo1_base64", "anexo2_base64", "anexo3_base64")
    @classmethod
    def _anexo(cls, v, info):
        return _checar_arquivo(v, info.field_name, ANEXOS, settings.MAX_ANEXO_MB)


class PedidoResumoOut(BaseModel):
    id: int
    module_id: int
    user_id: int | None = None
    cpf: str
    nome: str | None = None
    dt_nascimento: str | None = None
    naturalidade: str | None = None
    filiacao_mae: str | None = None
    filiacao_pai: str | None = None
    diretor: str | None = None
    qr_plan: str
    status: int
    preco_pago: float
    desconto_aplicado: float
    anexo1_nome: str | None = Field(None, max_length=255)
    anexo2_nome: str | None = Field(None, max_length=255)
    anexo3_nome: str | None = Field(None, max_length=255)
    pdf_entrega_nome: str | None = None
    created_at: datetime
    updated_at: datetime


class PedidoOut(PedidoResumoOut):
    assinatura_base64: str | None = None
    foto_base64: str | None = None
    anexo1_base64: str | None = None
    anexo2_base64: str | None = None
    anexo3_base64: str | None = None
    pdf_entrega_base64: str | None = None


class Paginacao(BaseModel):
    total: int
    limit: int
    offset: int


class ListaPedidosOut(BaseModel):
    data: list[PedidoResumoOut]
    pagination: Paginacao


class CriacaoOut(BaseModel):
    id: int
    avisos: list[str] = []


class StatusOut(BaseModel):
    pedido: PedidoOut
    avisos: list[str] = []


class ResumoOut(BaseModel):
    pendentes: int
    concluidos: int


class CotacaoOut(BaseModel):
    qr_plan: str
    preco_modulo: float
    preco_qr: float
    preco_original: float
    desconto: float
    total: float
    saldo_plano: float
    saldo_carteira: float
    saldo_suficiente: bool
