# pdf_rg/api/v1/routes/pdf_rg.py
from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from pdf_rg.api.deps import UsuarioAtual, exigir_admin, get_usuario_atual, get_workflow
from pdf_rg.core.config import settings
from pdf_rg.core.errors import (
    PedidoNaoEncontradoError,
    PersistenciaError,
    ValidacaoError,
)
from pdf_rg.database.session import get_db
from pdf_rg.models.status import StatusPedido
from pdf_rg.schemas.pedido import (
    CotacaoOut,
    CriacaoOut,
    ListaPedidosOut,
    PedidoIn,
    PedidoOut,
    QrPlan,
    ResumoOut,
    StatusOut,
)
from pdf_rg.services.pedido_store import PdfRgStore
from pdf_rg.services.workflow import ArquivoEntrega, PedidoWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf-rg")


def _parse_status(valor: str | None) -> StatusPedido | None:
    if valor is None or valor.strip() == "" or valor == "all":
        return None
    try:
        return StatusPedido.parse(valor)
    except ValidacaoError as e:
        raise HTTPException(status_code=400, detail=e.mensagem)


def _pedido_visivel(db: Session, pedido_id: int, usuario: UsuarioAtual) -> dict:
    pedido = PdfRgStore(db).obter_pedido(pedido_id)
    # dono ou admin; para os outros o pedido "não existe"
    if pedido is None or (not usuario.admin and pedido.get("user_id") != usuario.id):
        raise HTTPException(status_code=404, detail="Pedido não encontrado")
    return pedido


def _decodificar(data_url: str) -> bytes:
    corpo = data_url.split(",", 1)[1] if data_url.startswith("data:") else data_url
    return base64.b64decode(corpo, validate=True)


# ========= cotação =========
@router.get("/cotacao", response_model=CotacaoOut)
def cotacao(
    qr_plan: QrPlan = Query("1m"),
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    wf: PedidoWorkflow = Depends(get_workflow),
):
    cot, saldos = wf.cotar(usuario.id, qr_plan)
    return {
        "qr_plan": cot.qr_plan,
        "preco_modulo": float(cot.preco_modulo_final),
        "preco_qr": float(cot.preco_qr_final),
        "preco_original": float(cot.preco_original),
        "desconto": float(cot.desconto),
        "total": float(cot.total),
        "saldo_plano": float(saldos.plano),
        "saldo_carteira": float(saldos.carteira),
        "saldo_suficiente": saldos.total >= cot.total,
    }


# ========= criação =========
@router.post("/pedidos", response_model=CriacaoOut, status_code=status.HTTP_201_CREATED)
def criar_pedido(
    body: PedidoIn,
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    wf: PedidoWorkflow = Depends(get_workflow),
):
    try:
        res = wf.criar_pedido(usuario.id, body.model_dump())
    except ValidacaoError as e:
        raise HTTPException(status_code=400, detail=e.mensagem)
    except PersistenciaError as e:
        raise HTTPException(status_code=500, detail=e.mensagem)
    return {"id": res.pedido_id, "avisos": res.avisos}


# ========= listagem (paginada) =========
@router.get("/pedidos", response_model=ListaPedidosOut)
def listar_pedidos(
    response: Response,
    user_id: int | None = Query(None),
    status_: str | None = Query(None, alias="status"),
    search: str | None = Query(None),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    db: Session = Depends(get_db),
):
    if not usuario.admin:
        user_id = usuario.id
    st = _parse_status(status_)

    store = PdfRgStore(db)
    total = store.contar_pedidos(user_id=user_id, status=st, search=search)
    rows = store.listar_pedidos(user_id=user_id, status=st, limit=limit, offset=offset, search=search)

    total_pages = max(1, (total + limit - 1) // limit)
    response.headers["X-Total"] = str(total)
    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Total-Pages"] = str(total_pages)
    response.headers["X-Page-Size"] = str(limit)
    response.headers["X-Offset"] = str(offset)

    return {"data": rows, "pagination": {"total": total, "limit": limit, "offset": offset}}


@router.get("/pedidos/resumo", response_model=ResumoOut)
def resumo_pedidos(
    _admin: UsuarioAtual = Depends(exigir_admin),
    db: Session = Depends(get_db),
):
    store = PdfRgStore(db)
    total = store.contar_pedidos()
    concluidos = store.contar_pedidos(status=StatusPedido.ENTREGUE)
    return {"pendentes": total - concluidos, "concluidos": concluidos}


# ========= detalhe =========
@router.get("/pedidos/{pedido_id}", response_model=PedidoOut)
def obter_pedido(
    pedido_id: int,
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    db: Session = Depends(get_db),
):
    return _pedido_visivel(db, pedido_id, usuario)


@router.get("/pedidos/{pedido_id}/pdf")
def baixar_pdf(
    pedido_id: int,
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    db: Session = Depends(get_db),
):
    pedido = _pedido_visivel(db, pedido_id, usuario)
    # o dono só baixa depois da entrega
    liberado = usuario.admin or pedido.get("status") == StatusPedido.ENTREGUE
    if not liberado or not pedido.get("pdf_entrega_base64") or not pedido.get("pdf_entrega_nome"):
        raise HTTPException(status_code=404, detail="PDF ainda não disponível")
    try:
        conteudo = _decodificar(pedido["pdf_entrega_base64"])
    except (binascii.Error, ValueError):
        logger.error("PDF do pedido %s está corrompido", pedido_id)
        raise HTTPException(status_code=500, detail="PDF corrompido")
    nome = pedido["pdf_entrega_nome"]
    return Response(
        content=conteudo,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{nome}"'},
    )


# ========= admin =========
@router.patch("/pedidos/{pedido_id}/status", response_model=StatusOut)
def atualizar_status(
    pedido_id: int,
    novo_status: str = Form(..., alias="status"),
    pdf: UploadFile | None = File(None),
    _admin: UsuarioAtual = Depends(exigir_admin),
    wf: PedidoWorkflow = Depends(get_workflow),
):
    arquivo = None
    if pdf is not None and pdf.filename:
        arquivo = ArquivoEntrega(
            # um byte além do limite basta para a validação de tamanho
            conteudo=pdf.file.read(settings.MAX_PDF_MB * 1024 * 1024 + 1),
            content_type=pdf.content_type,
            nome_original=pdf.filename,
        )
    try:
        res = wf.atualizar_status(pedido_id, novo_status, arquivo)
    except PedidoNaoEncontradoError as e:
        raise HTTPException(status_code=404, detail=e.mensagem)
    except ValidacaoError as e:
        raise HTTPException(status_code=400, detail=e.mensagem)
    except PersistenciaError as e:
        raise HTTPException(status_code=500, detail=e.mensagem)
    return {"pedido": res.pedido, "avisos": res.avisos}


@router.delete("/pedidos/{pedido_id}")
def deletar_pedido(
    pedido_id: int,
    _admin: UsuarioAtual = Depends(exigir_admin),
    db: Session = Depends(get_db),
):
    store = PdfRgStore(db)
    if store.obter_pedido(pedido_id) is None:
        raise HTTPException(status_code=404, detail="Pedido não encontrado")
    if not store.deletar_pedido(pedido_id):
        raise HTTPException(status_code=500, detail="Erro ao excluir pedido")
    return {"ok": True}
