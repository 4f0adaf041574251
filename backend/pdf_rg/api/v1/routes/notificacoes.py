from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pdf_rg.api.deps import UsuarioAtual, get_usuario_atual
from pdf_rg.database.session import get_db
from pdf_rg.schemas.notificacao import NotificacaoOut
from pdf_rg.services.notificacoes import NotificacaoService

router = APIRouter()

@router.get("/notificacoes", response_model=list[NotificacaoOut])
def listar_notificacoes(
    nao_lidas: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    db: Session = Depends(get_db),
):
    return NotificacaoService(db).listar(usuario.id, apenas_nao_lidas=nao_lidas, limit=limit)
