from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pdf_rg.api.deps import UsuarioAtual, get_usuario_atual
from pdf_rg.database.session import get_db
from pdf_rg.schemas.carteira import CarteiraOut
from pdf_rg.services.carteira import CarteiraService

router = APIRouter()

@router.get("/carteira", response_model=CarteiraOut)
def minha_carteira(
    usuario: UsuarioAtual = Depends(get_usuario_atual),
    db: Session = Depends(get_db),
):
    s = CarteiraService(db).saldos(usuario.id)
    return {
        "saldo": float(s.carteira),
        "saldo_plano": float(s.plano),
        "saldo_total": float(s.total),
        "plano_nome": s.plano_nome,
        "desconto_plano": float(s.desconto),
    }
