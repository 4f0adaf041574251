# pdf_rg/api/deps.py
from dataclasses import dataclass

import jwt  # PyJWT
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pdf_rg.core.security import ROLE_ADMIN, decode_token
from pdf_rg.database.session import get_db
from pdf_rg.services.workflow import PedidoWorkflow

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class UsuarioAtual:
    id: int
    admin: bool = False


def get_usuario_atual(cred: HTTPAuthorizationCredentials | None = Depends(bearer)) -> UsuarioAtual:
    if cred is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token ausente")
    try:
        data = decode_token(cred.credentials)
        uid = int(data.get("sub"))
    except (jwt.PyJWTError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")
    return UsuarioAtual(id=uid, admin=data.get("role") == ROLE_ADMIN)


def exigir_admin(usuario: UsuarioAtual = Depends(get_usuario_atual)) -> UsuarioAtual:
    if not usuario.admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso restrito a administradores")
    return usuario


def get_workflow(db: Session = Depends(get_db)) -> PedidoWorkflow:
    return PedidoWorkflow(db)
