# pdf_rg/services/notificacoes.py
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdf_rg.core.errors import NotificacaoError
from pdf_rg.models.notificacao import Notificacao

logger = logging.getLogger(__name__)

PRIORIDADES = ("baixa", "media", "alta")


class NotificacaoService:
    def __init__(self, db: Session):
        self.db = db

    def notificar(self, user_id: int, titulo: str, mensagem: str, prioridade: str = "media") -> int:
        if prioridade not in PRIORIDADES:
            prioridade = "media"
        n = Notificacao(user_id=user_id, titulo=titulo, mensagem=mensagem, prioridade=prioridade)
        try:
            self.db.add(n)
            self.db.commit()
            self.db.refresh(n)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise NotificacaoError() from exc
        logger.info("Notificação %s enviada ao usuário %s", n.id, user_id)
        return n.id

    def listar(self, user_id: int, apenas_nao_lidas: bool = False, limit: int = 50) -> list[Notificacao]:
        q = self.db.query(Notificacao).filter(Notificacao.user_id == user_id)
        if apenas_nao_lidas:
            q = q.filter(Notificacao.lida.is_(False))
        return q.order_by(Notificacao.id.desc()).limit(limit).all()
