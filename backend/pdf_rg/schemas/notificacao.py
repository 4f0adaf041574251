from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificacaoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    titulo: str
    mensagem: str
    prioridade: str
    lida: bool
    criado_em: datetime
