from pydantic import BaseModel


class CarteiraOut(BaseModel):
    saldo: float
    saldo_plano: float
    saldo_total: float
    plano_nome: str | None = None
    desconto_plano: float
