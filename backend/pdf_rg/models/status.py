from __future__ import annotations

from enum import IntEnum

from pdf_rg.core.errors import ValidacaoError


class StatusPedido(IntEnum):
    """Ciclo de vida de um pedido PDF RG, gravado na coluna inteira ``status``."""

    REALIZADO = 1
    PAGAMENTO_CONFIRMADO = 2
    EM_CONFECCAO = 3
    ENTREGUE = 4

    @property
    def chave(self) -> str:
        return self.name.lower()

    @property
    def rotulo(self) -> str:
        return ROTULOS[self]

    @property
    def terminal(self) -> bool:
        return self is StatusPedido.ENTREGUE

    @classmethod
    def inicial(cls) -> "StatusPedido":
        return cls.REALIZADO

    @classmethod
    def parse(cls, valor) -> "StatusPedido":
        """Aceita 4, "4" ou "entregue"; qualquer outra coisa é ValidacaoError."""
        if isinstance(valor, cls):
            return valor
        if isinstance(valor, bool):
            raise ValidacaoError(f"Status inválido: {valor!r}")
        if isinstance(valor, int):
            try:
                return cls(valor)
            except ValueError:
                raise ValidacaoError(f"Status inválido: {valor!r}")
        if isinstance(valor, str):
            texto = valor.strip().lower()
            if texto.isdigit():
                return cls.parse(int(texto))
            for membro in cls:
                if membro.chave == texto:
                    return membro
        raise ValidacaoError(f"Status inválido: {valor!r}")


ROTULOS = {
    StatusPedido.REALIZADO: "Pedido Realizado",
    StatusPedido.PAGAMENTO_CONFIRMADO: "Pagamento Confirmado",
    StatusPedido.EM_CONFECCAO: "Em Confecção",
    StatusPedido.ENTREGUE: "Entregue",
}
