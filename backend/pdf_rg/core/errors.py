"""Erros de domínio do módulo PDF RG.

As rotas traduzem estas exceções em ``HTTPException``. ``CobrancaError`` e
``NotificacaoError`` nunca chegam ao cliente como erro: o workflow as converte
em avisos no resultado da operação.
"""


class PdfRgError(Exception):
    mensagem_padrao = "Erro ao processar pedido. Tente novamente."

    def __init__(self, mensagem: str | None = None):
        super().__init__(mensagem or self.mensagem_padrao)
        self.mensagem = mensagem or self.mensagem_padrao


class ValidacaoError(PdfRgError):
    mensagem_padrao = "Dados inválidos"


class SaldoInsuficienteError(ValidacaoError):
    mensagem_padrao = "Saldo insuficiente"


class PedidoNaoEncontradoError(PdfRgError):
    mensagem_padrao = "Pedido não encontrado"


class PersistenciaError(PdfRgError):
    pass


class CobrancaError(PdfRgError):
    mensagem_padrao = "Pedido criado, mas houve erro ao registrar a cobrança."


class NotificacaoError(PdfRgError):
    mensagem_padrao = "Não foi possível notificar o usuário."
