import pytest

from pdf_rg.core.errors import ValidacaoError
from pdf_rg.models.status import StatusPedido


def test_inicial_e_terminal():
    assert StatusPedido.inicial() is StatusPedido.REALIZADO
    assert StatusPedido.ENTREGUE.terminal
    assert not any(s.terminal for s in StatusPedido if s is not StatusPedido.ENTREGUE)


@pytest.mark.parametrize(
    "valor, esperado",
    [
        (4, StatusPedido.ENTREGUE),
        ("2", StatusPedido.PAGAMENTO_CONFIRMADO),
        (" em_confeccao ", StatusPedido.EM_CONFECCAO),
        ("REALIZADO", StatusPedido.REALIZADO),
        (StatusPedido.ENTREGUE, StatusPedido.ENTREGUE),
    ],
)
def test_parse_aceita(valor, esperado):
    assert StatusPedido.parse(valor) is esperado


@pytest.mark.parametrize("valor", [0, 5, "9", "pendente", "", None, True, 2.0])
def test_parse_rejeita(valor):
    with pytest.raises(ValidacaoError):
        StatusPedido.parse(valor)


def test_rotulos():
    assert StatusPedido.EM_CONFECCAO.rotulo == "Em Confecção"
    assert StatusPedido.ENTREGUE.rotulo == "Entregue"
