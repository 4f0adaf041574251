from decimal import Decimal

import pytest

from pdf_rg.core.errors import CobrancaError
from pdf_rg.models.transaction import Transaction
from pdf_rg.models.wallet import Wallet
from pdf_rg.services.carteira import CarteiraService, dividir_cobranca
from pdf_rg.services.precos import TabelaPrecos, aplicar_desconto


@pytest.mark.parametrize(
    "plano, carteira, valor, fonte, debito_plano, debito_carteira",
    [
        ("50", "0", "40", "plano", "40", "0"),
        ("40", "0", "40", "plano", "40", "0"),
        ("15", "30", "40", "misto", "15", "25"),
        ("0", "100", "40", "carteira", "0", "40"),
        ("-5", "100", "40", "carteira", "0", "40"),
        ("10", "5", "40", "carteira", "0", "40"),
    ],
)
def test_dividir_cobranca(plano, carteira, valor, fonte, debito_plano, debito_carteira):
    d = dividir_cobranca(Decimal(plano), Decimal(carteira), Decimal(valor))
    assert d.saldo_usado == fonte
    assert d.debito_plano == Decimal(debito_plano)
    assert d.debito_carteira == Decimal(debito_carteira)
    assert d.total == Decimal(valor)


def test_saldos_sem_carteira(db):
    s = CarteiraService(db).saldos(12345)
    assert s.total == 0
    assert s.desconto == 0
    assert CarteiraService(db).saldos(None).total == 0


def test_desconto_so_com_plano(db, criar_usuario):
    sem_plano = criar_usuario(saldo="10", desconto="20")
    com_plano = criar_usuario(saldo="10", plano_nome="Pro", desconto="20")
    svc = CarteiraService(db)
    assert svc.saldos(sem_plano.id).desconto == 0
    assert svc.saldos(com_plano.id).desconto == Decimal("20")


def test_reservar_misto_registra_lancamentos(db, criar_usuario):
    u = criar_usuario(saldo="30", saldo_plano="15")
    d = CarteiraService(db).reservar(u.id, Decimal("40"), "Pedido PDF RG - CPF 1")
    assert d.saldo_usado == "misto"

    w = db.query(Wallet).filter_by(user_id=u.id).one()
    assert w.saldo_plano == Decimal("0")
    assert w.saldo_atual == Decimal("5")

    lancamentos = {t.origem: t for t in db.query(Transaction).filter_by(wallet_id=w.id)}
    assert set(lancamentos) == {"plano", "carteira"}
    assert lancamentos["plano"].valor == Decimal("15")
    assert lancamentos["carteira"].valor == Decimal("25")
    assert all(t.tipo == "DEBITO" for t in lancamentos.values())


def test_reservar_sem_carteira(db):
    svc = CarteiraService(db)
    with pytest.raises(CobrancaError):
        svc.reservar(999, Decimal("10"), "x")
    with pytest.raises(CobrancaError):
        svc.reservar(None, Decimal("10"), "x")
    assert db.query(Transaction).count() == 0


def test_aplicar_desconto_arredonda_centavos():
    assert aplicar_desconto(Decimal("30.00"), Decimal("15")) == Decimal("25.50")
    assert aplicar_desconto(Decimal("10.00"), Decimal("33.333")) == Decimal("6.67")
    assert aplicar_desconto(Decimal("10.00"), Decimal("150")) == Decimal("0.00")


def test_tabela_precos():
    tabela = TabelaPrecos(preco_modulo=Decimal("30"), precos_qr={"1m": Decimal("10"), "3m": Decimal("20")})
    cot = tabela.calcular("3m", Decimal("10"))
    assert cot.preco_original == Decimal("50")
    assert cot.total == Decimal("45.00")


def test_reservar_so_carteira_sem_saldo_de_plano(db, criar_usuario):
    u = criar_usuario(saldo="100", saldo_plano="0")
    d = CarteiraService(db).reservar(u.id, Decimal("40"), "x")
    assert d.saldo_usado == "carteira"

    w = db.query(Wallet).filter_by(user_id=u.id).one()
    lancamentos = db.query(Transaction).filter_by(wallet_id=w.id).all()
    assert [(t.origem, t.valor) for t in lancamentos] == [("carteira", Decimal("40"))]
