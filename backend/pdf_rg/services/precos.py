# pdf_rg/services/precos.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from pdf_rg.core.config import Settings, settings as default_settings
from pdf_rg.core.errors import ValidacaoError

CENTAVOS = Decimal("0.01")
CEM = Decimal("100")


def aplicar_desconto(valor: Decimal, percentual: Decimal) -> Decimal:
    percentual = min(max(Decimal(percentual), Decimal("0")), CEM)
    return (Decimal(valor) * (CEM - percentual) / CEM).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Cotacao:
    qr_plan: str
    preco_modulo: Decimal
    preco_qr: Decimal
    desconto: Decimal
    preco_modulo_final: Decimal
    preco_qr_final: Decimal

    @property
    def preco_original(self) -> Decimal:
        return self.preco_modulo + self.preco_qr

    @property
    def total(self) -> Decimal:
        return self.preco_modulo_final + self.preco_qr_final


@dataclass(frozen=True)
class TabelaPrecos:
    preco_modulo: Decimal
    precos_qr: Mapping[str, Decimal]

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "TabelaPrecos":
        s = s or default_settings
        return cls(
            preco_modulo=Decimal(s.PRECO_PDF_RG),
            precos_qr={
                "1m": Decimal(s.PRECO_QR_1M),
                "3m": Decimal(s.PRECO_QR_3M),
                "6m": Decimal(s.PRECO_QR_6M),
            },
        )

    def calcular(self, qr_plan: str, desconto: Decimal = Decimal("0")) -> Cotacao:
        if qr_plan not in self.precos_qr:
            raise ValidacaoError(f"Plano de QR Code inválido: {qr_plan!r}")
        preco_qr = self.precos_qr[qr_plan]
        return Cotacao(
            qr_plan=qr_plan,
            preco_modulo=self.preco_modulo,
            preco_qr=preco_qr,
            desconto=Decimal(desconto),
            preco_modulo_final=aplicar_desconto(self.preco_modulo, desconto),
            preco_qr_final=aplicar_desconto(preco_qr, desconto),
        )
