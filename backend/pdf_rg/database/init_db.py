# pdf_rg/database/init_db.py
from sqlalchemy.engine import Engine

from pdf_rg.database.session import engine as default_engine
from pdf_rg.db.base import Base


def registrar_modelos() -> None:
    # Importa as models para registrar no metadata antes do create_all
    from pdf_rg.models.user import User                  # noqa: F401
    from pdf_rg.models.wallet import Wallet              # noqa: F401
    from pdf_rg.models.transaction import Transaction    # noqa: F401
    from pdf_rg.models.pedido import PdfRgPedido         # noqa: F401
    from pdf_rg.models.consulta import Consulta          # noqa: F401
    from pdf_rg.models.notificacao import Notificacao    # noqa: F401


def init_db(engine: Engine | None = None) -> None:
    registrar_modelos()
    Base.metadata.create_all(bind=engine or default_engine)
