from pydantic import BaseModel
import os


def _lista(valor: str) -> list[str]:
    return [v.strip() for v in valor.split(",") if v.strip()]


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    CORS_ORIGINS: list[str] = _lista(
        os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )

    # Preços em reais (string para não perder centavos no Decimal)
    PDF_RG_MODULE_ID: int = int(os.getenv("PDF_RG_MODULE_ID", "0"))
    PRECO_PDF_RG: str = os.getenv("PRECO_PDF_RG", "30.00")
    PRECO_QR_1M: str = os.getenv("PRECO_QR_1M", "10.00")
    PRECO_QR_3M: str = os.getenv("PRECO_QR_3M", "20.00")
    PRECO_QR_6M: str = os.getenv("PRECO_QR_6M", "30.00")

    MAX_IMAGEM_MB: int = int(os.getenv("MAX_IMAGEM_MB", "10"))
    MAX_ANEXO_MB: int = int(os.getenv("MAX_ANEXO_MB", "15"))
    MAX_PDF_MB: int = int(os.getenv("MAX_PDF_MB", "20"))


settings = Settings()
