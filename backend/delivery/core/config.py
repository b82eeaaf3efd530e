import os
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    mongo_url: str
    mongo_db: str = "delivery"
    mongo_tls: bool = False

    jwt_secret: str
    jwt_alg: str = "HS256"
    jwt_expire_min: int = 60

    # per completed order / per online minute / per km
    payment_per_order: Decimal = Decimal("10")
    payment_per_minute: Decimal = Decimal("0.05")
    payment_per_km: Decimal = Decimal("0.20")

    cors_origin_regex: str = r"^http://(localhost|127\.0\.0\.1)(:\d+)?$"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        load_dotenv(env_file)

        mongo_url = os.getenv("MONGO_URL")
        if not mongo_url:
            raise RuntimeError("MONGO_URL not set. Create backend/.env with MONGO_URL=...")

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            raise RuntimeError("JWT_SECRET not set")

        tls = os.getenv("MONGO_TLS")
        if tls is None:
            mongo_tls = mongo_url.startswith("mongodb+srv://")
        else:
            mongo_tls = tls.lower() in ("1", "true", "yes")

        return cls(
            mongo_url=mongo_url,
            mongo_db=os.getenv("MONGO_DB", "delivery"),
            mongo_tls=mongo_tls,
            jwt_secret=jwt_secret,
            jwt_expire_min=int(os.getenv("JWT_EXPIRE_MIN", "60")),
            payment_per_order=Decimal(os.getenv("PAYMENT_PER_ORDER", "10")),
            payment_per_minute=Decimal(os.getenv("PAYMENT_PER_MINUTE", "0.05")),
            payment_per_km=Decimal(os.getenv("PAYMENT_PER_KM", "0.20")),
            cors_origin_regex=os.getenv("CORS_ORIGIN_REGEX", cls.model_fields["cors_origin_regex"].default),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
        )
