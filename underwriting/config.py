from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "UNDERWRITING_"}

    # Holding-period defaults, used when a deal leaves them unset
    appreciation_rate: Decimal = Decimal("3")
    rent_growth_rate: Decimal = Decimal("2")
    expense_growth_rate: Decimal = Decimal("2")
    selling_cost_rate: Decimal = Decimal("6")

    # Primary residence: market rent estimate as a monthly % of purchase price
    market_rent_to_price_pct: Decimal = Decimal("0.5")

    # App
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


settings = Settings()
