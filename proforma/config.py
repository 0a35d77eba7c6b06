from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROFORMA_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Input surfaces disagree on the hold period cap (10 vs 30 years),
    # so the cap is a setting rather than a constant.
    max_hold_period_years: int = 30

    # Cached loan amount is only replaced when the re-sized value moves by
    # more than this many dollars.
    loan_update_threshold: Decimal = Decimal("1")

    # Rent growth assumed for the year after the hold when the schedule has
    # only one year to extrapolate from.
    default_exit_growth_rate: Decimal = Decimal("0.03")

    # IRR root bracket (annual rate)
    irr_lower_bound: float = -0.99
    irr_upper_bound: float = 10.0


settings = Settings()
