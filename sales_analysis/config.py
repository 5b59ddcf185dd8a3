"""
Analysis settings, overridable through ``SALES_ANALYSIS_*`` environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SALES_ANALYSIS_")

    # how many best-selling skus each report row keeps
    top_products_limit: int = Field(default=10, ge=1)
    # decimal places for revenue, profit and bonus
    money_places: int = Field(default=2, ge=0)


@lru_cache()
def get_settings() -> AnalysisSettings:
    return AnalysisSettings()
