from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "HOMEBUYER_"}

    # App
    log_level: str = "INFO"

    # Export
    export_dir: str = "."
    spreadsheet_filename: str = "mortgage_spreadsheet.csv"
    summary_filename: str = "mortgage_analysis.csv"

    # Projection
    max_months: int = 360
    page_stride: int = 10
    max_loan_term_years: int = 100
    pmi_threshold: Decimal = Decimal("0.20")  # Down-payment fraction at which PMI stops applying

    # Wizard defaults (text as typed, percentages in whole percent)
    default_house_value: str = ""
    default_down_payment_percent: str = "20"
    default_hoa_fee: str = "0"
    default_interest_rate: str = "6.5"
    default_property_tax_percent: str = "2"
    default_insurance_percent: str = "0.35"
    default_maintenance_percent: str = "1"
    default_pmi_percent: str = "0.5"
    default_appreciation_rate: str = "3"
    default_loan_term_years: str = "30"
    default_extra_principal: str = "0"


settings = Settings()
