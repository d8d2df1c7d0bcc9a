from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SUPERMIX_", extra="ignore")

    pix_key: str = ""
    pix_merchant_name: str = ""
    pix_merchant_city: str = ""

    qrcode_box_size: int = 10
    qrcode_border: int = 2

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
