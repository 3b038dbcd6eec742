from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Environment settings for the error-control tooling.

    Values set here take precedence over the corresponding YAML entries.
    """

    model_config = SettingsConfigDict(env_prefix="ERROR_CONTROL_")

    pw_command: str = ""
    pseudo_dir: str = ""


settings = Settings()
