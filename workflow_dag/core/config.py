from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_dag.xml_output import DaxConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DAX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Output
    encoding: str = "UTF-8"
    pretty_print: bool = False
    indent_size: int = 2

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # json or console

    def to_dax_config(self) -> DaxConfig:
        """Build the renderer configuration from these settings."""
        return DaxConfig(
            encoding=self.encoding,
            pretty_print=self.pretty_print,
            indent_size=self.indent_size,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
