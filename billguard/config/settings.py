from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "billguard"
    db_username: str = "billguard"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 10
    max_upload_size_bytes: int = 20 * 1024 * 1024

    analysis_provider: str = "gemini"
    analysis_temperature: float = 0.1
    analysis_top_p: float = 0.8
    analysis_max_output_tokens: int = 4096

    analysis_gemini_api_key: str = ""
    analysis_gemini_model_name: str = "gemini-2.0-flash"
    analysis_gemini_timeout_seconds: int = 60

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o-mini"
    analysis_openai_timeout_seconds: int = 60

    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_base_url: str = ""
    analysis_openai_compatible_timeout_seconds: int = 60

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = "google/gemini-2.0-flash-001"
    analysis_openrouter_timeout_seconds: int = 60

    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = "llava"
    analysis_ollama_timeout_seconds: int = 120
