from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    supabase_url: str
    supabase_service_role_key: str
    supabase_anon_key: str = ""
    supabase_jwt_secret: str
    supabase_jwt_audience: str = "authenticated"
    line_channel_access_token: str = ""
    line_admin_user_ids: str = ""
    environment: str = "development"
    log_level: str = "INFO"
    service_account_email: str = ""
    service_account_password: str = ""
    session_check_interval: float = 60.0
    session_refresh_threshold: float = 300.0

    @property
    def admin_line_ids(self) -> list[str]:
        return [uid.strip() for uid in self.line_admin_user_ids.split(",") if uid.strip()]

    @property
    def has_service_account(self) -> bool:
        return bool(self.service_account_email and self.service_account_password)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
