from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Relationship graph reads run with this key (bypasses RLS)

    # App
    app_name: str = "zemiguard"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "300/minute"  # slowapi format, e.g. "100/minute"

    # Policy switches
    texter_self_accept_friendships: bool = True  # False: only the Owner accepts on a Texter's behalf
    enforce_call_capabilities: bool = True  # Texter call initiation gated by texter_settings
    select_denial_as_not_found: bool = False  # enforce endpoint answers SELECT denials with 404

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
