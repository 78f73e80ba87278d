from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    env: str = 'development'
    debug: bool = False
    log_level: str = 'INFO'

    # Operational day boundaries (JST has no DST)
    business_timezone: str = 'Asia/Tokyo'

    # Billing
    default_tax_rate: float = 0.10

    # Inbox
    unreported_threshold_days: int = 2

    # SLA window / warning threshold per plan, in minutes
    sla_minutes_light: int = 1440
    sla_warning_minutes_light: int = 240
    sla_minutes_standard: int = 720
    sla_warning_minutes_standard: int = 120
    sla_minutes_premium: int = 120
    sla_warning_minutes_premium: int = 30

    # CORS for the staff console
    cors_origins: list[str] = ['*']

    class Config:
        env_file = '.env'
        extra = 'ignore'

    def plan_sla(self) -> dict[str, tuple[int, int]]:
        """(sla_minutes, warning_minutes) keyed by plan code."""
        return {
            'light': (self.sla_minutes_light, self.sla_warning_minutes_light),
            'standard': (self.sla_minutes_standard, self.sla_warning_minutes_standard),
            'premium': (self.sla_minutes_premium, self.sla_warning_minutes_premium),
        }


settings = Settings()
