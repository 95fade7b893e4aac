import os
from functools import lru_cache
from typing import Dict, List

DEFAULT_GOOGLE_ADS_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQ0_xNSuB0SknTQqon9YlTPuP7zglj1OU77KGJbpWYE_aoU1vuJWwxnc7fT2XAxOzmDxnikRKjfeHz1"
    "/pub?gid=711754605&single=true&output=csv"
)


def _int_env(name: str, default: int) -> int:
  raw = os.getenv(name)
  if raw is None or not raw.strip():
    return default
  return int(raw)


def parse_column_overrides(raw: str | None) -> Dict[str, str]:
  """Parse `field=Header,field=Header` into a field -> header mapping."""
  overrides: Dict[str, str] = {}
  if not raw:
    return overrides
  for part in raw.split(","):
    if "=" not in part:
      continue
    field, header = part.split("=", 1)
    field = field.strip().lower()
    header = header.strip()
    if field and header:
      overrides[field] = header
  return overrides


class Settings:
  """Centralized configuration pulled from environment variables."""

  app_name: str = "Google Ads Dashboard Backend"
  app_version: str = os.getenv("APP_VERSION", "0.0.1")

  supabase_jwt_secret: str
  supabase_jwt_audience: str
  supabase_issuer: str

  supabase_url: str | None
  supabase_service_role: str | None

  allowed_origins: List[str]
  usage_logging_enabled: bool

  google_ads_csv_url: str
  csv_columns: Dict[str, str]
  default_window_days: int
  top_keywords_limit: int
  trend_lookback_days: int
  fetch_timeout_s: float

  def __init__(self) -> None:
    self.supabase_jwt_secret = os.getenv("SUPABASE_JWT_SECRET", "")
    self.supabase_jwt_audience = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")
    self.supabase_issuer = os.getenv("SUPABASE_ISSUER", "")

    self.supabase_url = os.getenv("SUPABASE_URL")
    self.supabase_service_role = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv(
        "SUPABASE_SERVICE_ROLE"
    )

    default_allowed = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    allowed = os.getenv("BACKEND_ALLOWED_ORIGINS")
    if allowed:
      self.allowed_origins = [origin.strip() for origin in allowed.split(",") if origin.strip()]
    else:
      self.allowed_origins = default_allowed

    self.usage_logging_enabled = os.getenv("ENABLE_USAGE_LOGGING", "0") == "1"

    # published sheet export; the header layout is owned by the sheet, override per deployment
    self.google_ads_csv_url = os.getenv("GOOGLE_ADS_CSV_URL", DEFAULT_GOOGLE_ADS_CSV_URL)
    self.csv_columns = parse_column_overrides(os.getenv("GOOGLE_ADS_CSV_COLUMNS"))

    self.default_window_days = _int_env("GOOGLE_ADS_DEFAULT_WINDOW_DAYS", 30)
    self.top_keywords_limit = _int_env("GOOGLE_ADS_TOP_KEYWORDS", 10)
    self.trend_lookback_days = _int_env("GOOGLE_ADS_TREND_LOOKBACK_DAYS", 30)
    self.fetch_timeout_s = float(os.getenv("GOOGLE_ADS_FETCH_TIMEOUT_S", "30"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()


settings = get_settings()
