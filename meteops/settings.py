# meteops/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "MeteOps"
    build_version: str = "0.1.0"
    build_date: str = "2024-08-16"
    log_level: str = "INFO"
    log_json: bool = False

class GenAI(BaseModel):
    base_url: str = "https://api.openai.com/v1"   # OpenAI 호환 chat-completions
    api_key: str = ""
    model: str = "gpt-4o-mini"
    timeout_sec: int = 30

class Dashboard(BaseModel):
    default_country_id: str = "colombia"
    author: str = "MeteOps Lead"
    # 실제 앙상블 예보 연동 전까지 사용하는 고정 문구
    ensemble_forecasts: str = "Sample forecast data for suggestion."

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    observability: Observability = Field(default_factory=Observability)
    genai: GenAI = Field(default_factory=GenAI)
    dashboard: Dashboard = Field(default_factory=Dashboard)
