# meteops/main.py
import os
import uvicorn
from meteops.settings import Settings
from meteops.adapters.mock_data import MockDataSource
from meteops.core.store import AlertStore
from meteops.observability.health import create_app
from meteops.observability.logging_setup import setup_logging, get_logger

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 관측성
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))

    # AI
    s.genai.base_url = os.getenv("GENAI_BASE_URL", s.genai.base_url)
    s.genai.api_key = os.getenv("GENAI_API_KEY", s.genai.api_key)
    s.genai.model = os.getenv("GENAI_MODEL", s.genai.model)
    s.genai.timeout_sec = int(os.getenv("GENAI_TIMEOUT_SEC", s.genai.timeout_sec))

    # 대시보드
    s.dashboard.default_country_id = os.getenv("DEFAULT_COUNTRY", s.dashboard.default_country_id)
    s.dashboard.author = os.getenv("ALERT_AUTHOR", s.dashboard.author)

    return s

def main(host: str = "0.0.0.0"):
    s = build_settings()
    setup_logging(s.observability.log_level, json=s.observability.log_json)
    log = get_logger()
    log.info("설정 로드 완료")

    if not s.genai.api_key:
        log.warning("GENAI_API_KEY 미설정, AI 근거 문구 제안은 실패로 응답됨")

    reference = MockDataSource()
    store = AlertStore(reference.initial_alerts())
    app = create_app(s, reference=reference, store=store)

    log.info(f"HTTP 서버 시작 중 host:{host} port:{s.observability.http_port}")
    uvicorn.run(
        app,
        host=host,
        port=s.observability.http_port,
        log_level=s.observability.log_level.lower(),
        access_log=True
    )

if __name__ == "__main__":
    main()
