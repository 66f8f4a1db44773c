from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # uvicorn/aiohttp 로그도 같은 sink로
    for noisy in ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "aiohttp"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- 콘솔 포맷 (bind된 name을 모듈명 대신 표시) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", *, json: bool = False) -> None:
    """
    loguru를 초기화합니다.
    - json=False: 사람이 읽기 좋은 컬러 콘솔
    - json=True: 한 줄 JSON (수집기용)
    - 두 경우 모두 stdlib logging 흡수
    """
    logger.remove()  # 기본 sink 제거
    logger.configure(extra={"name": "meteops"})
    if json:
        logger.add(sys.stdout, serialize=True, level=log_level.upper(), backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            format=DEV_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,
            level=log_level.upper(),
        )
    _hook_stdlib_logging()

def get_logger(name: str = "meteops", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)
