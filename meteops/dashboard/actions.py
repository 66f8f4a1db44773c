"""
Server actions for MeteOps AI suggestions.

This module wraps the language-model port so that any failure is
logged and surfaced as a success flag plus message, never raised.
"""

import time
from meteops.core.models import JustificationInput, JustificationResult
from meteops.observability import metrics
from meteops.observability.logging_setup import get_logger
from meteops.ports.justification import JustificationPort

log = get_logger("meteops.actions")

FAILURE_MESSAGE = "Failed to generate justification."

async def suggest_justification_action(port: JustificationPort, data: JustificationInput) -> JustificationResult:
    """
    근거 문구 제안을 실행합니다.

    Args:
        port: AI 근거 문구 포트
        data: 요청 데이터

    Returns:
        성공 시 justification, 실패 시 error 메시지를 담은 결과
    """
    start = time.perf_counter()
    try:
        result = await port.suggest_justification(data)
    except Exception as e:
        log.error(f"근거 문구 제안 실패 error:{e}")
        metrics.justification_requests.labels(kind="justification", outcome="error").inc()
        return JustificationResult(success=False, error=FAILURE_MESSAGE)
    finally:
        metrics.justification_seconds.observe(time.perf_counter() - start)

    metrics.justification_requests.labels(kind="justification", outcome="ok").inc()
    return JustificationResult(success=True, justification=result.justification)
