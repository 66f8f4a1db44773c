"""
Chat-completions client for MeteOps AI suggestions.

This module provides a client that formats a prompt, calls an
OpenAI-compatible chat-completions endpoint in JSON mode, and
validates the reply against the expected schema. No retry: a failed
call is reported once to the caller.
"""

import aiohttp
from typing import Dict, Optional, Type, TypeVar
from pydantic import BaseModel
from meteops.core.models import (
    JustificationInput, JustificationOutput, SuggestedEditsInput, SuggestedEditsOutput,
)
from meteops.observability.logging_setup import get_logger
from .prompts import SYSTEM_PROMPT, render_justification_prompt, render_suggested_edits_prompt

log = get_logger("meteops.genai")

T = TypeVar("T", bound=BaseModel)

class JustificationClient:
    """AI 근거 문구 클라이언트 (JustificationPort 구현)"""
    
    def __init__(self, 
                 base_url: str, 
                 api_key: str, 
                 model: str,
                 timeout: int = 30):
        """
        초기화합니다.
        
        Args:
            base_url: chat-completions API 기본 URL
            api_key: API 키
            model: 모델 이름
            timeout: 요청 타임아웃 (초)
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        
        log.info(f"AI 클라이언트 초기화됨 model:{model}")
    
    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        self.session = aiohttp.ClientSession(
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json"
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session:
            await self.session.close()
            self.session = None
    
    def _build_payload(self, prompt: str) -> Dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "response_format": {"type": "json_object"},
        }
    
    async def _complete(self, prompt: str, schema: Type[T]) -> T:
        """
        프롬프트를 전송하고 응답을 스키마로 검증합니다.
        
        Args:
            prompt: 렌더링된 프롬프트
            schema: 응답 스키마
            
        Returns:
            검증된 응답 모델
            
        Raises:
            RuntimeError: 세션 미초기화 또는 빈 응답
            aiohttp.ClientError: HTTP 오류
            pydantic.ValidationError: 스키마 불일치
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")
        
        url = f"{self.base_url}/chat/completions"
        async with self.session.post(url, json=self._build_payload(prompt)) as response:
            response.raise_for_status()
            data = await response.json()
        
        choices = data.get("choices") or []
        content = choices[0].get("message", {}).get("content") if choices else None
        if not content:
            raise RuntimeError("모델 응답이 비어 있습니다")
        
        return schema.model_validate_json(content)
    
    async def suggest_justification(self, data: JustificationInput) -> JustificationOutput:
        """경보 근거 문구 초안을 생성합니다."""
        log.info(f"근거 문구 요청 regions:{len(data.regions)} severity:{data.severity}")
        return await self._complete(render_justification_prompt(data), JustificationOutput)
    
    async def highlight_suggested_edits(self, data: SuggestedEditsInput) -> SuggestedEditsOutput:
        """갱신된 예보 기반 수정안을 생성합니다."""
        log.info("수정 제안 요청")
        return await self._complete(render_suggested_edits_prompt(data), SuggestedEditsOutput)
