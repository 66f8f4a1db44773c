"""
AI justification port interface.

This module defines the protocol for the language-model collaborator
that drafts alert justifications and suggests edits.
"""

from typing import Protocol
from meteops.core.models import (
    JustificationInput, JustificationOutput, SuggestedEditsInput, SuggestedEditsOutput,
)

class JustificationPort(Protocol):
    """AI 근거 문구 포트 인터페이스"""

    async def suggest_justification(self, data: JustificationInput) -> JustificationOutput:
        """
        경보 근거 문구 초안을 생성합니다.

        Args:
            data: 지역, 날짜, 이벤트 유형, 심각도, 앙상블 예보

        Returns:
            근거 문구
        """
        ...

    async def highlight_suggested_edits(self, data: SuggestedEditsInput) -> SuggestedEditsOutput:
        """
        갱신된 예보를 바탕으로 기존 경보의 수정안을 제안합니다.

        Args:
            data: 원본 경보 문구와 갱신된 예보

        Returns:
            수정 제안
        """
        ...
