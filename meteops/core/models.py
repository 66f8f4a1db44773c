"""
Core domain models for MeteOps.

This module defines the core domain models using Pydantic v2
for type safety and validation. Wire names follow the dashboard's
camelCase JSON shape while Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# 심각도 타입 정의 (낮음 -> 높음)
Severity = Literal["yellow", "orange", "red"]

# 경보 상태 타입 정의
AlertStatus = Literal["draft", "active", "expired"]

ALERT_STATUSES: tuple = ("draft", "active", "expired")


class _CamelModel(BaseModel):
    """camelCase 별칭을 사용하는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventDates(_CamelModel):
    """이벤트 기간 모델 (양 끝 포함)"""
    from_: datetime = Field(alias="from")
    to: Optional[datetime] = None

    @model_validator(mode="after")
    def _single_day_default(self) -> "EventDates":
        # 종료일이 없으면 하루짜리 기간
        if self.to is None:
            self.to = self.from_
        return self


class Alert(_CamelModel):
    """기상 경보 모델"""
    id: str = Field(min_length=1)
    country_id: str
    region_ids: List[str] = Field(min_length=1)
    severity: Severity
    event_type: str
    push_date_time: datetime
    event_dates: EventDates
    justification: str
    image_url: Optional[str] = None
    status: AlertStatus = "draft"
    author: str
    last_updated: datetime = Field(default_factory=datetime.now)
    version: int = Field(default=1, ge=1)

    @field_validator("region_ids")
    @classmethod
    def _dedupe_regions(cls, value: List[str]) -> List[str]:
        # 순서를 유지하며 중복 제거
        return list(dict.fromkeys(value))


class Region(BaseModel):
    """지역 모델 (path는 렌더링용 불투명 데이터)"""
    id: str
    name: str
    path: str = ""


class Country(BaseModel):
    """국가 모델"""
    id: str
    name: str
    regions: List[Region] = Field(default_factory=list)

    def region(self, region_id: str) -> Optional[Region]:
        for r in self.regions:
            if r.id == region_id:
                return r
        return None


class ForecastProvider(BaseModel):
    """예보 제공자 모델"""
    id: str
    name: str


class UserStats(BaseModel):
    """심각도 구간별 사용자 수"""
    green: int = Field(default=0, ge=0)
    yellow: int = Field(default=0, ge=0)
    orange: int = Field(default=0, ge=0)
    red: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    def is_consistent(self) -> bool:
        """total이 네 구간의 합과 같은지 확인합니다."""
        return self.total == self.green + self.yellow + self.orange + self.red


# 제공자 ID -> 사용자 통계
Stats = Dict[str, UserStats]


class JustificationInput(BaseModel):
    """AI 근거 문구 요청 모델"""
    regions: List[str] = Field(description="A list of regions affected by the alert.")
    eventDate: str = Field(description="ISO-8601 date of the event.")
    eventType: str = Field(description="The type of event (e.g., heavy rainfall).")
    severity: Severity
    ensembleForecasts: str = Field(description="Ensemble forecast data used to determine the severity.")


class JustificationOutput(BaseModel):
    """AI 근거 문구 응답 모델"""
    justification: str


class SuggestedEditsInput(BaseModel):
    """수정 제안 요청 모델"""
    originalAlert: str
    updatedForecast: str


class SuggestedEditsOutput(BaseModel):
    """수정 제안 응답 모델"""
    suggestedEdits: str


class JustificationResult(BaseModel):
    """근거 문구 제안 결과 (성공 여부 + 메시지)"""
    success: bool
    justification: Optional[str] = None
    error: Optional[str] = None
