"""
Domain errors for MeteOps.
"""


class AlertValidationError(ValueError):
    """경보 생성/저장 경계에서의 검증 실패"""
