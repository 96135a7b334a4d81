"""
core/exceptions.py - 통합 예외 계층 구조

스캐너 전체에서 사용되는 예외 클래스들을 정의합니다.
모든 협력자(Secrets Manager, SSM, S3) 호출 실패는 즉시 전파되며
실행 내부에서 재시도하지 않습니다.

예외 계층 구조:
    ScannerError (베이스)
    ├── ConfigurationError (설정 누락/형식 오류 - 외부 호출 전 실패)
    └── APICallError (AWS API 호출 실패)
        ├── SourceUnavailableError (인벤토리/파라미터 스토어)
        └── SinkUnavailableError (보고서 업로드)

Usage:
    from core.exceptions import SourceUnavailableError

    try:
        page = sm.list_secrets()
    except ClientError as e:
        raise SourceUnavailableError.from_client_error(
            service="secretsmanager",
            operation="list_secrets",
            client_error=e,
        ) from e
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class ScannerError(Exception):
    """스캐너 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigurationError(ScannerError):
    """설정 값 누락 또는 형식 오류

    외부 호출 이전, 설정 로드 시점에 발생합니다.
    """

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# AWS API 호출 관련 예외
# =============================================================================


class APICallError(ScannerError):
    """AWS API 호출 관련 예외

    boto3/botocore 예외를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        else:
            message = f"{message} 실패"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> APICallError:
        """botocore 예외로부터 생성

        ClientError면 응답의 Code/Message를 파싱하고,
        그 외(BotoCoreError 등)는 원인 예외만 보존합니다.

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: botocore 예외

        Returns:
            호출한 클래스의 인스턴스
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


class SourceUnavailableError(APICallError):
    """인벤토리(Secrets Manager) 또는 파라미터 스토어(SSM) 호출 실패

    실행을 중단하며 부분 결과는 보고하지 않습니다.
    """


class SinkUnavailableError(APICallError):
    """보고서 업로드(S3) 실패

    보고서가 유실된 실행은 스캔하지 않은 것과 동일하게 취급합니다.
    """


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "ParameterNotFound",
    "NoSuchBucket",
}


def _error_code(error: Exception) -> str | None:
    if isinstance(error, APICallError):
        return error.error_code
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code")
    return None


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인"""
    return _error_code(error) in ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code(error) in THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """리소스(시크릿/파라미터/버킷)를 찾을 수 없는 오류인지 확인"""
    return _error_code(error) in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if is_access_denied(error):
        hint = "권한이 없습니다. IAM 정책을 확인하세요."
    elif is_throttling(error):
        hint = "요청이 너무 많습니다. 다음 스케줄 실행에서 다시 시도됩니다."
    elif is_not_found(error):
        hint = "대상 리소스를 찾을 수 없습니다. 설정 값을 확인하세요."
    else:
        hint = None

    if isinstance(error, ScannerError):
        return f"{error} ({hint})" if hint else str(error)

    # 래핑되지 않은 botocore ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))
        return hint or f"{code}: {message}"

    return str(error)
