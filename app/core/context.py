import contextvars
from typing import Optional

# 요청 단위 Trace ID (TraceIDMiddleware가 설정, SensitiveDataFilter/JsonFormatter가 참조)
# Rationale: 서비스 계층 로그에도 request 객체 없이 현재 요청의 Trace ID를 남기기 위해 사용합니다.
trace_id_context: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("trace_id", default=None)

def get_trace_id() -> Optional[str]:
    """현재 컨텍스트의 Trace ID를 반환합니다."""
    return trace_id_context.get()

def set_trace_id(trace_id: str) -> None:
    """현재 컨텍스트에 Trace ID를 설정합니다."""
    trace_id_context.set(trace_id)
