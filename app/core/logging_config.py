import logging
import json
import os
import re
from logging.handlers import TimedRotatingFileHandler

from app.core.context import get_trace_id

# LogRecord 기본 속성 (이 외의 속성은 extra로 전달된 값으로 간주)
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "trace_id"}


class LogMasker:
    """
    로그 내 민감 정보(JWT, 비밀번호, 이메일 등) 마스킹 유틸

    Rationale:
        Bearer 토큰이 요청 로그에 그대로 남으면 재사용 공격에 노출되므로
        dict 메시지/extra/문자열 메시지 모두에서 값을 "***"로 치환합니다.
    """
    MASK = "***"
    SENSITIVE_KEYS = (
        "password",
        "passwd",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "auth",
        "email",
        "credential",
    )

    # 키 이름이 민감 키로 끝나면 마스킹 (access_token, jwt_secret, Api_Key ...)
    _KEY_PATTERN = re.compile(r"(?:%s)$" % "|".join(SENSITIVE_KEYS), re.IGNORECASE)

    # key=value, key: value, "key": "value", authorization: Bearer xxx
    _STRING_PATTERN = re.compile(
        r"(?P<key>\w*(?:%s))(?P<sep>[\"']?\s*[=:]\s*)"
        r"(?P<value>\"[^\"]*\"|'[^']*'|(?:bearer\s+)?[^\s&,\"']+)" % "|".join(SENSITIVE_KEYS),
        re.IGNORECASE,
    )

    @classmethod
    def is_sensitive_key(cls, key) -> bool:
        return isinstance(key, str) and cls._KEY_PATTERN.search(key) is not None

    @classmethod
    def mask_dict(cls, data):
        """dict/list를 재귀적으로 순회하며 민감 키의 스칼라 값을 마스킹 (비-컨테이너는 그대로 반환)"""
        if isinstance(data, dict):
            masked = {}
            for key, value in data.items():
                if isinstance(value, (dict, list)):
                    masked[key] = cls.mask_dict(value)
                elif cls.is_sensitive_key(key):
                    masked[key] = cls.MASK
                else:
                    masked[key] = value
            return masked
        if isinstance(data, list):
            return [cls.mask_dict(item) for item in data]
        return data

    @classmethod
    def mask_string(cls, text: str) -> str:
        if not text:
            return text

        def _replace(match: re.Match) -> str:
            value = match.group("value")
            quote = value[0] if value[0] in "\"'" else ""
            return f"{match.group('key')}{match.group('sep').strip()}{quote}{cls.MASK}{quote}"

        return cls._STRING_PATTERN.sub(_replace, text)


class SensitiveDataFilter(logging.Filter):
    """
    핸들러 단계에서 Trace ID 주입 + 메시지 마스킹

    Note:
        로그를 버리지 않도록 항상 True를 반환합니다.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()

        if isinstance(record.msg, dict):
            record.msg = LogMasker.mask_dict(record.msg)
        elif isinstance(record.msg, str):
            # %-포맷 인자까지 렌더링한 뒤 마스킹
            record.msg = LogMasker.mask_string(record.getMessage())
            record.args = ()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # 메시지가 dict면 그대로 기반으로 삼고, 아니면 기본 구조 생성
        base_message = record.msg if isinstance(record.msg, dict) else {
            "message": record.getMessage()
        }

        extra = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }

        log = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "trace_id": getattr(record, "trace_id", None) or get_trace_id(),
            **LogMasker.mask_dict(extra),
            **LogMasker.mask_dict(base_message),
        }

        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(log_dir: str = "logs", level: str = "INFO"):
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 앱 재시작(테스트의 lifespan 반복 등) 시 핸들러 중복 등록 방지
    if any(isinstance(h.formatter, JsonFormatter) for h in root_logger.handlers):
        return

    os.makedirs(log_dir, exist_ok=True)

    json_formatter = JsonFormatter()
    sensitive_filter = SensitiveDataFilter()

    # 콘솔 핸들러
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(json_formatter)
    console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    # 일자별 파일 로테이션 핸들러 (자정 기준, 7일 보관)
    file_handler = TimedRotatingFileHandler(
        filename=os.path.join(log_dir, "app.log"),
        when="midnight",
        backupCount=7,
        encoding="utf-8",
        utc=False,
    )
    file_handler.setFormatter(json_formatter)
    file_handler.addFilter(sensitive_filter)
    root_logger.addHandler(file_handler)
