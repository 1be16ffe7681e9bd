"""
Rate Limiter 모듈
순환 임포트를 피하기 위해 limiter를 중앙 집중화
"""
from slowapi import Limiter
from app.core.middleware import get_real_ip

# 프록시 헤더를 고려한 실제 클라이언트 IP 기준으로 제한
limiter = Limiter(key_func=get_real_ip)
