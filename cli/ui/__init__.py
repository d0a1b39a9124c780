# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 Rich 콘솔, logger, 에러 메시지 출력 함수
"""

from .console import SYMBOL_ERROR, console, get_console, get_logger, print_error

__all__ = [
    "SYMBOL_ERROR",
    "console",
    "get_console",
    "get_logger",
    "print_error",
]
