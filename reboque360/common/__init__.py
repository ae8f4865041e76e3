# reboque360/common/__init__.py
"""
Общие утилиты, константы, исключения и логгер.
"""

from reboque360.common.logger import get_logger, log_info, log_error, log_warning, log_debug
from reboque360.common.constants import TypeMsg
from reboque360.common.localization import get_text, load_lang_dict

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "TypeMsg",
    "get_text",
    "load_lang_dict",
]
