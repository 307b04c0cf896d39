from __future__ import annotations

import re
from typing import Optional

from ..core.constants import ADMISSION_NUMBER_PATTERN, CLASS_OPTIONS

_ADMISSION_RE = re.compile(ADMISSION_NUMBER_PATTERN)


def clean(value: Optional[str]) -> str:
    return (value or "").strip()


def check_required(value: str, message: str) -> Optional[str]:
    if not value:
        return message
    return None


def check_min_length(value: str, min_len: int, message: str) -> Optional[str]:
    if len(value) < min_len:
        return message
    return None


def is_admission_number(value: str) -> bool:
    return _ADMISSION_RE.fullmatch(value) is not None


def is_class_option(value: str) -> bool:
    return value in CLASS_OPTIONS
