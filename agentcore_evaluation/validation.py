"""オンライン評価設定の入力値検証。

各検証関数はエラーメッセージのリストを返し、値が有効な場合は空リストを返します。
値が未指定（None）の場合や、合成時点で未解決の CDK トークンの場合は検証をスキップします。
"""

import logging
import re
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from aws_cdk import Token
from constructs import IConstruct

from .errors import UnscopedValidationError, ValidationError
from .evaluation_types import FilterConfig

logger = logging.getLogger(__name__)

CONFIG_NAME_MIN_LENGTH = 1
CONFIG_NAME_MAX_LENGTH = 48
DESCRIPTION_MAX_LENGTH = 200
EVALUATORS_MIN_COUNT = 1
EVALUATORS_MAX_COUNT = 10
SAMPLING_PERCENTAGE_MIN = 0.01
SAMPLING_PERCENTAGE_MAX = 100
FILTERS_MAX_COUNT = 5
SESSION_TIMEOUT_MIN = 1
SESSION_TIMEOUT_MAX = 1440
LOG_GROUPS_MIN_COUNT = 1
LOG_GROUPS_MAX_COUNT = 5

CONFIG_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]{0,47}$")

T = TypeVar("T")
ValidationFn = Callable[[T, Optional[IConstruct]], List[str]]


def validate_config_name(name: Optional[str], scope: Optional[IConstruct] = None) -> List[str]:
    """設定名を検証します。

    英字で始まり、英数字とアンダースコアのみを含む 48 文字以内である必要があります。
    """
    errors: List[str] = []

    if name is None or Token.is_unresolved(name):
        return errors

    if len(name) < CONFIG_NAME_MIN_LENGTH:
        errors.append(
            f"Configuration name must be at least {CONFIG_NAME_MIN_LENGTH} character(s), got {len(name)}"
        )

    if len(name) > CONFIG_NAME_MAX_LENGTH:
        errors.append(
            f"Configuration name must be at most {CONFIG_NAME_MAX_LENGTH} characters, got {len(name)}"
        )

    if not CONFIG_NAME_PATTERN.fullmatch(name):
        errors.append(
            f'Configuration name "{name}" does not match required pattern. '
            "Must start with a letter and contain only alphanumeric characters and underscores."
        )

    return errors


def validate_description(description: Optional[str], scope: Optional[IConstruct] = None) -> List[str]:
    """説明文の長さを検証します。"""
    errors: List[str] = []

    if description is None or Token.is_unresolved(description):
        return errors

    if len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters, got {len(description)}"
        )

    return errors


def validate_evaluators(evaluators: Optional[Sequence[Any]], scope: Optional[IConstruct] = None) -> List[str]:
    """Evaluator の数を検証します（1〜10 個）。"""
    errors: List[str] = []

    # Evaluator は必須項目
    if evaluators is None:
        errors.append("Evaluators array is required")
        return errors

    if len(evaluators) < EVALUATORS_MIN_COUNT:
        errors.append(
            f"At least {EVALUATORS_MIN_COUNT} evaluator is required, got {len(evaluators)}"
        )

    if len(evaluators) > EVALUATORS_MAX_COUNT:
        errors.append(
            f"At most {EVALUATORS_MAX_COUNT} evaluators are allowed, got {len(evaluators)}"
        )

    return errors


def validate_sampling_percentage(percentage: Optional[float], scope: Optional[IConstruct] = None) -> List[str]:
    """サンプリング率を検証します（0.01〜100）。"""
    errors: List[str] = []

    if percentage is None or Token.is_unresolved(percentage):
        return errors

    if percentage < SAMPLING_PERCENTAGE_MIN:
        errors.append(
            f"Sampling percentage must be at least {SAMPLING_PERCENTAGE_MIN}, got {percentage}"
        )

    if percentage > SAMPLING_PERCENTAGE_MAX:
        errors.append(
            f"Sampling percentage must be at most {SAMPLING_PERCENTAGE_MAX}, got {percentage}"
        )

    return errors


def validate_filters(filters: Optional[Sequence[FilterConfig]], scope: Optional[IConstruct] = None) -> List[str]:
    """フィルターの数を検証します（最大 5 個）。"""
    errors: List[str] = []

    if filters is None:
        return errors

    if len(filters) > FILTERS_MAX_COUNT:
        errors.append(
            f"At most {FILTERS_MAX_COUNT} filters are allowed, got {len(filters)}"
        )

    return errors


def validate_session_timeout(minutes: Optional[float], scope: Optional[IConstruct] = None) -> List[str]:
    """セッションタイムアウト（分）を検証します（1〜1440）。"""
    errors: List[str] = []

    if minutes is None or Token.is_unresolved(minutes):
        return errors

    if minutes < SESSION_TIMEOUT_MIN:
        errors.append(
            f"Session timeout must be at least {SESSION_TIMEOUT_MIN} minute(s), got {minutes}"
        )

    if minutes > SESSION_TIMEOUT_MAX:
        errors.append(
            f"Session timeout must be at most {SESSION_TIMEOUT_MAX} minutes, got {minutes}"
        )

    return errors


def validate_log_group_names(names: Optional[Sequence[str]], scope: Optional[IConstruct] = None) -> List[str]:
    """CloudWatch Logs データソースのロググループ数を検証します（1〜5 個）。"""
    errors: List[str] = []

    if names is None:
        errors.append("Log group names array is required")
        return errors

    if len(names) < LOG_GROUPS_MIN_COUNT:
        errors.append(
            f"At least {LOG_GROUPS_MIN_COUNT} log group name is required, got {len(names)}"
        )

    if len(names) > LOG_GROUPS_MAX_COUNT:
        errors.append(
            f"At most {LOG_GROUPS_MAX_COUNT} log group names are allowed, got {len(names)}"
        )

    return errors


def throw_if_invalid(validation_fn: ValidationFn, param: T, scope: Optional[IConstruct] = None) -> T:
    """検証関数がエラーを返した場合に例外を送出します。

    Args:
        validation_fn: 実行する検証関数
        param: 検証対象の値
        scope: エラー報告用のコンストラクト（オプション）

    Returns:
        検証済みの値

    Raises:
        ValidationError: scope が指定されている場合
        UnscopedValidationError: scope が指定されていない場合
    """
    errors = validation_fn(param, scope)
    if errors:
        message = "\n".join(errors)
        logger.debug(f"{validation_fn.__name__} で検証エラー: {message}")
        if scope is not None:
            raise ValidationError(message, scope)
        raise UnscopedValidationError(message)
    return param
