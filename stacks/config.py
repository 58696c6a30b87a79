"""オンライン評価スタックの設定。

`.env` と `ONLINE_EVAL_*` 環境変数を読み込み、CDK コンテキストの `onlineEvaluation` で上書きします。
値の範囲チェックはコンストラクト側で行います。
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from aws_cdk import App
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from agentcore_evaluation import (
    BuiltinEvaluator,
    EvaluatorReference,
    FilterConfig,
    FilterOperator,
)

logger = logging.getLogger(__name__)

CONTEXT_KEY = "onlineEvaluation"
ENV_PREFIX = "ONLINE_EVAL_"


class FilterSettings(BaseModel):
    """トレースフィルターの設定。"""

    key: str = Field(description="Trace attribute to filter on")
    operator: FilterOperator = Field(default=FilterOperator.EQUALS)
    value: Union[bool, float, str] = Field(description="Value to compare against")

    def to_filter_config(self) -> FilterConfig:
        return FilterConfig(key=self.key, operator=self.operator, value=self.value)


class OnlineEvaluationStackConfig(BaseModel):
    """オンライン評価スタックの設定。"""

    config_name: str = Field(
        default="agent_online_evaluation", description="Online evaluation config name"
    )
    description: Optional[str] = Field(default=None, description="Config description")

    # データソース: runtime_id があれば Runtime から導出、なければロググループを直接指定
    log_group_names: List[str] = Field(default_factory=list)
    service_names: List[str] = Field(default_factory=list)
    runtime_id: Optional[str] = Field(default=None, description="AgentCore Runtime ID")
    runtime_name: Optional[str] = Field(default=None, description="AgentCore Runtime name")
    endpoint_name: str = Field(default="DEFAULT", description="Runtime endpoint name")

    evaluators: List[str] = Field(
        default_factory=lambda: [
            BuiltinEvaluator.HELPFULNESS.value,
            BuiltinEvaluator.CORRECTNESS.value,
        ],
        description="Built-in evaluator values or custom evaluator ids",
    )
    sampling_percentage: Optional[float] = Field(default=None)
    session_timeout_minutes: Optional[int] = Field(default=None)
    enable_on_create: bool = Field(default=True)
    filters: List[FilterSettings] = Field(default_factory=list)
    execution_role_arn: Optional[str] = Field(default=None)
    tags: Dict[str, str] = Field(default_factory=dict)

    @field_validator("log_group_names", "service_names", "evaluators", mode="before")
    @classmethod
    def _split_comma_separated(cls, value: Any) -> Any:
        # 環境変数はカンマ区切りの文字列で渡される
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def evaluator_references(self) -> List[EvaluatorReference]:
        """設定された Evaluator を参照オブジェクトに変換します。"""
        references = []
        for evaluator in self.evaluators:
            try:
                references.append(EvaluatorReference.builtin(BuiltinEvaluator(evaluator)))
            except ValueError:
                references.append(EvaluatorReference.custom(evaluator))
        return references

    def filter_configs(self) -> List[FilterConfig]:
        return [f.to_filter_config() for f in self.filters]


def _read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field_name in OnlineEvaluationStackConfig.model_fields:
        env_value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        # 空文字列は未設定として扱う
        if env_value and field_name not in ("filters", "tags"):
            values[field_name] = env_value
    return values


def load_stack_config(
    app: Optional[App] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> OnlineEvaluationStackConfig:
    """環境変数と CDK コンテキストからスタック設定を読み込みます。

    Args:
        app: CDK App（コンテキスト `onlineEvaluation` を参照）
        environ: 環境変数のマッピング。省略時は `.env` を読み込んだ後の os.environ

    Returns:
        OnlineEvaluationStackConfig
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = _read_env(environ)

    if app is not None:
        context_values = app.node.try_get_context(CONTEXT_KEY) or {}
        values.update(context_values)

    config = OnlineEvaluationStackConfig(**values)
    logger.info(f"オンライン評価スタックの設定を読み込みました: {config.config_name}")
    return config
