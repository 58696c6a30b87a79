"""Amazon Bedrock AgentCore オンライン評価の CDK コンストラクト。"""

from .context import ExecutionContext
from .data_source import DataSourceConfig
from .errors import (
    OnlineEvaluationError,
    RenderError,
    UnscopedValidationError,
    ValidationError,
)
from .evaluation_types import (
    AgentEndpointDataSourceConfig,
    AgentRuntimeReference,
    BuiltinEvaluator,
    CloudWatchLogsDataSourceConfig,
    ConfigOrigin,
    ExecutionStatus,
    FilterConfig,
    FilterOperator,
    OnlineEvaluationConfigAttributes,
)
from .evaluator import EvaluatorReference
from .online_evaluation_config import OnlineEvaluation, OnlineEvaluationConfig
from .online_evaluation_config_base import (
    ImportedOnlineEvaluationConfig,
    OnlineEvaluationConfigBase,
)
from .perms import EvaluationPerms

__all__ = [
    "AgentEndpointDataSourceConfig",
    "AgentRuntimeReference",
    "BuiltinEvaluator",
    "CloudWatchLogsDataSourceConfig",
    "ConfigOrigin",
    "DataSourceConfig",
    "EvaluationPerms",
    "EvaluatorReference",
    "ExecutionContext",
    "ExecutionStatus",
    "FilterConfig",
    "FilterOperator",
    "ImportedOnlineEvaluationConfig",
    "OnlineEvaluation",
    "OnlineEvaluationConfig",
    "OnlineEvaluationConfigAttributes",
    "OnlineEvaluationConfigBase",
    "OnlineEvaluationError",
    "RenderError",
    "UnscopedValidationError",
    "ValidationError",
]
