"""オンライン評価設定で使用する列挙型と値オブジェクト。"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

DEFAULT_ENDPOINT_NAME = "DEFAULT"
DEFAULT_SAMPLING_PERCENTAGE = 10
DEFAULT_SESSION_TIMEOUT_MINUTES = 15

METRIC_NAMESPACE = "AWS/Bedrock-AgentCore"
METRIC_DIMENSION_CONFIG_ID = "OnlineEvaluationConfigId"


class BuiltinEvaluator(str, Enum):
    """Amazon Bedrock AgentCore が提供する組み込み Evaluator。

    セッション、トレース、ツール呼び出しの各レベルでエージェントの
    パフォーマンスを評価します。
    """

    # 応答内容が事実として正確か
    CORRECTNESS = "Builtin.Correctness"
    # 応答がコンテキスト・ソースに裏付けられているか
    FAITHFULNESS = "Builtin.Faithfulness"
    HELPFULNESS = "Builtin.Helpfulness"
    RESPONSE_RELEVANCE = "Builtin.ResponseRelevance"
    CONCISENESS = "Builtin.Conciseness"
    COHERENCE = "Builtin.Coherence"
    INSTRUCTION_FOLLOWING = "Builtin.InstructionFollowing"
    # 回答の回避・拒否を検出
    REFUSAL = "Builtin.Refusal"
    GOAL_SUCCESS_RATE = "Builtin.GoalSuccessRate"
    TOOL_SELECTION_ACCURACY = "Builtin.ToolSelectionAccuracy"
    TOOL_PARAMETER_ACCURACY = "Builtin.ToolParameterAccuracy"
    HARMFULNESS = "Builtin.Harmfulness"
    STEREOTYPING = "Builtin.Stereotyping"


class FilterOperator(str, Enum):
    """オンライン評価フィルターの比較演算子。"""

    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"


class ExecutionStatus(str, Enum):
    """評価ジョブの実行ステータス。"""

    # 受信したトレースを継続的に処理
    ENABLED = "ENABLED"
    # 設定は存在するがジョブは一時停止中
    DISABLED = "DISABLED"


class ConfigOrigin(str, Enum):
    """設定リソースの由来（CDK で作成されたか、既存のものをインポートしたか）。"""

    MANAGED = "MANAGED"
    IMPORTED = "IMPORTED"


FilterValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class FilterConfig:
    """評価対象のトレースを絞り込むフィルター。"""

    key: str
    operator: FilterOperator
    value: FilterValue


@dataclass(frozen=True)
class CloudWatchLogsDataSourceConfig:
    """CloudWatch Logs データソースの設定。

    AgentCore Runtime でホストされるエージェントのサービス名は
    `<agent-runtime-name>.<agent-runtime-endpoint-name>` 形式です。
    """

    log_group_names: List[str]
    service_names: List[str]


@dataclass(frozen=True)
class AgentEndpointDataSourceConfig:
    """Agent Endpoint データソースの設定。"""

    agent_runtime_id: str
    endpoint_name: str = DEFAULT_ENDPOINT_NAME


@dataclass(frozen=True)
class AgentRuntimeReference:
    """既存の AgentCore Runtime への参照（スタック外で作成された Runtime 用）。"""

    agent_runtime_id: str
    agent_runtime_name: str


@dataclass(frozen=True)
class OnlineEvaluationConfigAttributes:
    """既存のオンライン評価設定をインポートするための属性。"""

    config_arn: str
    config_id: str
    config_name: str
    execution_role_arn: Optional[str] = None
