"""Amazon Bedrock AgentCore のオンライン評価設定コンストラクト。"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from aws_cdk import Tags
from aws_cdk import aws_iam as iam
from aws_cdk import custom_resources as cr
from constructs import Construct

from .context import (
    ExecutionContext,
    config_id_from_arn,
    evaluator_arn,
    foundation_model_arn,
    inference_profile_arn,
    log_group_arn,
    online_evaluation_config_arn,
)
from .data_source import DataSourceConfig
from .evaluation_types import (
    DEFAULT_SAMPLING_PERCENTAGE,
    DEFAULT_SESSION_TIMEOUT_MINUTES,
    ConfigOrigin,
    ExecutionStatus,
    FilterConfig,
    OnlineEvaluationConfigAttributes,
)
from .evaluator import EvaluatorReference
from .online_evaluation_config_base import (
    ImportedOnlineEvaluationConfig,
    OnlineEvaluationConfigBase,
)
from .perms import EvaluationPerms
from .validation import (
    throw_if_invalid,
    validate_config_name,
    validate_description,
    validate_evaluators,
    validate_filters,
    validate_log_group_names,
    validate_sampling_percentage,
    validate_session_timeout,
)

logger = logging.getLogger(__name__)

AGENTCORE_SERVICE_PRINCIPAL = "bedrock-agentcore.amazonaws.com"
CONTROL_PLANE_SDK_SERVICE = "bedrock-agentcore-control"
EVALUATION_LOG_GROUP_PATTERN = "/aws/bedrock-agentcore/evaluations/*"
CONFIG_ID_RESPONSE_FIELD = "onlineEvaluationConfigId"
CONFIG_ARN_RESPONSE_FIELD = "onlineEvaluationConfigArn"


class OnlineEvaluationConfig(OnlineEvaluationConfigBase):
    """Amazon Bedrock AgentCore のオンライン評価設定。

    組み込みまたはカスタム Evaluator を使用して、エージェントのパフォーマンスを継続的に評価します。
    作成・更新・削除は CloudFormation カスタムリソース（AwsCustomResource）が
    bedrock-agentcore-control API を呼び出して実行します。

    Example:
        evaluation = OnlineEvaluationConfig(self, "MyEvaluation",
            config_name="my_evaluation",
            evaluators=[
                EvaluatorReference.builtin(BuiltinEvaluator.HELPFULNESS),
                EvaluatorReference.builtin(BuiltinEvaluator.CORRECTNESS),
            ],
            data_source=DataSourceConfig.from_cloud_watch_logs(
                CloudWatchLogsDataSourceConfig(
                    log_group_names=["/aws/bedrock-agentcore/my-agent"],
                    service_names=["my-agent.default"],
                )
            ),
        )
    """

    RESOURCE_TYPE = "Custom::BedrockAgentCoreOnlineEvaluationConfig"

    # ------------------------------------------------------
    # インポート
    # ------------------------------------------------------

    @classmethod
    def from_config_id(cls, scope: Construct, construct_id: str, config_id: str) -> OnlineEvaluationConfigBase:
        """設定 ID から既存のオンライン評価設定をインポートします。"""
        ctx = ExecutionContext.from_scope(scope)
        return cls.from_attributes(
            scope,
            construct_id,
            OnlineEvaluationConfigAttributes(
                config_arn=online_evaluation_config_arn(ctx, config_id),
                config_id=config_id,
                # ID でインポートする場合は ID を名前として使用
                config_name=config_id,
            ),
        )

    @classmethod
    def from_config_arn(cls, scope: Construct, construct_id: str, config_arn: str) -> OnlineEvaluationConfigBase:
        """ARN から既存のオンライン評価設定をインポートします。"""
        config_id = config_id_from_arn(config_arn)
        return cls.from_attributes(
            scope,
            construct_id,
            OnlineEvaluationConfigAttributes(
                config_arn=config_arn,
                config_id=config_id,
                config_name=config_id,
            ),
        )

    @classmethod
    def from_attributes(
        cls,
        scope: Construct,
        construct_id: str,
        attrs: OnlineEvaluationConfigAttributes,
    ) -> OnlineEvaluationConfigBase:
        """属性から既存のオンライン評価設定をインポートします。"""
        return ImportedOnlineEvaluationConfig(scope, construct_id, attrs)

    # ------------------------------------------------------
    # コンストラクタ
    # ------------------------------------------------------

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        config_name: str,
        evaluators: Sequence[EvaluatorReference],
        data_source: DataSourceConfig,
        execution_role: Optional[iam.IRole] = None,
        description: Optional[str] = None,
        sampling_percentage: Optional[float] = None,
        filters: Optional[Sequence[FilterConfig]] = None,
        session_timeout_minutes: Optional[float] = None,
        enable_on_create: Optional[bool] = None,
        tags: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(scope, construct_id, ConfigOrigin.MANAGED)

        # 検証（最初に失敗した項目で例外を送出）
        throw_if_invalid(validate_config_name, config_name, self)
        throw_if_invalid(validate_description, description, self)
        throw_if_invalid(validate_evaluators, evaluators, self)
        throw_if_invalid(validate_sampling_percentage, sampling_percentage, self)
        throw_if_invalid(validate_filters, filters, self)
        throw_if_invalid(validate_session_timeout, session_timeout_minutes, self)
        if data_source.cloud_watch_logs_config is not None:
            throw_if_invalid(validate_log_group_names, data_source._get_log_group_names(), self)

        self._config_name = config_name
        self._evaluators = list(evaluators)
        self._data_source = data_source
        self._description = description
        self._sampling_percentage = sampling_percentage
        self._filters = list(filters) if filters else []
        self._session_timeout_minutes = session_timeout_minutes
        self._enable_on_create = enable_on_create

        self._execution_role = execution_role or self._create_execution_role()
        self._grant_principal = self._execution_role

        create_params = self._build_create_params()
        update_params = self._build_update_params()
        delete_params = self._build_delete_params()

        logger.info(f"オンライン評価設定を定義しています: {config_name}")

        custom_resource = cr.AwsCustomResource(
            self,
            "Resource",
            resource_type=self.RESOURCE_TYPE,
            # bedrock-agentcore-control の新しい API には最新の SDK が必要
            install_latest_aws_sdk=True,
            on_create=cr.AwsSdkCall(
                service=CONTROL_PLANE_SDK_SERVICE,
                action="CreateOnlineEvaluationConfig",
                parameters=create_params,
                physical_resource_id=cr.PhysicalResourceId.from_response(CONFIG_ID_RESPONSE_FIELD),
            ),
            on_update=cr.AwsSdkCall(
                service=CONTROL_PLANE_SDK_SERVICE,
                action="UpdateOnlineEvaluationConfig",
                parameters=update_params,
                physical_resource_id=cr.PhysicalResourceId.from_response(CONFIG_ID_RESPONSE_FIELD),
            ),
            on_delete=cr.AwsSdkCall(
                service=CONTROL_PLANE_SDK_SERVICE,
                action="DeleteOnlineEvaluationConfig",
                parameters=delete_params,
            ),
            policy=cr.AwsCustomResourcePolicy.from_statements(self._custom_resource_statements()),
        )

        self._config_id = custom_resource.get_response_field(CONFIG_ID_RESPONSE_FIELD)
        self._config_arn = custom_resource.get_response_field(CONFIG_ARN_RESPONSE_FIELD)
        self._status = custom_resource.get_response_field("status")
        self._execution_status = custom_resource.get_response_field("executionStatus")

        for key, value in (tags or {}).items():
            Tags.of(self).add(key, value)

    @property
    def evaluators(self) -> List[EvaluatorReference]:
        return list(self._evaluators)

    @property
    def data_source(self) -> DataSourceConfig:
        return self._data_source

    # ------------------------------------------------------
    # 実行ロール
    # ------------------------------------------------------

    def _create_execution_role(self) -> iam.IRole:
        """評価用の実行ロールを作成します。"""
        ctx = self._context

        role = iam.Role(
            self,
            "ExecutionRole",
            assumed_by=iam.ServicePrincipal(
                AGENTCORE_SERVICE_PRINCIPAL,
                conditions={
                    "StringEquals": {
                        "aws:SourceAccount": ctx.account,
                        "aws:ResourceAccount": ctx.account,
                    },
                    "ArnLike": {
                        "aws:SourceArn": [
                            evaluator_arn(ctx, "*"),
                            online_evaluation_config_arn(ctx, "*"),
                        ],
                    },
                },
            ),
            description="Execution role for Bedrock AgentCore Online Evaluation",
        )

        # エージェントのトレース読み取りに必要な CloudWatch Logs 読み取り権限
        role.add_to_policy(
            iam.PolicyStatement(
                sid="CloudWatchLogReadStatement",
                effect=iam.Effect.ALLOW,
                actions=list(EvaluationPerms.CLOUDWATCH_LOGS_READ_PERMS),
                resources=["*"],
            )
        )

        # 評価結果の書き込み
        role.add_to_policy(
            iam.PolicyStatement(
                sid="CloudWatchLogWriteStatement",
                effect=iam.Effect.ALLOW,
                actions=list(EvaluationPerms.CLOUDWATCH_LOGS_WRITE_PERMS),
                resources=[log_group_arn(ctx, EVALUATION_LOG_GROUP_PATTERN)],
            )
        )

        # Transaction Search 用のインデックスポリシー
        role.add_to_policy(
            iam.PolicyStatement(
                sid="CloudWatchIndexPolicyStatement",
                effect=iam.Effect.ALLOW,
                actions=list(EvaluationPerms.CLOUDWATCH_INDEX_POLICY_PERMS),
                resources=[
                    log_group_arn(ctx, "aws/spans"),
                    log_group_arn(ctx, "aws/spans:*"),
                ],
            )
        )

        role.add_to_policy(
            iam.PolicyStatement(
                sid="BedrockInvokeStatement",
                effect=iam.Effect.ALLOW,
                actions=list(EvaluationPerms.BEDROCK_MODEL_PERMS),
                resources=[
                    foundation_model_arn(ctx),
                    inference_profile_arn(ctx),
                ],
            )
        )

        logger.debug(f"実行ロールを作成しました: {role.node.path}")
        return role

    def _custom_resource_statements(self) -> List[iam.PolicyStatement]:
        """カスタムリソースの Lambda に付与するポリシーステートメント。"""
        return [
            iam.PolicyStatement(
                actions=list(EvaluationPerms.ADMIN_PERMS),
                resources=["*"],
            ),
            iam.PolicyStatement(
                actions=["iam:PassRole"],
                resources=[self._execution_role.role_arn],
            ),
            # API は作成時に CloudWatch インデックスポリシーへのアクセスを検証する
            iam.PolicyStatement(
                actions=[
                    "logs:DescribeIndexPolicies",
                    "logs:PutIndexPolicy",
                    "logs:CreateLogGroup",
                ],
                resources=["*"],
            ),
        ]

    # ------------------------------------------------------
    # API パラメータ
    # ------------------------------------------------------

    def _build_create_params(self) -> Dict[str, Any]:
        """CreateOnlineEvaluationConfig API のパラメータを組み立てます。"""
        params: Dict[str, Any] = {
            "onlineEvaluationConfigName": self._config_name,
            "evaluators": [e._render() for e in self._evaluators],
            "dataSourceConfig": self._data_source._render(),
            "evaluationExecutionRoleArn": self._execution_role.role_arn,
            # デフォルトは有効
            "enableOnCreate": self._enable_on_create is not False,
        }

        if self._description:
            params["description"] = self._description

        params["rule"] = self._build_rule_config()
        return params

    def _build_update_params(self) -> Dict[str, Any]:
        """UpdateOnlineEvaluationConfig API のパラメータを組み立てます。

        作成時は enableOnCreate（真偽値）ですが、更新時は executionStatus で指定します。
        """
        params: Dict[str, Any] = {
            "onlineEvaluationConfigId": cr.PhysicalResourceIdReference(),
            "evaluators": [e._render() for e in self._evaluators],
            "dataSourceConfig": self._data_source._render(),
            "evaluationExecutionRoleArn": self._execution_role.role_arn,
            "rule": self._build_rule_config(),
            "executionStatus": (
                ExecutionStatus.DISABLED.value
                if self._enable_on_create is False
                else ExecutionStatus.ENABLED.value
            ),
        }

        if self._description:
            params["description"] = self._description

        return params

    def _build_delete_params(self) -> Dict[str, Any]:
        return {"onlineEvaluationConfigId": cr.PhysicalResourceIdReference()}

    def _build_rule_config(self) -> Dict[str, Any]:
        rule: Dict[str, Any] = {
            "samplingConfig": {
                "samplingPercentage": (
                    self._sampling_percentage
                    if self._sampling_percentage is not None
                    else DEFAULT_SAMPLING_PERCENTAGE
                ),
            },
            "sessionConfig": {
                "sessionTimeoutMinutes": (
                    self._session_timeout_minutes
                    if self._session_timeout_minutes is not None
                    else DEFAULT_SESSION_TIMEOUT_MINUTES
                ),
            },
        }

        if self._filters:
            rule["filters"] = [
                {
                    "key": f.key,
                    "operator": _operator_value(f.operator),
                    "value": self._format_filter_value(f.value),
                }
                for f in self._filters
            ]

        return rule

    @staticmethod
    def _format_filter_value(value: Any) -> Dict[str, Any]:
        """フィルター値を API の union 形式（stringValue / doubleValue / booleanValue）に変換します。"""
        if isinstance(value, str):
            return {"stringValue": value}
        # bool は int のサブクラスなので数値より先に判定する
        if isinstance(value, bool):
            return {"booleanValue": value}
        if isinstance(value, (int, float)):
            return {"doubleValue": value}
        return {"stringValue": str(value)}


def _operator_value(operator: Any) -> str:
    return getattr(operator, "value", operator)


class OnlineEvaluation(OnlineEvaluationConfig):
    """`OnlineEvaluationConfig` の旧名称。動作は同一で、カスタムリソースの型名のみ異なります。"""

    RESOURCE_TYPE = "Custom::BedrockAgentCoreOnlineEvaluation"
