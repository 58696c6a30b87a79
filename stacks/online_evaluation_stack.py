from aws_cdk import (
    Stack,
    aws_cloudwatch as cloudwatch,
    aws_iam as iam,
    CfnOutput,
    Duration,
)
from constructs import Construct

from agentcore_evaluation import (
    AgentRuntimeReference,
    CloudWatchLogsDataSourceConfig,
    DataSourceConfig,
    OnlineEvaluationConfig,
)

from .config import OnlineEvaluationStackConfig


class OnlineEvaluationStack(Stack):

    def __init__(self, scope: Construct, construct_id: str, config: OnlineEvaluationStackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # データソース
        if config.runtime_id:
            runtime = AgentRuntimeReference(
                agent_runtime_id=config.runtime_id,
                agent_runtime_name=config.runtime_name or config.runtime_id,
            )
            data_source = DataSourceConfig.from_agent_runtime_endpoint(runtime, config.endpoint_name)
        else:
            data_source = DataSourceConfig.from_cloud_watch_logs(
                CloudWatchLogsDataSourceConfig(
                    log_group_names=config.log_group_names,
                    service_names=config.service_names,
                )
            )

        # 既存の実行ロールが指定されていれば使用
        execution_role = None
        if config.execution_role_arn:
            execution_role = iam.Role.from_role_arn(
                self, "ImportedExecutionRole", config.execution_role_arn, mutable=False
            )

        # オンライン評価設定
        self.evaluation = OnlineEvaluationConfig(self, "OnlineEvaluation",
            config_name=config.config_name,
            description=config.description,
            evaluators=config.evaluator_references(),
            data_source=data_source,
            execution_role=execution_role,
            sampling_percentage=config.sampling_percentage,
            session_timeout_minutes=config.session_timeout_minutes,
            filters=config.filter_configs(),
            enable_on_create=config.enable_on_create,
            tags=config.tags,
        )

        # 評価エラーのアラーム
        self.evaluation_errors_alarm = cloudwatch.Alarm(self, "EvaluationErrorsAlarm",
            metric=self.evaluation.metric_evaluation_errors(period=Duration.minutes(5)),
            threshold=1,
            evaluation_periods=1,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
            alarm_description=f"Online evaluation errors for {config.config_name}"
        )

        # 出力
        CfnOutput(self, "OnlineEvaluationConfigId",
            description="ID of the online evaluation configuration",
            value=self.evaluation.config_id
        )

        CfnOutput(self, "OnlineEvaluationConfigArn",
            description="ARN of the online evaluation configuration",
            value=self.evaluation.config_arn
        )

        CfnOutput(self, "ExecutionRoleArn",
            description="ARN of the evaluation execution role",
            value=self.evaluation.execution_role.role_arn
        )
