"""オンライン評価のデータソース設定。"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from aws_cdk import aws_bedrockagentcore as bedrockagentcore

from .errors import RenderError
from .evaluation_types import (
    DEFAULT_ENDPOINT_NAME,
    AgentEndpointDataSourceConfig,
    CloudWatchLogsDataSourceConfig,
)

logger = logging.getLogger(__name__)

RUNTIME_LOG_GROUP_PREFIX = "/aws/bedrock-agentcore/runtimes/"


def _runtime_identity(runtime: Any) -> Tuple[str, str]:
    """Runtime から (runtime_id, runtime_name) を取得します。"""
    if isinstance(runtime, bedrockagentcore.CfnRuntime):
        return runtime.attr_agent_runtime_id, runtime.agent_runtime_name
    return runtime.agent_runtime_id, runtime.agent_runtime_name


def _resolve_endpoint_name(endpoint: Any) -> str:
    if endpoint is None:
        return DEFAULT_ENDPOINT_NAME
    if isinstance(endpoint, str):
        return endpoint
    if isinstance(endpoint, bedrockagentcore.CfnRuntimeEndpoint):
        return endpoint.name
    return endpoint.endpoint_name


class DataSourceConfig:
    """エージェントのトレースを読み取るデータソースの設定。

    ファクトリメソッドを使用して作成します:
    - `DataSourceConfig.from_agent_runtime_endpoint()` AgentCore Runtime 用（推奨）
    - `DataSourceConfig.from_cloud_watch_logs()` 外部エージェントやカスタムロググループ用
    - `DataSourceConfig.from_agent_endpoint()` Agent Endpoint を直接参照する場合

    Example:
        data_source = DataSourceConfig.from_cloud_watch_logs(
            CloudWatchLogsDataSourceConfig(
                log_group_names=["/aws/my-external-agent/logs"],
                service_names=["my-external-agent"],
            )
        )
    """

    def __init__(
        self,
        cloud_watch_logs_config: Optional[CloudWatchLogsDataSourceConfig] = None,
        agent_endpoint_config: Optional[AgentEndpointDataSourceConfig] = None,
    ):
        self._cloud_watch_logs_config = cloud_watch_logs_config
        self._agent_endpoint_config = agent_endpoint_config

    @classmethod
    def from_cloud_watch_logs(cls, config: CloudWatchLogsDataSourceConfig) -> "DataSourceConfig":
        """CloudWatch Logs データソース設定を作成します。"""
        return cls(cloud_watch_logs_config=config)

    @classmethod
    def from_agent_runtime_endpoint(
        cls,
        runtime: Any,
        endpoint: Union[str, Any, None] = None,
    ) -> "DataSourceConfig":
        """AgentCore Runtime とエンドポイントからデータソース設定を作成します。

        CloudWatch のロググループ名とサービス名は Runtime とエンドポイントから自動的に導出されます。

        Args:
            runtime: `CfnRuntime`、または `agent_runtime_id` と `agent_runtime_name` を持つオブジェクト
            endpoint: `CfnRuntimeEndpoint`、エンドポイント名の文字列、または省略時は 'DEFAULT'

        Returns:
            CloudWatch Logs 形式の DataSourceConfig
        """
        runtime_id, runtime_name = _runtime_identity(runtime)
        endpoint_name = _resolve_endpoint_name(endpoint)

        log_group_name = f"{RUNTIME_LOG_GROUP_PREFIX}{runtime_id}-{endpoint_name}"
        service_name = f"{runtime_name}.{endpoint_name}"
        logger.debug(f"Runtime からデータソースを導出: {log_group_name} / {service_name}")

        return cls(
            cloud_watch_logs_config=CloudWatchLogsDataSourceConfig(
                log_group_names=[log_group_name],
                service_names=[service_name],
            )
        )

    @classmethod
    def from_agent_endpoint(cls, config: AgentEndpointDataSourceConfig) -> "DataSourceConfig":
        """Agent Endpoint データソース設定を作成します。"""
        return cls(agent_endpoint_config=config)

    @property
    def cloud_watch_logs_config(self) -> Optional[CloudWatchLogsDataSourceConfig]:
        return self._cloud_watch_logs_config

    @property
    def agent_endpoint_config(self) -> Optional[AgentEndpointDataSourceConfig]:
        return self._agent_endpoint_config

    def _render(self) -> Dict[str, Any]:
        """API 呼び出し用にデータソース設定をレンダリングします。"""
        if self._cloud_watch_logs_config is not None and self._agent_endpoint_config is not None:
            raise RenderError(
                "DataSourceConfig must have exactly one of a CloudWatch Logs or an Agent Endpoint configuration"
            )

        if self._cloud_watch_logs_config is not None:
            return {
                "cloudWatchLogs": {
                    "logGroupNames": list(self._cloud_watch_logs_config.log_group_names),
                    "serviceNames": list(self._cloud_watch_logs_config.service_names),
                },
            }

        if self._agent_endpoint_config is not None:
            return {
                "agentEndpoint": {
                    "agentRuntimeId": self._agent_endpoint_config.agent_runtime_id,
                    "endpointName": self._agent_endpoint_config.endpoint_name,
                },
            }

        raise RenderError("DataSourceConfig has neither a CloudWatch Logs nor an Agent Endpoint configuration")

    def _get_log_group_names(self) -> List[str]:
        """データソースのロググループ名を返します。"""
        if self._cloud_watch_logs_config is None:
            return []
        return list(self._cloud_watch_logs_config.log_group_names or [])
