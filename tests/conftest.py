import pytest
from aws_cdk import App, Environment, Stack

from agentcore_evaluation import (
    BuiltinEvaluator,
    CloudWatchLogsDataSourceConfig,
    DataSourceConfig,
    EvaluatorReference,
)

TEST_ACCOUNT = "123456789012"
TEST_REGION = "us-east-1"


@pytest.fixture
def app():
    """テスト用の CDK App を作成する。"""
    return App()


@pytest.fixture
def stack(app):
    """アカウントとリージョンを固定したテスト用スタックを作成する。"""
    return Stack(app, "TestStack", env=Environment(account=TEST_ACCOUNT, region=TEST_REGION))


@pytest.fixture
def data_source():
    """CloudWatch Logs データソースを作成する。"""
    return DataSourceConfig.from_cloud_watch_logs(
        CloudWatchLogsDataSourceConfig(
            log_group_names=["/aws/log-group"],
            service_names=["service"],
        )
    )


@pytest.fixture
def helpfulness():
    return EvaluatorReference.builtin(BuiltinEvaluator.HELPFULNESS)
