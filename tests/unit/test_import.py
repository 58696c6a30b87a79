import pytest
from aws_cdk import aws_iam as iam
from aws_cdk.assertions import Match, Template

from agentcore_evaluation import (
    ConfigOrigin,
    EvaluationPerms,
    ImportedOnlineEvaluationConfig,
    OnlineEvaluationConfig,
    OnlineEvaluationConfigAttributes,
    UnscopedValidationError,
)

CONFIG_ARN = "arn:aws:bedrock-agentcore:us-east-1:123456789012:online-evaluation-config/my-config-id"
ROLE_ARN = "arn:aws:iam::123456789012:role/EvaluationRole"


class TestFromConfigId:
    """設定 ID からのインポートをテストする。"""

    def test_import(self, stack):
        imported = OnlineEvaluationConfig.from_config_id(stack, "Imported", "my-config-id")

        assert isinstance(imported, ImportedOnlineEvaluationConfig)
        assert imported.origin == ConfigOrigin.IMPORTED
        assert imported.config_id == "my-config-id"
        assert imported.config_name == "my-config-id"
        assert "my-config-id" in imported.config_arn
        assert "online-evaluation-config" in imported.config_arn

    def test_does_not_create_resources(self, stack):
        OnlineEvaluationConfig.from_config_id(stack, "Imported", "my-config-id")

        Template.from_stack(stack).resource_count_is(
            "Custom::BedrockAgentCoreOnlineEvaluationConfig", 0
        )


class TestFromConfigArn:
    """ARN からのインポートをテストする。"""

    def test_import(self, stack):
        """ARN の末尾から設定 ID を取り出すことをテストする。"""
        imported = OnlineEvaluationConfig.from_config_arn(stack, "Imported", CONFIG_ARN)

        assert imported.config_arn == CONFIG_ARN
        assert imported.config_id == "my-config-id"
        assert imported.config_name == "my-config-id"
        assert imported.origin == ConfigOrigin.IMPORTED

    def test_generated_attributes_are_unknown(self, stack):
        imported = OnlineEvaluationConfig.from_config_arn(stack, "Imported", CONFIG_ARN)

        assert imported.status is None
        assert imported.execution_status is None
        assert imported.execution_role is None
        assert isinstance(imported.grant_principal, iam.UnknownPrincipal)

    def test_arn_without_resource_name(self, stack):
        with pytest.raises(UnscopedValidationError):
            OnlineEvaluationConfig.from_config_arn(
                stack, "Imported", "arn:aws:bedrock-agentcore:us-east-1:123456789012:online-evaluation-config"
            )


class TestFromAttributes:
    """属性からのインポートをテストする。"""

    def test_with_execution_role(self, stack):
        imported = OnlineEvaluationConfig.from_attributes(stack, "Imported",
            OnlineEvaluationConfigAttributes(
                config_arn=CONFIG_ARN,
                config_id="my-config-id",
                config_name="my_config",
                execution_role_arn=ROLE_ARN,
            ),
        )

        assert imported.config_name == "my_config"
        assert imported.execution_role is not None
        assert imported.execution_role.role_arn == ROLE_ARN
        assert imported.grant_principal is imported.execution_role

    def test_grant_on_imported_config(self, stack):
        imported = OnlineEvaluationConfig.from_config_arn(stack, "Imported", CONFIG_ARN)
        grantee = iam.Role(stack, "Grantee", assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"))

        imported.grant_read(grantee)

        Template.from_stack(stack).has_resource_properties("AWS::IAM::Policy", {
            "PolicyDocument": {
                "Statement": Match.array_with([
                    Match.object_like({
                        "Action": list(EvaluationPerms.READ_PERMS),
                        "Resource": CONFIG_ARN,
                    }),
                ]),
            },
        })


class TestImportedMetrics:
    """インポートした設定のメトリクスをテストする。"""

    def test_metric_dimensions(self, stack):
        imported = OnlineEvaluationConfig.from_config_arn(stack, "Imported", CONFIG_ARN)

        metric = imported.metric_evaluation_count()

        assert metric.namespace == "AWS/Bedrock-AgentCore"
        assert metric.dimensions == {"OnlineEvaluationConfigId": "my-config-id"}
        assert metric.statistic == "Sum"
