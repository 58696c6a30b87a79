"""実行コンテキスト（アカウント・リージョン・パーティション）と ARN の組み立て。

ARN を組み立てる関数はすべて ExecutionContext を明示的に受け取ります。
"""

from dataclasses import dataclass

from aws_cdk import Arn, ArnComponents, ArnFormat, Stack
from constructs import IConstruct

from .errors import UnscopedValidationError

AGENTCORE_SERVICE = "bedrock-agentcore"
ONLINE_EVALUATION_CONFIG_RESOURCE = "online-evaluation-config"
EVALUATOR_RESOURCE = "evaluator"


@dataclass(frozen=True)
class ExecutionContext:
    """ARN やメトリクスの組み立てに使用するデプロイ先の情報。"""

    account: str
    region: str
    partition: str

    @classmethod
    def from_scope(cls, scope: IConstruct) -> "ExecutionContext":
        """スコープが属するスタックからコンテキストを作成します。"""
        stack = Stack.of(scope)
        return cls(account=stack.account, region=stack.region, partition=stack.partition)


def _format(ctx: ExecutionContext, **components) -> str:
    components.setdefault("partition", ctx.partition)
    components.setdefault("region", ctx.region)
    components.setdefault("account", ctx.account)
    return Arn.format(ArnComponents(**components))


def online_evaluation_config_arn(ctx: ExecutionContext, config_id: str) -> str:
    return _format(
        ctx,
        service=AGENTCORE_SERVICE,
        resource=ONLINE_EVALUATION_CONFIG_RESOURCE,
        resource_name=config_id,
    )


def evaluator_arn(ctx: ExecutionContext, evaluator_name: str) -> str:
    return _format(
        ctx,
        service=AGENTCORE_SERVICE,
        resource=EVALUATOR_RESOURCE,
        resource_name=evaluator_name,
    )


def log_group_arn(ctx: ExecutionContext, log_group_name: str) -> str:
    """`arn:...:logs:<region>:<account>:log-group:<name>` 形式の ARN を返します。"""
    return _format(
        ctx,
        service="logs",
        resource="log-group",
        resource_name=log_group_name,
        arn_format=ArnFormat.COLON_RESOURCE_NAME,
    )


def foundation_model_arn(ctx: ExecutionContext) -> str:
    # foundation-model はリージョンがワイルドカード、アカウントが空
    return f"arn:{ctx.partition}:bedrock:*::foundation-model/*"


def inference_profile_arn(ctx: ExecutionContext) -> str:
    return _format(
        ctx,
        service="bedrock",
        resource="inference-profile",
        resource_name="*",
        region="*",
    )


def config_id_from_arn(config_arn: str) -> str:
    """オンライン評価設定の ARN から末尾のリソース名（設定 ID）を取り出します。"""
    resource_name = Arn.split(config_arn, ArnFormat.SLASH_RESOURCE_NAME).resource_name
    if not resource_name:
        raise UnscopedValidationError(
            f"Online evaluation config ARN has no resource name: {config_arn}"
        )
    return resource_name
