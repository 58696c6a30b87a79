"""オンライン評価設定の共通インターフェースとインポート用の実装。

CDK で作成した設定（MANAGED）とインポートした設定（IMPORTED）は
同じ読み取り専用インターフェースを共有し、`origin` で区別されます。
"""

import logging
from typing import Any, Optional

import jsii
from aws_cdk import Resource
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_iam as iam
from constructs import Construct

from .context import ExecutionContext
from .evaluation_types import (
    METRIC_DIMENSION_CONFIG_ID,
    METRIC_NAMESPACE,
    ConfigOrigin,
    OnlineEvaluationConfigAttributes,
)
from .perms import EvaluationPerms

logger = logging.getLogger(__name__)


@jsii.implements(iam.IGrantable)
class OnlineEvaluationConfigBase(Resource):
    """CDK で作成した設定とインポートした設定の両方で有効なメソッドと属性を持つ基底クラス。"""

    def __init__(self, scope: Construct, construct_id: str, origin: ConfigOrigin):
        super().__init__(scope, construct_id)
        self._origin = origin
        self._context = ExecutionContext.from_scope(self)
        self._config_arn: Optional[str] = None
        self._config_id: Optional[str] = None
        self._config_name: Optional[str] = None
        self._execution_role: Optional[iam.IRole] = None
        self._status: Optional[str] = None
        self._execution_status: Optional[str] = None
        self._grant_principal: Optional[iam.IPrincipal] = None

    @property
    def origin(self) -> ConfigOrigin:
        return self._origin

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def config_arn(self) -> str:
        """オンライン評価設定の ARN。"""
        return self._config_arn

    @property
    def config_id(self) -> str:
        """オンライン評価設定の一意な識別子。"""
        return self._config_id

    @property
    def config_name(self) -> str:
        return self._config_name

    @property
    def execution_role(self) -> Optional[iam.IRole]:
        """評価用の IAM 実行ロール。"""
        return self._execution_role

    @property
    def status(self) -> Optional[str]:
        """ライフサイクルステータス（CREATING, ACTIVE, FAILED, DELETING）。インポート時は不明（None）。"""
        return self._status

    @property
    def execution_status(self) -> Optional[str]:
        """実行ステータス（ENABLED, DISABLED）。インポート時は不明（None）。"""
        return self._execution_status

    @property
    def grant_principal(self) -> iam.IPrincipal:
        return self._grant_principal

    # ------------------------------------------------------
    # 権限付与
    # ------------------------------------------------------

    def grant(self, grantee: iam.IGrantable, *actions: str) -> iam.Grant:
        """この設定に対するアクションを IAM プリンシパルに付与します。

        Args:
            grantee: 権限を付与する IAM プリンシパル
            actions: 付与するアクション

        Returns:
            付与された権限を表す IAM Grant
        """
        return iam.Grant.add_to_principal(
            grantee=grantee,
            actions=list(actions),
            resource_arns=[self.config_arn],
            scope=self,
        )

    def grant_admin(self, grantee: iam.IGrantable) -> iam.Grant:
        """この設定を管理する権限を付与します。"""
        return self.grant(grantee, *EvaluationPerms.ADMIN_PERMS)

    def grant_read(self, grantee: iam.IGrantable) -> iam.Grant:
        """この設定を読み取る権限を付与します。"""
        return self.grant(grantee, *EvaluationPerms.READ_PERMS)

    # ------------------------------------------------------
    # メトリクス
    # ------------------------------------------------------

    def metric(self, metric_name: str, **props: Any) -> cloudwatch.Metric:
        """この評価設定の名前付きメトリクスを返します。

        デフォルトでは 5 分間の平均です。`statistic` や `period` で変更できます。
        """
        metric_props = {
            "namespace": METRIC_NAMESPACE,
            "metric_name": metric_name,
            "dimensions_map": {METRIC_DIMENSION_CONFIG_ID: self.config_id},
            **props,
        }
        return self._configure_metric(metric_props)

    def metric_evaluation_count(self, **props: Any) -> cloudwatch.Metric:
        """実行された評価の総数のメトリクス。"""
        return self.metric("EvaluationCount", **{"statistic": cloudwatch.Stats.SUM, **props})

    def metric_evaluation_errors(self, **props: Any) -> cloudwatch.Metric:
        """評価エラーのメトリクス。"""
        return self.metric("EvaluationErrors", **{"statistic": cloudwatch.Stats.SUM, **props})

    def metric_evaluation_latency(self, **props: Any) -> cloudwatch.Metric:
        """評価レイテンシーのメトリクス。"""
        return self.metric("EvaluationLatency", **{"statistic": cloudwatch.Stats.AVERAGE, **props})

    def _configure_metric(self, props: dict) -> cloudwatch.Metric:
        props["region"] = props.get("region") or self._context.region
        props["account"] = props.get("account") or self._context.account
        return cloudwatch.Metric(**props)


class ImportedOnlineEvaluationConfig(OnlineEvaluationConfigBase):
    """既存のオンライン評価設定への参照。

    生成される属性（status, execution_status）は取得しないため None です。
    """

    def __init__(self, scope: Construct, construct_id: str, attrs: OnlineEvaluationConfigAttributes):
        super().__init__(scope, construct_id, ConfigOrigin.IMPORTED)
        self._config_arn = attrs.config_arn
        self._config_id = attrs.config_id
        self._config_name = attrs.config_name

        if attrs.execution_role_arn:
            self._execution_role = iam.Role.from_role_arn(
                scope, f"{construct_id}Role", attrs.execution_role_arn
            )
            self._grant_principal = self._execution_role
        else:
            # 実行ロールが不明な場合、権限付与は警告付きで無視される
            self._grant_principal = iam.UnknownPrincipal(resource=self)

        logger.debug(f"オンライン評価設定をインポートしました: {attrs.config_id}")
