"""オンライン評価設定用の IAM 権限定数。"""


class EvaluationPerms:
    """オンライン評価設定に関連する IAM アクションのグループ。"""

    # オンライン評価設定の管理（CRUD）
    ADMIN_PERMS = (
        "bedrock-agentcore:CreateOnlineEvaluationConfig",
        "bedrock-agentcore:GetOnlineEvaluationConfig",
        "bedrock-agentcore:UpdateOnlineEvaluationConfig",
        "bedrock-agentcore:DeleteOnlineEvaluationConfig",
        "bedrock-agentcore:ListOnlineEvaluationConfigs",
    )

    READ_PERMS = (
        "bedrock-agentcore:GetOnlineEvaluationConfig",
        "bedrock-agentcore:ListOnlineEvaluationConfigs",
    )

    # 実行ロールがエージェントのトレースを読み取るための権限
    CLOUDWATCH_LOGS_READ_PERMS = (
        "logs:DescribeLogGroups",
        "logs:GetQueryResults",
        "logs:StartQuery",
    )

    # 実行ロールが評価結果を書き込むための権限
    CLOUDWATCH_LOGS_WRITE_PERMS = (
        "logs:CreateLogGroup",
        "logs:CreateLogStream",
        "logs:PutLogEvents",
    )

    CLOUDWATCH_INDEX_POLICY_PERMS = (
        "logs:DescribeIndexPolicies",
        "logs:PutIndexPolicy",
    )

    BEDROCK_MODEL_PERMS = (
        "bedrock:InvokeModel",
        "bedrock:InvokeModelWithResponseStream",
    )
