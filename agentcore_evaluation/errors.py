"""オンライン評価コンストラクトの例外。"""

from typing import Optional

from constructs import IConstruct


class OnlineEvaluationError(Exception):
    """オンライン評価コンストラクトの基底例外。"""

    pass


class ValidationError(OnlineEvaluationError):
    """コンストラクトに紐づく設定値の検証エラー。"""

    def __init__(self, message: str, scope: IConstruct):
        super().__init__(message)
        self.scope = scope
        self.construct_path: Optional[str] = scope.node.path


class UnscopedValidationError(OnlineEvaluationError):
    """コンストラクトに紐づかない設定値の検証エラー。"""

    pass


class RenderError(OnlineEvaluationError):
    """API パラメータへのレンダリングに失敗した場合に発生する例外（内部不具合）。"""

    pass
