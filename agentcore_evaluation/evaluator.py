"""オンライン評価で使用する Evaluator への参照。"""

from typing import Dict, Union

from .errors import UnscopedValidationError
from .evaluation_types import BuiltinEvaluator


class EvaluatorReference:
    """オンライン評価用の Evaluator への参照。

    ファクトリメソッドを使用して作成します:
    - `EvaluatorReference.builtin()` 組み込み Evaluator
    - `EvaluatorReference.custom()` カスタム Evaluator

    Example:
        helpfulness = EvaluatorReference.builtin(BuiltinEvaluator.HELPFULNESS)
        custom_eval = EvaluatorReference.custom("my-custom-evaluator-id")
    """

    __slots__ = ("_evaluator_id",)

    def __init__(self, evaluator_id: str):
        self._evaluator_id = evaluator_id

    @classmethod
    def builtin(cls, evaluator: Union[BuiltinEvaluator, str]) -> "EvaluatorReference":
        """組み込み Evaluator への参照を作成します。"""
        return cls(BuiltinEvaluator(evaluator).value)

    @classmethod
    def custom(cls, evaluator_id: str) -> "EvaluatorReference":
        """カスタム Evaluator への参照を作成します。

        Args:
            evaluator_id: カスタム Evaluator の一意な識別子

        Raises:
            UnscopedValidationError: evaluator_id が None の場合
        """
        if evaluator_id is None:
            raise UnscopedValidationError("Custom evaluator id is required")
        return cls(evaluator_id)

    @property
    def evaluator_id(self) -> str:
        return self._evaluator_id

    def _render(self) -> Dict[str, str]:
        """API 呼び出し用に Evaluator 参照をレンダリングします。"""
        return {"evaluatorId": self._evaluator_id}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluatorReference):
            return NotImplemented
        return self._evaluator_id == other._evaluator_id

    def __hash__(self) -> int:
        return hash(self._evaluator_id)

    def __repr__(self) -> str:
        return f"EvaluatorReference({self._evaluator_id!r})"
