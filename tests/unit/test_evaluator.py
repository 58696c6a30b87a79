import pytest

from agentcore_evaluation import (
    BuiltinEvaluator,
    EvaluatorReference,
    UnscopedValidationError,
)


class TestEvaluatorReference:
    """EvaluatorReference のテスト。"""

    def test_builtin_reference(self):
        """組み込み Evaluator の参照をテストする。"""
        evaluator = EvaluatorReference.builtin(BuiltinEvaluator.HELPFULNESS)

        assert evaluator.evaluator_id == "Builtin.Helpfulness"
        assert evaluator._render() == {"evaluatorId": "Builtin.Helpfulness"}

    @pytest.mark.parametrize(
        "evaluator, expected",
        [
            (BuiltinEvaluator.GOAL_SUCCESS_RATE, "Builtin.GoalSuccessRate"),
            (BuiltinEvaluator.HELPFULNESS, "Builtin.Helpfulness"),
            (BuiltinEvaluator.CORRECTNESS, "Builtin.Correctness"),
            (BuiltinEvaluator.FAITHFULNESS, "Builtin.Faithfulness"),
            (BuiltinEvaluator.HARMFULNESS, "Builtin.Harmfulness"),
            (BuiltinEvaluator.STEREOTYPING, "Builtin.Stereotyping"),
            (BuiltinEvaluator.REFUSAL, "Builtin.Refusal"),
            (BuiltinEvaluator.TOOL_SELECTION_ACCURACY, "Builtin.ToolSelectionAccuracy"),
            (BuiltinEvaluator.TOOL_PARAMETER_ACCURACY, "Builtin.ToolParameterAccuracy"),
            (BuiltinEvaluator.COHERENCE, "Builtin.Coherence"),
            (BuiltinEvaluator.RESPONSE_RELEVANCE, "Builtin.ResponseRelevance"),
            (BuiltinEvaluator.CONCISENESS, "Builtin.Conciseness"),
            (BuiltinEvaluator.INSTRUCTION_FOLLOWING, "Builtin.InstructionFollowing"),
        ],
    )
    def test_all_builtin_evaluators(self, evaluator, expected):
        """すべての組み込み Evaluator の ID をテストする。"""
        assert EvaluatorReference.builtin(evaluator)._render() == {"evaluatorId": expected}

    def test_builtin_count(self):
        assert len(BuiltinEvaluator) == 13

    def test_builtin_accepts_enum_value_string(self):
        evaluator = EvaluatorReference.builtin("Builtin.Refusal")
        assert evaluator.evaluator_id == "Builtin.Refusal"

    def test_builtin_rejects_unknown_value(self):
        with pytest.raises(ValueError):
            EvaluatorReference.builtin("Builtin.DoesNotExist")

    def test_custom_reference(self):
        """カスタム Evaluator の参照をテストする。"""
        evaluator = EvaluatorReference.custom("my-custom-evaluator-id")

        assert evaluator.evaluator_id == "my-custom-evaluator-id"
        assert evaluator._render() == {"evaluatorId": "my-custom-evaluator-id"}

    def test_custom_requires_id(self):
        with pytest.raises(UnscopedValidationError):
            EvaluatorReference.custom(None)

    def test_references_compare_by_id(self):
        assert EvaluatorReference.custom("Builtin.Helpfulness") == EvaluatorReference.builtin(
            BuiltinEvaluator.HELPFULNESS
        )
