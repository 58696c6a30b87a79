import pytest
from aws_cdk import Aws, Token

from agentcore_evaluation import (
    FilterConfig,
    FilterOperator,
    UnscopedValidationError,
    ValidationError,
)
from agentcore_evaluation.validation import (
    throw_if_invalid,
    validate_config_name,
    validate_description,
    validate_evaluators,
    validate_filters,
    validate_log_group_names,
    validate_sampling_percentage,
    validate_session_timeout,
)


def _filters(count):
    return [FilterConfig(key="test", operator=FilterOperator.EQUALS, value="value")] * count


class TestValidateConfigName:
    """設定名の検証のテスト。"""

    @pytest.mark.parametrize("name", ["a", "test_evaluation", "Eval_01", "a" * 48])
    def test_valid_names(self, name):
        assert validate_config_name(name) == []

    def test_starts_with_number(self):
        errors = validate_config_name("123invalid")
        assert len(errors) == 1
        assert "does not match required pattern" in errors[0]

    def test_hyphen_is_rejected(self):
        errors = validate_config_name("my-config")
        assert any("does not match required pattern" in e for e in errors)

    def test_too_long(self):
        errors = validate_config_name("a" * 49)
        assert "Configuration name must be at most 48 characters, got 49" in errors
        assert any("does not match required pattern" in e for e in errors)

    def test_empty(self):
        errors = validate_config_name("")
        assert "Configuration name must be at least 1 character(s), got 0" in errors

    @pytest.mark.parametrize("name", ["abc\n", "my_config\n"])
    def test_trailing_newline(self, name):
        """末尾の改行を含む名前が拒否されることをテストする。"""
        errors = validate_config_name(name)
        assert any("does not match required pattern" in e for e in errors)

    def test_none_is_skipped(self):
        assert validate_config_name(None) == []

    def test_unresolved_token_is_skipped(self):
        assert validate_config_name(Aws.STACK_NAME) == []


class TestValidateDescription:
    """説明文の検証のテスト。"""

    def test_max_length(self):
        assert validate_description("a" * 200) == []

    def test_too_long(self):
        assert validate_description("a" * 201) == [
            "Description must be at most 200 characters, got 201"
        ]

    def test_none_is_skipped(self):
        assert validate_description(None) == []


class TestValidateEvaluators:
    """Evaluator 数の検証のテスト。"""

    def test_empty(self):
        assert validate_evaluators([]) == ["At least 1 evaluator is required, got 0"]

    def test_too_many(self, helpfulness):
        assert validate_evaluators([helpfulness] * 11) == [
            "At most 10 evaluators are allowed, got 11"
        ]

    @pytest.mark.parametrize("count", [1, 5, 10])
    def test_valid_counts(self, helpfulness, count):
        assert validate_evaluators([helpfulness] * count) == []

    def test_none_is_required(self):
        assert validate_evaluators(None) == ["Evaluators array is required"]


class TestValidateSamplingPercentage:
    """サンプリング率の検証のテスト。"""

    @pytest.mark.parametrize("percentage", [0.01, 1, 10, 55.5, 100])
    def test_valid_range(self, percentage):
        assert validate_sampling_percentage(percentage) == []

    def test_too_low(self):
        errors = validate_sampling_percentage(0.001)
        assert errors == ["Sampling percentage must be at least 0.01, got 0.001"]

    def test_too_high(self):
        errors = validate_sampling_percentage(101)
        assert errors == ["Sampling percentage must be at most 100, got 101"]

    def test_unresolved_token_is_skipped(self):
        assert validate_sampling_percentage(Token.as_number(Aws.ACCOUNT_ID)) == []


class TestValidateFilters:
    """フィルター数の検証のテスト。"""

    @pytest.mark.parametrize("count", [0, 1, 5])
    def test_valid_counts(self, count):
        assert validate_filters(_filters(count)) == []

    def test_too_many(self):
        assert validate_filters(_filters(6)) == ["At most 5 filters are allowed, got 6"]

    def test_none_is_skipped(self):
        assert validate_filters(None) == []


class TestValidateSessionTimeout:
    """セッションタイムアウトの検証のテスト。"""

    @pytest.mark.parametrize("minutes", [1, 15, 1440])
    def test_valid_range(self, minutes):
        assert validate_session_timeout(minutes) == []

    def test_too_low(self):
        assert validate_session_timeout(0) == [
            "Session timeout must be at least 1 minute(s), got 0"
        ]

    def test_too_high(self):
        assert validate_session_timeout(1441) == [
            "Session timeout must be at most 1440 minutes, got 1441"
        ]


class TestValidateLogGroupNames:
    """ロググループ数の検証のテスト。"""

    def test_valid(self):
        assert validate_log_group_names(["/g1", "/g2"]) == []

    def test_empty(self):
        assert validate_log_group_names([]) == ["At least 1 log group name is required, got 0"]

    def test_too_many(self):
        names = [f"/g{i}" for i in range(6)]
        assert validate_log_group_names(names) == [
            "At most 5 log group names are allowed, got 6"
        ]

    def test_none_is_required(self):
        assert validate_log_group_names(None) == ["Log group names array is required"]


class TestThrowIfInvalid:
    """throw_if_invalid のテスト。"""

    def test_returns_valid_value(self):
        assert throw_if_invalid(validate_session_timeout, 30) == 30

    def test_unscoped_error(self):
        with pytest.raises(UnscopedValidationError, match="at most 1440 minutes"):
            throw_if_invalid(validate_session_timeout, 2000)

    def test_scoped_error_keeps_construct_path(self, stack):
        with pytest.raises(ValidationError) as exc_info:
            throw_if_invalid(validate_description, "a" * 300, stack)

        assert exc_info.value.construct_path == stack.node.path

    def test_messages_are_joined_with_newlines(self):
        with pytest.raises(UnscopedValidationError) as exc_info:
            throw_if_invalid(validate_config_name, "9" * 60)

        lines = str(exc_info.value).split("\n")
        assert len(lines) == 2
        assert lines[0] == "Configuration name must be at most 48 characters, got 60"
