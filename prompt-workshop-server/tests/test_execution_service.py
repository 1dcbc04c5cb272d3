"""Tests for the completion invoker, fallback results and the execution service."""
import asyncio

import pytest

from conftest import ScriptedCompletion
from workshop.infrastructure.completion import (
    CompletionError,
    CompletionTimeoutError,
    PermanentExecutionError,
    TransientExecutionError,
    is_transient_error,
)
from workshop.modules.executions.fallback import FALLBACK_MARKER, build_fallback_result, is_fallback_result
from workshop.modules.executions.invoker import CompletionInvoker
from workshop.modules.executions.models import InvocationOutcome, RetryPolicy
from workshop.modules.executions.service import ExecutionService
from workshop.modules.prompts.exceptions import MissingRequiredVariablesError, PromptNotFoundError
from workshop.modules.prompts.models import PromptVariable


class TestTransientClassification:
    """Test error classification."""

    @pytest.mark.parametrize(
        "error",
        [
            Exception("Rate limit exceeded"),
            Exception("request was throttled"),
            Exception("upstream returned 503"),
            Exception("Gateway Timeout"),
            CompletionError("server error", status_code=500),
            TransientExecutionError("anything"),
        ],
    )
    def test_transient(self, error):
        """Test that throttling, gateway and timeout signals are transient."""
        assert is_transient_error(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            Exception("invalid api key"),
            CompletionError("bad request", status_code=400),
            PermanentExecutionError("rate limit in message but classified permanent"),
        ],
    )
    def test_permanent(self, error):
        """Test that other failures are permanent."""
        assert is_transient_error(error) is False


class TestCompletionInvoker:
    """Test retry, timeout and degradation behaviour."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, recording_sleep):
        """Test a plain successful call."""
        invoker = CompletionInvoker(ScriptedCompletion("done"), sleep=recording_sleep)
        result = await invoker.invoke("text")

        assert result.outcome is InvocationOutcome.SUCCEEDED
        assert result.text == "done"
        assert result.attempts == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_transient_errors_back_off_exponentially(self, recording_sleep):
        """Test delays of 1s, 2s and 4s across four attempts."""
        client = ScriptedCompletion(Exception("Rate limit exceeded"))
        invoker = CompletionInvoker(client, RetryPolicy(), sleep=recording_sleep)

        result = await invoker.invoke("text")

        assert result.outcome is InvocationOutcome.RETRIES_EXHAUSTED
        assert result.text is None
        assert result.attempts == 4
        assert len(client.calls) == 4
        assert recording_sleep.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_recovers_after_transient_error(self, recording_sleep):
        """Test that a later success ends the retry loop."""
        client = ScriptedCompletion(Exception("HTTP 429"), "second time lucky")
        result = await CompletionInvoker(client, sleep=recording_sleep).invoke("text")

        assert result.outcome is InvocationOutcome.SUCCEEDED
        assert result.text == "second time lucky"
        assert result.attempts == 2
        assert recording_sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_permanent_error_is_not_retried(self, recording_sleep):
        """Test that a permanent failure degrades after one attempt."""
        client = ScriptedCompletion(PermanentExecutionError("invalid api key", status_code=401))
        result = await CompletionInvoker(client, sleep=recording_sleep).invoke("text")

        assert result.outcome is InvocationOutcome.FAILED
        assert result.attempts == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_timeout_is_not_retried(self, recording_sleep):
        """Test that a timeout ends the invocation immediately."""
        client = ScriptedCompletion(CompletionTimeoutError("slow"))
        result = await CompletionInvoker(client, sleep=recording_sleep).invoke("text")

        assert result.outcome is InvocationOutcome.TIMED_OUT
        assert result.attempts == 1
        assert len(client.calls) == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_overall_timeout_bounds_each_attempt(self, recording_sleep):
        """Test that a hanging provider is cut off by the invoker's own timeout."""

        class Hanging:
            async def complete(self, text, timeout=None):
                await asyncio.sleep(10)
                return "never"

        result = await CompletionInvoker(Hanging(), timeout=0.01, sleep=recording_sleep).invoke("text")
        assert result.outcome is InvocationOutcome.TIMED_OUT

    @pytest.mark.asyncio
    async def test_no_client_is_unavailable(self):
        """Test that a missing provider short-circuits."""
        invoker = CompletionInvoker(None)
        result = await invoker.invoke("text")

        assert invoker.available is False
        assert result.outcome is InvocationOutcome.UNAVAILABLE
        assert result.attempts == 0

    def test_retry_policy_delays(self):
        """Test the backoff schedule for a custom policy."""
        policy = RetryPolicy(max_retries=2, base_delay=0.5, multiplier=3)
        assert policy.max_attempts == 3
        assert [policy.delay_for(i) for i in range(2)] == [0.5, 1.5]


class TestFallbackResult:
    """Test deterministic stand-in results."""

    @pytest.mark.parametrize(
        "name,heading",
        [
            ("Code Review Assistant", "## Code Review Results"),
            ("PR review", "## Code Review Results"),
            ("Blog Post Generator", "# Sample Blog Post"),
            ("Write a tagline", "Here's your generated content"),
            ("Translate", "## Response to 'Translate'"),
        ],
    )
    def test_variant_by_name(self, name, heading):
        """Test that the template name picks the response shape."""
        result = build_fallback_result(name)
        assert result.startswith(heading)
        assert result.endswith(FALLBACK_MARKER)
        assert is_fallback_result(result)

    def test_deterministic(self):
        """Test that the same inputs give the same output."""
        first = build_fallback_result("Blog", InvocationOutcome.TIMED_OUT)
        assert first == build_fallback_result("Blog", InvocationOutcome.TIMED_OUT)
        assert "did not answer in time" in first

    def test_real_output_is_not_flagged(self):
        """Test that ordinary text is not mistaken for a fallback."""
        assert is_fallback_result("A genuine answer") is False
        assert is_fallback_result(None) is False


class TestExecutionService:
    """Test the end-to-end execution flow."""

    @pytest.fixture
    def template(self, prompt_repo):
        return prompt_repo.seed(
            "Code Review Assistant",
            "Review this {{language}} code:\n{{code}}",
            [
                PromptVariable(name="language", required=True),
                PromptVariable(name="code", required=True),
                PromptVariable(name="focus"),
            ],
        )

    @pytest.mark.asyncio
    async def test_missing_required_variables_are_all_listed(self, prompt_repo, execution_repo, template):
        """Test that every missing required variable is reported and nothing is recorded."""
        client = ScriptedCompletion("unused")
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(client))

        with pytest.raises(MissingRequiredVariablesError) as excinfo:
            await service.execute(template.id, {"name": "required"})

        assert excinfo.value.missing == ["language", "code"]
        assert "language" in str(excinfo.value) and "code" in str(excinfo.value)
        assert client.calls == []
        assert execution_repo.records == []

    @pytest.mark.asyncio
    async def test_presence_is_enough(self, prompt_repo, execution_repo, template):
        """Test that an empty value still counts as supplied."""
        client = ScriptedCompletion("ok")
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(client))

        record = await service.execute(template.id, {"language": "", "code": None})

        assert record.status == "succeeded"
        assert client.calls == ["Review this  code:\n"]

    @pytest.mark.asyncio
    async def test_successful_execution_records_model_output(self, prompt_repo, execution_repo, template):
        """Test that the rendered text is sent and the reply is recorded."""
        client = ScriptedCompletion("Looks good")
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(client))

        record = await service.execute(template.id, {"language": "Python", "code": "print(1)"})

        assert client.calls == ["Review this Python code:\nprint(1)"]
        assert record.result == "Looks good"
        assert record.status == "succeeded"
        assert record.attempts == 1
        assert record.is_fallback is False
        assert execution_repo.records == [record]

    @pytest.mark.asyncio
    async def test_persistent_rate_limit_still_records_one_fallback(
        self, prompt_repo, execution_repo, template, recording_sleep
    ):
        """Test that exhausting retries degrades to exactly one fallback record."""
        client = ScriptedCompletion(Exception("Rate limit exceeded (429)"))
        invoker = CompletionInvoker(client, RetryPolicy(), sleep=recording_sleep)
        service = ExecutionService(prompt_repo, execution_repo, invoker)

        record = await service.execute(template.id, {"language": "Go", "code": "x := 1"})

        assert len(client.calls) == 4
        assert recording_sleep.delays == [1.0, 2.0, 4.0]
        assert len(execution_repo.records) == 1
        assert record.status == "retries_exhausted"
        assert record.attempts == 4
        assert record.result.endswith(FALLBACK_MARKER)
        assert record.result.startswith("## Code Review Results")
        assert record.is_fallback is True

    @pytest.mark.asyncio
    async def test_unconfigured_provider_records_fallback(self, prompt_repo, execution_repo, template):
        """Test that executions never fail when no provider is configured."""
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(None))

        record = await service.execute(template.id, {"language": "Go", "code": "x"})

        assert record.status == "unavailable"
        assert record.attempts == 0
        assert is_fallback_result(record.result)
        assert record.variables == {"language": "Go", "code": "x"}

    @pytest.mark.asyncio
    async def test_unknown_template(self, prompt_repo, execution_repo):
        """Test that executing a missing template raises not found."""
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(None))
        with pytest.raises(PromptNotFoundError):
            await service.execute("missing", {})
        assert execution_repo.records == []

    @pytest.mark.asyncio
    async def test_history_newest_first(self, prompt_repo, execution_repo, template):
        """Test that execution history lists the latest run first."""
        service = ExecutionService(prompt_repo, execution_repo, CompletionInvoker(ScriptedCompletion("a", "b")))
        first = await service.execute(template.id, {"language": "Go", "code": "1"})
        second = await service.execute(template.id, {"language": "Go", "code": "2"})

        history = await service.list_executions(template.id)
        assert [record.id for record in history] == [second.id, first.id]
        assert [record.id for record in await service.list_executions(template.id, limit=1)] == [second.id]

    @pytest.mark.asyncio
    async def test_timeout_records_one_fallback(self, prompt_repo, execution_repo, template, recording_sleep):
        """Test that a provider that never answers yields one timed-out fallback record."""

        class SlowCompletion:
            calls = 0

            async def complete(self, text, timeout=None):
                SlowCompletion.calls += 1
                await asyncio.sleep(5)
                return "too late"

        invoker = CompletionInvoker(SlowCompletion(), timeout=0.05, sleep=recording_sleep)
        service = ExecutionService(prompt_repo, execution_repo, invoker)

        record = await service.execute(template.id, {"language": "Go", "code": "x"})

        assert SlowCompletion.calls == 1
        assert recording_sleep.delays == []
        assert execution_repo.records == [record]
        assert record.status == "timed_out"
        assert record.attempts == 1
        assert is_fallback_result(record.result)

    @pytest.mark.asyncio
    async def test_permanent_failure_records_one_fallback(
        self, prompt_repo, execution_repo, template, recording_sleep
    ):
        """Test that a non-transient error is not retried and yields one fallback record."""
        client = ScriptedCompletion(PermanentExecutionError("invalid api key", status_code=401))
        invoker = CompletionInvoker(client, sleep=recording_sleep)
        service = ExecutionService(prompt_repo, execution_repo, invoker)

        record = await service.execute(template.id, {"language": "Go", "code": "x"})

        assert len(client.calls) == 1
        assert recording_sleep.delays == []
        assert execution_repo.records == [record]
        assert record.status == "failed"
        assert record.attempts == 1
        assert is_fallback_result(record.result)
