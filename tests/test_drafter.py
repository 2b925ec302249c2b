"""Tests for issue validation and PR description drafting."""

import json
from unittest.mock import AsyncMock

import pytest

from compass.drafter import (
    GenerationError,
    InputError,
    IssueRequest,
    IssueValidator,
    PRRequest,
    PRWriter,
    load_requirements,
)
from compass.drafter.issue_validator import INVALID_REPO_MESSAGE, parse_report, strip_code_fences
from compass.drafter.prompts import DEFAULT_REQUIREMENTS, build_issue_prompt
from compass.llm.models import LLMResponse, TokenUsage
from compass.vcs.aggregator import ContextAggregator
from compass.vcs.models import EvidenceBundle


def _response(content: str) -> LLMResponse:
    return LLMResponse(
        content=content,
        usage=TokenUsage(input_tokens=1, output_tokens=1),
        model="test-model",
    )


@pytest.fixture
def issue_request():
    return IssueRequest(
        repo_link="https://github.com/acme/widget-api",
        title="App crashes when config is empty",
        description="Running with an empty config file raises KeyError.",
    )


@pytest.fixture
def validator(mock_llm_provider, mock_repo_source, sample_report_json):
    mock_llm_provider.generate = AsyncMock(return_value=_response(sample_report_json))
    return IssueValidator(mock_llm_provider, ContextAggregator(mock_repo_source))


# ---------------------------------------------------------------------------
# IssueValidator
# ---------------------------------------------------------------------------


class TestIssueValidatorInput:
    @pytest.mark.parametrize("field", ["repo_link", "title", "description"])
    async def test_missing_field_raises(self, validator, issue_request, field):
        request = issue_request.model_copy(update={field: ""})
        with pytest.raises(InputError, match="Missing required fields"):
            await validator.validate(request)
        validator.llm.generate.assert_not_awaited()

    async def test_invalid_repo_link(self, validator, issue_request, mock_repo_source):
        request = issue_request.model_copy(update={"repo_link": "not a url"})
        with pytest.raises(InputError) as exc_info:
            await validator.validate(request)
        assert str(exc_info.value) == INVALID_REPO_MESSAGE
        mock_repo_source.list_issues.assert_not_awaited()

    def test_input_error_is_value_error(self):
        assert issubclass(InputError, ValueError)


class TestIssueValidatorFlow:
    async def test_returns_report(self, validator, issue_request):
        report = await validator.validate(issue_request)
        assert report.status == "Potential Duplicate"
        assert report.related_issues[0].number == 42
        assert report.related_issues[0].relevance == "Related"

    async def test_prompt_carries_request_and_evidence(self, validator, issue_request):
        await validator.validate(issue_request)
        kwargs = validator.llm.generate.call_args.kwargs
        assert "App crashes when config is empty" in kwargs["user"]
        assert "https://github.com/acme/widget-api" in kwargs["user"]
        assert "- #42 [open] (Created: 2024-03-01) Crash on empty config" in kwargs["user"]
        assert "src/main.py" in kwargs["user"]
        assert "Friendly Open Source Mentor" in kwargs["system"]
        assert kwargs["max_tokens"] == 4096
        assert kwargs["json_mode"] is True

    async def test_fetches_named_repository(self, validator, issue_request, mock_repo_source):
        await validator.validate(issue_request)
        ref = mock_repo_source.list_issues.call_args.args[0]
        assert ref.full_name == "acme/widget-api"

    async def test_source_failure_still_validates(
        self, mock_llm_provider, mock_repo_source, issue_request, sample_report_json
    ):
        mock_repo_source.list_issues = AsyncMock(side_effect=RuntimeError("API rate limit"))
        mock_llm_provider.generate = AsyncMock(return_value=_response(sample_report_json))
        validator = IssueValidator(mock_llm_provider, ContextAggregator(mock_repo_source))

        report = await validator.validate(issue_request)

        assert report.status == "Potential Duplicate"
        user = mock_llm_provider.generate.call_args.kwargs["user"]
        assert "Error fetching issues: API rate limit" in user

    async def test_fenced_json_accepted(self, validator, issue_request, sample_report_json):
        validator.llm.generate = AsyncMock(
            return_value=_response(f"```json\n{sample_report_json}\n```")
        )
        report = await validator.validate(issue_request)
        assert report.headline == "Issue Validation Report"

    async def test_llm_failure_raises_generation_error(self, validator, issue_request):
        validator.llm.generate = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        with pytest.raises(GenerationError, match="Failed to validate issue"):
            await validator.validate(issue_request)

    async def test_unparseable_output_raises_generation_error(self, validator, issue_request):
        validator.llm.generate = AsyncMock(return_value=_response("I think it is unique!"))
        with pytest.raises(GenerationError):
            await validator.validate(issue_request)


class TestReportParsing:
    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'

    def test_unknown_status_rejected(self):
        with pytest.raises(GenerationError):
            parse_report(json.dumps({"status": "Maybe"}))

    def test_defaults_filled(self):
        report = parse_report(json.dumps({"status": "Unique"}))
        assert report.related_issues == []
        assert report.headline == "Issue Validation Report"

    def test_issue_prompt_keeps_json_braces(self, issue_request):
        _, user = build_issue_prompt(
            issue_request, EvidenceBundle(issues_summary="none", tree_summary="README.md")
        )
        assert '"status": "Unique" | "Duplicate" | "Potential Duplicate"' in user
        assert "{{" not in user


# ---------------------------------------------------------------------------
# PRWriter
# ---------------------------------------------------------------------------


class TestPRWriterInput:
    async def test_nothing_provided_raises(self, mock_llm_provider):
        with pytest.raises(InputError, match="Missing required fields"):
            await PRWriter(mock_llm_provider).generate(PRRequest())
        mock_llm_provider.generate.assert_not_awaited()

    async def test_problem_without_changes_raises(self, mock_llm_provider):
        with pytest.raises(InputError):
            await PRWriter(mock_llm_provider).generate(PRRequest(problem="crash"))

    async def test_link_alone_is_enough(self, mock_llm_provider):
        request = PRRequest(pr_link="https://github.com/acme/widget-api/issues/42")
        result = await PRWriter(mock_llm_provider).generate(request)
        assert result.markdown.startswith("## 📌 Description")

    async def test_problem_and_changes_are_enough(self, mock_llm_provider):
        request = PRRequest(problem="crash", changes="guard empty config")
        result = await PRWriter(mock_llm_provider).generate(request)
        assert result.model == "test-model"


class TestPRWriterPrompt:
    async def test_defaults_fill_blank_fields(self, mock_llm_provider):
        await PRWriter(mock_llm_provider).generate(
            PRRequest(pr_link="https://github.com/acme/widget-api/issues/42")
        )
        user = mock_llm_provider.generate.call_args.kwargs["user"]
        assert "- Related Issue/PR Link: https://github.com/acme/widget-api/issues/42" in user
        assert "What problem does this change solve? Refer to the provided link if available" in user
        assert "How was this tested? Not specified" in user
        assert "known limitations? None" in user
        assert DEFAULT_REQUIREMENTS in user
        assert "Relates to https://github.com/acme/widget-api/issues/42" in user

    async def test_no_link_line_without_link(self, mock_llm_provider):
        await PRWriter(mock_llm_provider).generate(PRRequest(problem="p", changes="c"))
        user = mock_llm_provider.generate.call_args.kwargs["user"]
        assert "Related Issue/PR Link" not in user
        assert "json_mode" not in mock_llm_provider.generate.call_args.kwargs
        assert "placeholder like #issue-number" in user

    async def test_custom_requirements(self, mock_llm_provider):
        request = PRRequest(problem="p", changes="c", project_requirements="Sign your commits.")
        await PRWriter(mock_llm_provider).generate(request)
        user = mock_llm_provider.generate.call_args.kwargs["user"]
        assert "Sign your commits." in user
        assert DEFAULT_REQUIREMENTS not in user

    async def test_toggles_shape_sections(self, mock_llm_provider):
        request = PRRequest(
            problem="p", changes="c", structure={"checklist": False, "screenshots": False}
        )
        result = await PRWriter(mock_llm_provider).generate(request)
        user = mock_llm_provider.generate.call_args.kwargs["user"]

        keys = [s.key for s in result.sections]
        assert "checklist" not in keys
        assert "screenshots" not in keys
        assert "summary" in keys
        assert "Checklist" not in user
        assert "- ## 📝 Summary" in user

    async def test_legacy_toggle_names(self, mock_llm_provider):
        request = PRRequest(problem="p", changes="c", structure={"includeSummary": False})
        result = await PRWriter(mock_llm_provider).generate(request)
        assert "summary" not in [s.key for s in result.sections]

    async def test_llm_failure_raises_generation_error(self, mock_llm_provider):
        mock_llm_provider.generate = AsyncMock(side_effect=RuntimeError("bad key"))
        with pytest.raises(GenerationError, match="check your API key"):
            await PRWriter(mock_llm_provider).generate(PRRequest(problem="p", changes="c"))


class TestLoadRequirements:
    def test_reads_requirements_key(self, tmp_path):
        path = tmp_path / "pr_config.json"
        path.write_text(json.dumps({"requirements": "Add a changelog entry."}))
        assert load_requirements(path) == "Add a changelog entry."

    def test_missing_file_falls_back(self, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            assert load_requirements(tmp_path / "absent.json") == DEFAULT_REQUIREMENTS
        assert "using defaults" in caplog.text

    def test_bad_json_falls_back(self, tmp_path):
        path = tmp_path / "pr_config.json"
        path.write_text("{not json")
        assert load_requirements(path) == DEFAULT_REQUIREMENTS

    def test_missing_key_falls_back(self, tmp_path):
        path = tmp_path / "pr_config.json"
        path.write_text(json.dumps({"other": 1}))
        assert load_requirements(path) == DEFAULT_REQUIREMENTS

    def test_none_path(self):
        assert load_requirements(None) == DEFAULT_REQUIREMENTS
