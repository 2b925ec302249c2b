"""Shared test fixtures for Compass."""

import json
from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock

from compass.config.models import CompassConfig, VCSConfig
from compass.llm.base import LLMProvider
from compass.llm.models import LLMConfig as LLMRuntimeConfig, LLMResponse, TokenUsage
from compass.vcs.base import RepoSource
from compass.vcs.models import RepoRef


@pytest.fixture
def sample_ref():
    return RepoRef(owner="acme", name="widget-api")


@pytest.fixture
def sample_issues():
    """Raw issue payloads as a RepoSource returns them."""
    return [
        {
            "number": 42,
            "state": "open",
            "created_at": datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc),
            "title": "Crash on empty config",
            "body": "Steps:\n1. delete config\n2. run",
        },
        {
            "number": 17,
            "state": "closed",
            "created_at": "2023-11-20T08:00:00Z",
            "title": "Add dark mode",
            "body": None,
        },
    ]


@pytest.fixture
def sample_tree():
    """Mix of blobs and trees in upstream order."""
    return [
        {"path": "src", "type": "tree"},
        {"path": "src/main.py", "type": "blob"},
        {"path": "README.md", "type": "blob"},
        {"path": "docs", "type": "tree"},
        {"path": "docs/guide.md", "type": "blob"},
    ]


@pytest.fixture
def mock_repo_source(sample_issues, sample_tree):
    source = MagicMock(spec=RepoSource)
    source.list_issues = AsyncMock(return_value=sample_issues)
    source.get_tree = AsyncMock(return_value=sample_tree)
    return source


@pytest.fixture
def sample_report_json():
    return json.dumps(
        {
            "status": "Potential Duplicate",
            "headline": "Issue Validation Report",
            "uniqueness_feedback": "This looks close to <b>#42</b>.",
            "related_issues": [
                {
                    "number": 42,
                    "title": "Crash on empty config",
                    "status": "open",
                    "date": "2024-03-01",
                    "relevance": "Related",
                }
            ],
            "project_context_feedback": "Mentions <b>src/main.py</b>.",
        }
    )


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMRuntimeConfig(provider="google", model="test-model")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content="## 📌 Description\nGenerated PR description.",
            usage=TokenUsage(input_tokens=100, output_tokens=250),
            model="test-model",
        )
    )
    return provider


@pytest.fixture
def vcs_config():
    return VCSConfig()


@pytest.fixture
def sample_config():
    return CompassConfig()
