"""Prompt templates for issue validation and PR descriptions."""

from __future__ import annotations

from compass.drafter.models import IssueRequest, PRRequest
from compass.vcs.models import EvidenceBundle

DEFAULT_REQUIREMENTS = "Follow standard professional open-source PR practices."

ISSUE_SYSTEM_PROMPT = """\
You are a **Friendly Open Source Mentor and Guide**.

**Goal:** Help the user (who might be a beginner) check if their issue is unique. \
Your tone should be encouraging, clear, and easy to understand.\
"""

ISSUE_USER_TEMPLATE = """\
**Input Details:**
1. **Repository:** {repo_link}
2. **Proposed Title:** {title}
3. **Proposed Description:** {description}

**Project Context (Files):**
{tree_summary}

**Existing Issues (Open & Closed):**
{issues_summary}

**Analysis Required:**
1. **Uniqueness Check:**
   - Read the proposed issue and compare it with existing ones.
   - Is it unique? Is it a duplicate? Explain gently.

2. **Related Issues:**
   - Find any similar or related issues so the user can learn from them.

3. **Code Context:**
   - Does the issue mention existing files?

**Output Format:**
Return a JSON object (WITHOUT Markdown) with this structure:
{{
    "status": "Unique" | "Duplicate" | "Potential Duplicate",
    "headline": "Issue Validation Report",
    "uniqueness_feedback": "Write a friendly, paragraph-style explanation. Use <b>bold</b> \
for important terms. If the issue is unique, say something encouraging! If it's a \
duplicate, explain clearly why.",
    "related_issues": [
        {{ "number": 123, "title": "Example Issue", "status": "open|closed", \
"date": "YYYY-MM-DD", "relevance": "Exact Duplicate" | "Related" }}
    ],
    "project_context_feedback": "Simple, non-technical check. Use <b>bold</b> for file names found."
}}\
"""

PR_SYSTEM_PROMPT = """\
You are an expert open-source maintainer and technical writer. Generate a \
professional, clear, and structured Pull Request (PR) description in \
GitHub-flavored Markdown based on the user input.\
"""

PR_USER_TEMPLATE = """\
User Input:
{link_line}- What problem does this change solve? {problem}
- What did you change? {changes}
- How was this tested? {testing}
- Are there any breaking changes or known limitations? {limitations}

Project PR Requirements/Guidelines:
{requirements}

Task:
Generate a structured PR description in Markdown.
Use the following sections ONLY (and add emojis for a modern feel). Do NOT include \
any sections that are not listed below:
{sections}

Make the tone professional yet welcoming. Ensure the Markdown is well-formatted.\
"""

_REFER_TO_LINK = "Refer to the provided link if available"


def build_issue_prompt(request: IssueRequest, evidence: EvidenceBundle) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for issue validation."""
    user = ISSUE_USER_TEMPLATE.format(
        repo_link=request.repo_link,
        title=request.title,
        description=request.description,
        tree_summary=evidence.tree_summary,
        issues_summary=evidence.issues_summary,
    )
    return ISSUE_SYSTEM_PROMPT, user


def build_pr_prompt(request: PRRequest, sections: str) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for a PR description."""
    link_line = f"- Related Issue/PR Link: {request.pr_link}\n" if request.pr_link else ""
    user = PR_USER_TEMPLATE.format(
        link_line=link_line,
        problem=request.problem or _REFER_TO_LINK,
        changes=request.changes or _REFER_TO_LINK,
        testing=request.testing or "Not specified",
        limitations=request.limitations or "None",
        requirements=request.project_requirements or DEFAULT_REQUIREMENTS,
        sections=sections,
    )
    return PR_SYSTEM_PROMPT, user
