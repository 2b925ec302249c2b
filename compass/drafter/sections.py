"""Section planning for PR descriptions."""

from __future__ import annotations

from typing import Any, Mapping

from compass.config.models import SectionToggles
from compass.drafter.models import Section

DEFAULT_TOGGLES = SectionToggles()

LINK_PLACEHOLDER = "placeholder like #issue-number"

# (key, title, emoji, guidance, toggle field or None for always-on)
_SECTION_RULES: list[tuple[str, str, str, str | None, str | None]] = [
    ("description", "Description", "📌", None, None),
    ("summary", "Summary", "📝", "a concise overview of what this PR achieves", "summary"),
    ("related_issue", "Related Issue", "🔗", None, "linked_issues"),
    (
        "type_of_change",
        "Type of Change",
        "🛠️",
        "include options like Bug fix, New feature, etc. with [x] for the relevant one",
        None,
    ),
    ("checklist", "Checklist", "✅", None, "checklist"),
    (
        "breaking_changes",
        "Breaking Changes",
        "⚠️",
        'list any breaking changes; if none, state "No breaking changes"',
        "breaking_changes",
    ),
    ("testing_details", "Testing Details", "🧪", None, None),
    ("screenshots", "Screenshots", "📸", "if applicable", "screenshots"),
    ("additional_notes", "Additional Notes", "💬", None, None),
]


def resolve_toggles(
    partial: SectionToggles | Mapping[str, Any] | None = None,
) -> SectionToggles:
    """Merge the fields a caller actually set over DEFAULT_TOGGLES."""
    if partial is None:
        return DEFAULT_TOGGLES
    if not isinstance(partial, SectionToggles):
        # None means unset, same as a missing key
        partial = SectionToggles.model_validate(
            {k: v for k, v in partial.items() if v is not None}
        )
    provided = partial.model_dump(exclude_unset=True)
    return DEFAULT_TOGGLES.model_copy(update=provided)


def plan_sections(
    toggles: SectionToggles | Mapping[str, Any] | None = None,
    reference_link: str | None = None,
) -> list[Section]:
    """Ordered sections for a PR description.

    Description, Type of Change, Testing Details and Additional Notes are
    always present; the rest follow their toggle.
    """
    resolved = resolve_toggles(toggles)
    plan: list[Section] = []
    for key, title, emoji, guidance, toggle in _SECTION_RULES:
        if toggle is not None and not getattr(resolved, toggle):
            continue
        if key == "related_issue":
            guidance = f"Relates to {reference_link}" if reference_link else LINK_PLACEHOLDER
        plan.append(Section(key=key, title=title, emoji=emoji, guidance=guidance))
    return plan


def render_sections(plan: list[Section]) -> str:
    """Render a plan as the bullet list embedded in the PR prompt."""
    lines = []
    for section in plan:
        line = f"- ## {section.emoji} {section.title}"
        if section.guidance:
            line += f" ({section.guidance})"
        lines.append(line)
    return "\n".join(lines)
