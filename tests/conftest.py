"""Shared fixtures: contributions page markup."""
import pytest


def contributions_page(commits=(), pull_requests=(), issues=()):
    """Build a contributions tab fragment.

    ``commits`` holds commit item texts; ``pull_requests`` and ``issues`` hold
    ``(project, title, href, state)`` tuples.
    """
    parts = ['<div class="contribution-activity-listing">']

    if commits:
        parts.append(f'<h3 class="conversation-list-heading">{len(commits)} commits</h3>')
        parts.append('<ul class="simple-conversation-list">')
        for text in commits:
            parts.append(f'<li><a href="/commits">{text}</a></li>')
        parts.append('</ul>')

    for heading, items in (
        (f"{len(pull_requests)} pull requests", pull_requests),
        (f"{len(issues)} issues reported", issues),
    ):
        if not items:
            continue
        parts.append(f'<h3 class="conversation-list-heading">{heading}</h3>')
        parts.append('<ul class="simple-conversation-list">')
        for project, title, href, state in items:
            parts.append(
                '<li>'
                f'<span class="state state-{state.lower()}">{state}</span>'
                f'<a class="title" href="{href}"><span class="cmeta">{project}</span> {title}</a>'
                '</li>'
            )
        parts.append('</ul>')

    parts.append('</div>')
    return "\n".join(parts)


@pytest.fixture
def page_builder():
    return contributions_page


@pytest.fixture
def sample_page():
    return contributions_page(
        commits=["Pushed 3 commits to acme/widgets", "Pushed 1 commit to acme/gadgets"],
        pull_requests=[("acme/widgets", "Fix bug", "/acme/widgets/pull/7", "Merged")],
        issues=[
            ("acme/gadgets", "Crash on start", "/acme/gadgets/issues/2", "Open"),
            ("acme/widgets", "Typo in docs", "/acme/widgets/issues/9", "Closed"),
        ],
    )
