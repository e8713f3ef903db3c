"""Tests for the list/show commands and the click CLI."""

import asyncio

import pytest
from click.testing import CliRunner

from conftest import InMemoryGateway, make_article
from prismic_reader import cli as cli_module
from prismic_reader.commands import list_articles as list_cmd
from prismic_reader.commands import show_article as show_cmd
from prismic_reader.core.errors import FetchFailure, NotFound


@pytest.fixture
def fake_context(monkeypatch, blog):
    """Route both commands to the in-memory blog instead of Prismic."""

    class FakeContext:
        def __init__(self, config_path=None):
            self.gateway = blog
            self.document_type = "posts"
            self.page_size = 2

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            pass

    monkeypatch.setattr(list_cmd, "CommandContext", FakeContext)
    monkeypatch.setattr(show_cmd, "CommandContext", FakeContext)
    return blog


def test_build_view_combines_detail_navigation_and_reading_time(blog):
    view = asyncio.run(show_cmd.build_view(blog, "post-3"))

    assert view.detail.id == "post-3"
    assert view.navigation.previous.id == "post-2"
    assert view.navigation.next.id == "post-4"
    # 450 words at 200 words/minute
    assert view.reading_minutes == 3
    assert not view.preview


def test_build_view_shows_drafts_without_navigation_in_preview(blog):
    view = asyncio.run(show_cmd.build_view(blog, "draft", preview_ref="tok"))

    assert view.preview
    assert view.navigation.previous is None and view.navigation.next is None
    assert all(ref == "tok" for _, ref in blog.calls)


def test_build_view_treats_empty_preview_ref_as_published(blog):
    view = asyncio.run(show_cmd.build_view(blog, "post-3", preview_ref=""))

    assert view.preview is False
    assert "[preview mode]" not in "\n".join(show_cmd.render_lines(view))


def test_build_view_propagates_not_found(blog):
    with pytest.raises(NotFound):
        asyncio.run(show_cmd.build_view(blog, "post-404"))


def test_render_lines_includes_edit_note_and_links():
    article = make_article("edited", 10, title="Edited post", words=5, edited_minutes=70)
    gateway = InMemoryGateway([make_article("older", 5), article])

    lines = show_cmd.render_lines(asyncio.run(show_cmd.build_view(gateway, "edited")))

    assert lines[0] == "Edited post"
    assert "01 Mar 2021 | Author | 1 min" in lines
    assert "* edited on 01 Mar 2021, at 13:10" in lines
    assert "Previous post: Title older (older)" in lines
    assert not any(line.startswith("Next post") for line in lines)


def test_format_summary_marks_drafts():
    assert list_cmd.format_summary(make_article("d", None).summary()).startswith("draft | ")


def test_run_list_loads_requested_pages(fake_context):
    state = list_cmd.run("unused.yaml", pages=2)
    assert state.ids == ("post-5", "post-4", "post-3", "post-2")
    assert state.has_more

    state = list_cmd.run("unused.yaml", pages=None, page_size=3)
    assert len(state.items) == 5
    assert not state.has_more


def test_cli_list_all_prints_every_article(fake_context):
    result = CliRunner().invoke(cli_module.cli, ["--config", "unused.yaml", "list", "--all"])

    assert result.exit_code == 0, result.output
    assert "post-1" in result.output and "post-5" in result.output
    assert "5 article(s) listed" in result.output
    assert "more posts available" not in result.output


def test_cli_list_reports_remaining_pages(fake_context):
    result = CliRunner().invoke(cli_module.cli, ["--config", "unused.yaml", "list"])

    assert result.exit_code == 0, result.output
    assert "more posts available" in result.output


def test_cli_list_failure_exits_with_error(fake_context):
    fake_context.failures["type"] = FetchFailure("boom")

    result = CliRunner().invoke(cli_module.cli, ["--config", "unused.yaml", "list"])

    assert result.exit_code == 1
    assert "Listing failed: boom" in result.output


def test_cli_show_prints_article(fake_context):
    result = CliRunner().invoke(cli_module.cli, ["--config", "unused.yaml", "show", "post-1"])

    assert result.exit_code == 0, result.output
    assert "Title post-1" in result.output
    assert "Next post: Title post-2 (post-2)" in result.output
    assert "Previous post" not in result.output


def test_cli_show_missing_article_exits_with_error(fake_context):
    result = CliRunner().invoke(cli_module.cli, ["--config", "unused.yaml", "show", "nope"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_cli_status_validates_default_config(tmp_path, monkeypatch):
    monkeypatch.setenv("PRISMIC_READER_DATA_DIR", str(tmp_path / "data"))
    config_path = tmp_path / "config.yaml"

    result = CliRunner().invoke(cli_module.cli, ["--config", str(config_path), "status"])

    assert result.exit_code == 0, result.output
    assert "Configuration is valid" in result.output
    assert "Page size: 2" in result.output
