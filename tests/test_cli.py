"""
Unit tests for the CLI functionality
"""

import httpx
from click.testing import CliRunner
from unittest.mock import AsyncMock, patch
from hn_leaderboard.cli import main
from hn_leaderboard.config import FATAL_MESSAGE
from hn_leaderboard.fetchers import FetchError, HackerNewsAPI
from hn_leaderboard.models import CommenterEntry, HNItem, LeaderboardReport, RetryPolicy


def _report():
    return LeaderboardReport(
        stories=[
            HNItem(id=2, type="story", title="Second Article", score=200),
            HNItem(id=1, type="story", title="First Article", score=100),
        ],
        top_commenters=[CommenterEntry("alice", 3), CommenterEntry("bob", 1)],
        comment_count=4,
    )


class TestCLI:
    def setup_method(self):
        self.runner = CliRunner()
        # Keep the CLI from replacing the root logging handlers between tests
        self.logging_patcher = patch("hn_leaderboard.cli.setup_logging")
        self.logging_patcher.start()

    def teardown_method(self):
        self.logging_patcher.stop()

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_default_parameters(self, mock_collect):
        mock_collect.return_value = _report()

        result = self.runner.invoke(main)

        assert result.exit_code == 0
        kwargs = mock_collect.call_args.kwargs
        assert kwargs["story_limit"] == 30
        assert kwargs["commenter_limit"] == 10
        assert kwargs["policy"] == RetryPolicy(max_retries=3, retry_delay=1.5, slow_warning_after=8.0)
        assert "Getting stories..." in result.output

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_renders_both_tables(self, mock_collect):
        mock_collect.return_value = _report()

        result = self.runner.invoke(main)

        assert result.exit_code == 0
        assert "List of the top stories on hacker news right now." in result.output
        assert "List of all top commenters and their total comments across the top stories above." in result.output
        for header in ["Story title", "Score", "User name", "Total comments"]:
            assert header in result.output
        assert result.output.index("Second Article") < result.output.index("First Article")
        assert "alice" in result.output
        assert "200" in result.output

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_custom_options(self, mock_collect):
        mock_collect.return_value = _report()

        result = self.runner.invoke(
            main, ["-c", "5", "-t", "3", "--retries", "1", "--retry-delay", "0", "--slow-warning", "2"]
        )

        assert result.exit_code == 0
        kwargs = mock_collect.call_args.kwargs
        assert kwargs["story_limit"] == 5
        assert kwargs["commenter_limit"] == 3
        assert kwargs["policy"] == RetryPolicy(max_retries=1, retry_delay=0.0, slow_warning_after=2.0)

    def test_main_invalid_count_too_low(self):
        result = self.runner.invoke(main, ["--count", "0"])

        assert result.exit_code != 0
        assert "Invalid value for" in result.output

    def test_main_invalid_top_too_high(self):
        result = self.runner.invoke(main, ["--top", "101"])

        assert result.exit_code != 0
        assert "Invalid value for" in result.output

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_output_to_file(self, mock_collect):
        mock_collect.return_value = _report()

        with self.runner.isolated_filesystem():
            result = self.runner.invoke(main, ["--output", "leaderboard.txt"])

            assert result.exit_code == 0

            with open("leaderboard.txt", "r") as f:
                content = f.read()
                assert "Story title" in content
                assert "First Article" in content
                assert "Total comments" in content
                assert "alice" in content

        assert "First Article" not in result.output

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_fatal_error(self, mock_collect):
        mock_collect.side_effect = KeyError("score")

        result = self.runner.invoke(main)

        assert result.exit_code == 1
        assert FATAL_MESSAGE in result.output
        assert "KeyError('score')" in result.output
        assert "Story title" not in result.output

    @patch("hn_leaderboard.cli.collect_report", new_callable=AsyncMock)
    def test_main_fatal_after_fetch_errors(self, mock_collect):
        mock_collect.side_effect = FetchError("https://example.com", "Request failed")

        result = self.runner.invoke(main)

        assert result.exit_code == 1
        assert FATAL_MESSAGE in result.output
        assert "Request failed" in result.output

    def test_help_option(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Rank the top Hacker News stories" in result.output
        assert "--count" in result.output
        assert "--top" in result.output
        assert "--retries" in result.output


class TestCLIEndToEnd:
    def setup_method(self):
        self.runner = CliRunner()
        self.logging_patcher = patch("hn_leaderboard.cli.setup_logging")
        self.logging_patcher.start()

    def teardown_method(self):
        self.logging_patcher.stop()

    def _invoke(self, api_data, args=()):
        with patch("hn_leaderboard.leaderboard.HackerNewsAPI", lambda: HackerNewsAPI(transport=api_data.transport)):
            return self.runner.invoke(main, list(args))

    def test_tables_from_api(self, fake_hn, story_items):
        api_data = fake_hn(top_stories=[10, 20], items=story_items)

        result = self._invoke(api_data)

        assert result.exit_code == 0
        assert result.output.index("A story") < result.output.index("B story")
        assert "alice" in result.output
        assert "dave" in result.output
        # carol only wrote a deleted comment
        assert "carol" not in result.output

    def test_commenters_table_has_at_most_ten_rows(self, fake_hn):
        kids = list(range(100, 112))
        items = {1: {"id": 1, "type": "story", "title": "Busy", "score": 1, "kids": kids}}
        for i in kids:
            items[i] = {"id": i, "type": "comment", "by": f"user{i}"}
        api_data = fake_hn(top_stories=[1], items=items)

        result = self._invoke(api_data)

        assert result.exit_code == 0
        listed = [f"user{i}" for i in kids if f"user{i}" in result.output]
        assert listed == [f"user{i}" for i in range(100, 110)]

    def test_retries_then_gives_up(self, fake_hn):
        api_data = fake_hn(error=httpx.ConnectError("Network error"))

        result = self._invoke(api_data, ["--retry-delay", "0"])

        assert result.exit_code == 1
        assert "(1 out of 3)" in result.output
        assert "(3 out of 3)" in result.output
        assert "(4 out of 3)" not in result.output
        assert FATAL_MESSAGE in result.output
        assert len(api_data.requested) == 4
