"""Tests for CLI dispatch."""

from unittest.mock import AsyncMock, patch

import pytest

from vidint import cli
from vidint.errors import OperationError


class TestUsage:
    @pytest.mark.parametrize("argv", [[], ["bogus"], ["analyze"], ["--help"]])
    def test_unknown_command_prints_usage(self, argv, capsys):
        with patch("vidint.cli.VideoIntelligenceClient") as client_cls, patch(
            "vidint.cli.run_command", new_callable=AsyncMock
        ) as run:
            assert cli.main(argv) == 0

        out = capsys.readouterr().out
        assert out == cli.USAGE
        assert "analyze_labels_local <local_path>" in out
        client_cls.assert_not_called()
        run.assert_not_called()


class TestMissingArgument:
    @pytest.mark.parametrize("argv", [["analyze_labels"], ["analyze_shots", "--timeout", "5"]])
    def test_command_without_path_prints_usage(self, argv, capsys):
        with patch("vidint.cli.run_command", new_callable=AsyncMock) as run:
            assert cli.main(argv) == 0

        assert capsys.readouterr().out == cli.USAGE
        run.assert_not_called()


class TestDispatch:
    @pytest.mark.parametrize("command", sorted(cli.COMMANDS))
    def test_known_commands(self, command):
        with patch("vidint.cli.run_command", new_callable=AsyncMock) as run:
            assert cli.main([command, "gs://bucket/video.mp4"]) == 0

        args = run.await_args.args[0]
        assert args.command == command
        assert args.path == "gs://bucket/video.mp4"
        assert args.timeout is None

    def test_timeout_option(self):
        with patch("vidint.cli.run_command", new_callable=AsyncMock) as run:
            cli.main(["analyze_shots", "gs://bucket/video.mp4", "--timeout", "90"])

        assert run.await_args.args[0].timeout == 90.0

    def test_error_exit_status(self, capsys):
        with patch(
            "vidint.cli.run_command",
            new_callable=AsyncMock,
            side_effect=OperationError("Invalid video"),
        ):
            assert cli.main(["analyze_faces", "gs://bucket/video.mp4"]) == 1

        assert "Error: Invalid video" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_run_command_uses_service(self):
        args = cli.build_parser().parse_args(["analyze_shots", "gs://bucket/video.mp4"])

        with patch("vidint.cli.VideoIntelligenceClient") as client_cls, patch.object(
            cli.VideoAnalysisService, "analyze_shots", new_callable=AsyncMock
        ) as analyze_shots:
            client_cls.return_value.__aenter__.return_value = client_cls.return_value
            await cli.run_command(args)

        client_cls.assert_called_once_with(max_poll_time=None)
        analyze_shots.assert_awaited_once()
        assert analyze_shots.await_args.args[-1] == "gs://bucket/video.mp4"
