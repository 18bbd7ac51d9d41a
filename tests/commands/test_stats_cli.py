"""Tests for stats CLI commands."""

from datetime import date, timedelta

from typer.testing import CliRunner

from worship_log.main import app

runner = CliRunner()


class TestStatsTopCommand:
    """Tests for 'stats top' command."""

    def test_top_ranks_repeated_songs(self, cli_env, seed):
        """Test that only repeated songs are ranked, most sung first."""
        seed(
            [
                {"id": "r1", "date": "2024-01-07", "songs": ["1 Alegria", "12 Santo"]},
                {"id": "r2", "date": "2024-01-14", "songs": ["12 Santo", "250 Grande"]},
                {"id": "r3", "date": "2024-01-21", "songs": ["12 Santo", "1 Alegria"]},
            ]
        )

        result = runner.invoke(app, ["stats", "top", "--config", str(cli_env["config_path"])])

        assert result.exit_code == 0
        assert "Most sung" in result.output
        assert result.output.index("12 Santo") < result.output.index("1 Alegria")
        assert "250 Grande" not in result.output
        assert "21/01/2024" in result.output

    def test_top_empty(self, cli_env, seed):
        """Test output when no song repeats."""
        seed([{"id": "r1", "date": "2024-01-07", "songs": ["1 Alegria"]}])

        result = runner.invoke(app, ["stats", "top", "--config", str(cli_env["config_path"])])

        assert result.exit_code == 0
        assert "No song has been sung more than once yet." in result.output


class TestStatsSongCommand:
    """Tests for 'stats song' command."""

    def test_song_history(self, cli_env, seed):
        """Test a song's count and dates."""
        seed(
            [
                {"id": "r1", "date": "2024-01-07", "songs": ["1 Alegria"]},
                {"id": "r2", "date": "2024-02-11", "songs": ["1 Alegria"]},
            ]
        )

        result = runner.invoke(
            app, ["stats", "song", "1 Alegria", "--config", str(cli_env["config_path"])]
        )

        assert result.exit_code == 0
        assert "Times sung: 2" in result.output
        assert "07/01/2024" in result.output
        assert "11/02/2024" in result.output
        assert "days ago" not in result.output

    def test_song_recent_warning(self, cli_env, seed):
        """Test that a recently sung song shows a warning."""
        recent = (date.today() - timedelta(days=4)).isoformat()
        seed([{"id": "r1", "date": recent, "songs": ["1 Alegria"]}])

        result = runner.invoke(
            app, ["stats", "song", "1 Alegria", "--config", str(cli_env["config_path"])]
        )

        assert result.exit_code == 0
        assert "Sung 4 days ago" in result.output

    def test_song_never_sung(self, cli_env):
        """Test a song with no history."""
        result = runner.invoke(
            app, ["stats", "song", "12 Santo", "--config", str(cli_env["config_path"])]
        )

        assert result.exit_code == 0
        assert "'12 Santo' has never been sung." in result.output


class TestStatsUnplayedCommand:
    """Tests for 'stats unplayed' command."""

    def test_unplayed_by_section(self, cli_env, seed):
        """Test grouping and completion for both collections."""
        seed([{"id": "r1", "date": "2024-01-07", "songs": ["1 Alegria"]}])

        result = runner.invoke(app, ["stats", "unplayed", "--config", str(cli_env["config_path"])])

        assert result.exit_code == 0
        assert "Primary: 2 of 3 never sung (33% complete)" in result.output
        assert "(CIAS): 1 of 1 never sung (0% complete)" in result.output
        assert "1-100 (1)" in result.output
        assert "201-300 (1)" in result.output
        assert "CIAS 1-50 (1)" in result.output

    def test_unplayed_query(self, cli_env):
        """Test that the query narrows the listed songs only."""
        result = runner.invoke(
            app, ["stats", "unplayed", "--query", "santo", "--config", str(cli_env["config_path"])]
        )

        assert result.exit_code == 0
        assert "Primary: 3 of 3 never sung (0% complete)" in result.output
        assert "12 Santo" in result.output
        assert "250 Grande" not in result.output
        assert "No songs found" in result.output

    def test_unplayed_custom_sections(self, cli_env):
        """Test section ranges loaded from a sections file."""
        sections_path = cli_env["tmp_path"] / "sections.toml"
        sections_path.write_text(
            '[[primary]]\nname = "Low"\nmin = 1\nmax = 20\n', encoding="utf-8"
        )
        config_path = cli_env["config_path"]
        config_path.write_text(
            config_path.read_text(encoding="utf-8").replace(
                "[catalog]\n", f'[catalog]\nsections_path = "{sections_path}"\n'
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["stats", "unplayed", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Low (2)" in result.output
        assert "Other (1)" in result.output

    def test_unplayed_invalid_sections(self, cli_env):
        """Test that a malformed sections file fails."""
        sections_path = cli_env["tmp_path"] / "sections.toml"
        sections_path.write_text('[[primary]]\nname = "Bad"\nmin = 9\nmax = 1\n', encoding="utf-8")
        config_path = cli_env["config_path"]
        config_path.write_text(
            config_path.read_text(encoding="utf-8").replace(
                "[catalog]\n", f'[catalog]\nsections_path = "{sections_path}"\n'
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["stats", "unplayed", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Error loading sections" in result.output
