"""
Unit tests for the command-line surface
"""
from unittest.mock import patch

from typer.testing import CliRunner

from catalog_importer.cli.app import app
from catalog_importer.config.settings import read_token
from catalog_importer.errors import IndexUnavailable, StageFailed
from catalog_importer.models.catalog import ImportReport
from catalog_importer.models.chart import ChartIndexEntry

runner = CliRunner()

INDEX = {
    "nginx": [
        ChartIndexEntry(name="nginx", version="2.0.0", url="https://c.test/nginx-2.0.0.tgz"),
        ChartIndexEntry(name="nginx", version="1.0.0", url="https://c.test/nginx-1.0.0.tgz"),
    ],
}


class TestReadToken:
    """Token file handling"""

    def test_strips_newline(self, tmp_path):
        path = tmp_path / "token"
        path.write_text("abc\n")
        assert read_token(path) == "abc"


class TestImportCommand:
    """catalog-import import"""

    def test_requires_server_and_repo(self):
        result = runner.invoke(app, ["import"])
        assert result.exit_code != 0

    def test_unreadable_token_file_exits_1(self, tmp_path, monkeypatch):
        from catalog_importer.config.settings import settings
        monkeypatch.setattr(settings, "token_file", tmp_path / "missing")
        result = runner.invoke(app, ["import", "--server", "https://ks.test", "--repo", "https://c.test"])
        assert result.exit_code == 1

    def test_token_file_fallback(self, tmp_path, monkeypatch):
        from catalog_importer.config.settings import settings
        path = tmp_path / "token"
        path.write_text("from-file\n")
        monkeypatch.setattr(settings, "token_file", path)

        with patch("catalog_importer.cli.commands.import_cmd.ImportPipeline") as pipeline_cls, \
                patch("catalog_importer.cli.commands.import_cmd.CatalogClient") as catalog_cls:
            pipeline_cls.return_value.run.return_value = ImportReport()
            result = runner.invoke(app, ["import", "--server", "https://ks.test", "--repo", "https://c.test"])

        assert result.exit_code == 0, result.output
        assert catalog_cls.call_args.args[1] == "from-file"
        config = pipeline_cls.call_args.args[0]
        assert config.limit == 1

    def test_fatal_error_exits_1(self):
        with patch("catalog_importer.cli.commands.import_cmd.ImportPipeline") as pipeline_cls:
            pipeline_cls.return_value.run.side_effect = StageFailed(3, 4, "updateVersionStatus", RuntimeError("x"))
            result = runner.invoke(app, [
                "import", "--server", "https://ks.test", "--repo", "https://c.test", "--token", "t", "--limit", "2",
            ])
        assert result.exit_code == 1
        assert pipeline_cls.call_args.args[0].limit == 2

    def test_limit_must_be_positive(self):
        result = runner.invoke(app, [
            "import", "--server", "https://ks.test", "--repo", "https://c.test", "--token", "t", "--limit", "0",
        ])
        assert result.exit_code != 0


class TestPreviewCommand:
    """catalog-import preview"""

    def test_lists_planned_versions(self):
        with patch("catalog_importer.cli.commands.preview_cmd.fetch_index", return_value=INDEX):
            result = runner.invoke(app, ["preview", "--repo", "https://c.test", "-o", "yaml"])
        assert result.exit_code == 0, result.output
        assert "skipped-limit" in result.output
        assert "uploaded" in result.output

    def test_unavailable_index_exits_1(self):
        with patch("catalog_importer.cli.commands.preview_cmd.fetch_index", side_effect=IndexUnavailable("down")):
            result = runner.invoke(app, ["preview", "--repo", "https://c.test"])
        assert result.exit_code == 1
