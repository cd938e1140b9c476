"""CLI tests: run main() in-process with augmentation disabled."""
import json

import pytest

from quality_agent import config
from quality_agent.cli import main as cli


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "none.yaml")
    monkeypatch.setenv("QUALITY_LLM_PROVIDER", "demo")
    config.reset_config()
    yield
    config.reset_config()


class TestAnalyzeCommand:
    def test_json_output_and_report(self, tmp_path, capsys):
        src = tmp_path / "src"
        src.mkdir()
        (src / "app.js").write_text('const password = "hardcoded123";\n')
        out_dir = tmp_path / "reports"

        cli.main(["--no-color", "analyze", str(src), "-o", str(out_dir), "--no-ai", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["criticalIssues"] == 1
        md = list(out_dir.glob("report-*.md"))
        html = list(out_dir.glob("report-*.html"))
        assert len(md) == len(html) == 1
        assert md[0].stem == html[0].stem

    def test_no_supported_files_exit_1(self, tmp_path):
        (tmp_path / "notes.md").write_text("hello\n")
        with pytest.raises(SystemExit) as exc:
            cli.main(["analyze", str(tmp_path), "-o", str(tmp_path / "r"), "--no-ai"])
        assert exc.value.code == 1

    def test_human_output(self, tmp_path, capsys):
        (tmp_path / "a.py").write_text("x = 1\n")
        cli.main(["--no-color", "analyze", str(tmp_path / "a.py"), "-o", str(tmp_path / "r")])
        out = capsys.readouterr().out
        assert "Quality Score" in out
        assert "100/100" in out

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 0

    def test_no_ai_leaves_config_alone(self, tmp_path):
        (tmp_path / "a.py").write_text("x = 1\n")
        cli.main(["analyze", str(tmp_path), "-o", str(tmp_path / "r"), "--no-ai", "--json"])
        assert config.get_config().analysis.augment is True
