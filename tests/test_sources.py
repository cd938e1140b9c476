"""Tests for file loading."""
import pytest

from quality_agent.config import AnalysisConfig
from quality_agent.sources import detect_language, load_directory, load_files, load_path


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text("const a = 1;\n")
    (tmp_path / "src" / "view.tsx").write_text("export const V = () => null;\n")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("module.exports = 1;\n")
    (tmp_path / "README.md").write_text("# readme\n")
    (tmp_path / "package.json").write_text('{"dependencies": {"x": "^1.0.0"}}')
    (tmp_path / "main.py").write_text("print('hi')\n")
    return tmp_path


class TestDetectLanguage:
    def test_extensions(self):
        assert detect_language("a/b/c.ts") == "typescript"
        assert detect_language("x.JSX") == "javascript"
        assert detect_language("lib.rs") == "rust"
        assert detect_language("notes.md") is None

    def test_manifests(self):
        assert detect_language("frontend/package.json") == "json"
        assert detect_language("requirements.txt") == "text"
        assert detect_language("other.json") is None


class TestLoadDirectory:
    def test_relative_sorted_paths(self, project):
        files = load_directory(project)
        assert [f.path for f in files] == ["main.py", "package.json", "src/app.js", "src/view.tsx"]
        app = files[2]
        assert app.language == "javascript"
        assert app.content == "const a = 1;\n"
        assert app.size == len("const a = 1;\n")

    def test_oversized_skipped(self, project):
        (project / "big.py").write_text("x = 1\n" * 100)
        files = load_directory(project, AnalysisConfig(max_file_size=50))
        assert "big.py" not in [f.path for f in files]

    def test_undecodable_skipped(self, project):
        (project / "bin.py").write_bytes(b"\xff\xfe\x00\x81")
        assert "bin.py" not in [f.path for f in load_directory(project)]

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            load_directory(tmp_path / "missing")


class TestLoadFiles:
    def test_basename_and_filtering(self, project):
        files = load_files([project / "src" / "app.js", project / "README.md"])
        assert [(f.path, f.language) for f in files] == [("app.js", "javascript")]

    def test_load_path_single_file(self, project):
        assert [f.path for f in load_path(project / "main.py")] == ["main.py"]

    def test_load_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_path(tmp_path / "nope.py")
