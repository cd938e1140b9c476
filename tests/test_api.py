"""HTTP API tests: FastAPI TestClient with an in-process advisor."""
import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from quality_agent.config import AgentConfig
from quality_agent.llm.advisor import StaticAdvisor
from quality_agent.server import create_app
from quality_agent.sources import load_directory
from quality_agent.store import ResultStore
from quality_agent.web.routes import analysis as analysis_routes

SECRET_JS = 'const password = "hardcoded123";\n'

ADVISORY = json.dumps([{
    "category": "documentation",
    "severity": "low",
    "title": "Undocumented module",
    "description": "app.js has no header comment",
    "location": {"file": "app.js"},
    "impact": "Harder to onboard",
    "recommendation": "Document the module",
}])


@pytest.fixture
def store():
    return ResultStore()


@pytest.fixture
def advisor():
    return StaticAdvisor(ADVISORY)


@pytest.fixture
def client(store, advisor):
    app = create_app(AgentConfig(), store=store, advisor=advisor)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def project(tmp_path):
    (tmp_path / "app.js").write_text(SECRET_JS)
    return tmp_path


class TestIndex:
    def test_status(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert "analyzeDirectory" in r.json()["endpoints"]

    def test_lists_rules(self, client):
        rules = client.get("/").json()["rules"]
        ids = [r["id"] for r in rules]
        assert "security.hardcoded-secret" in ids
        assert "complexity.duplication" in ids
        assert {r["category"] for r in rules} == {"security", "performance", "complexity"}


class TestCreateApp:
    def test_injected_store_kept(self, store, advisor):
        app = create_app(AgentConfig(), store=store, advisor=advisor)
        assert len(store) == 0
        assert app.state.store is store

    def test_default_store_uses_config_ttl(self, advisor):
        cfg = AgentConfig()
        cfg.server.result_ttl_sec = 60
        app = create_app(cfg, advisor=advisor)
        assert app.state.store.ttl == 60


class TestAnalyzeDirectory:
    def test_analysis_stored(self, client, store, project):
        r = client.post("/api/analyze/directory", json={"directoryPath": str(project)})
        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["summary"]["totalFiles"] == 1
        assert data["summary"]["totalIssues"] == 2
        assert data["summary"]["criticalIssues"] == 1
        assert data["metrics"]["securityScore"] == 80
        assert data["reportId"] in store
        assert data["htmlUrl"] == f"/api/report/{data['reportId']}/html"

    def test_missing_directory(self, client, tmp_path):
        r = client.post("/api/analyze/directory", json={"directoryPath": str(tmp_path / "nope")})
        assert r.status_code == 400
        assert r.json()["error"] == "Directory does not exist"

    def test_no_supported_files(self, client, tmp_path):
        (tmp_path / "notes.md").write_text("# hi\n")
        r = client.post("/api/analyze/directory", json={"directoryPath": str(tmp_path)})
        assert r.status_code == 400

    def test_body_validation(self, client):
        r = client.post("/api/analyze/directory", json={})
        assert r.status_code == 422

    def test_directory_loaded_off_event_loop(self, client, project, monkeypatch):
        seen = []

        def loader(root, cfg):
            try:
                asyncio.get_running_loop()
                seen.append("loop")
            except RuntimeError:
                seen.append("worker")
            return load_directory(root, cfg)

        monkeypatch.setattr(analysis_routes, "load_directory", loader)
        r = client.post("/api/analyze/directory", json={"directoryPath": str(project)})
        assert r.status_code == 200
        assert seen == ["worker"]


class TestAnalyzeFiles:
    def test_upload(self, client):
        files = [
            ("files", ("app.js", SECRET_JS.encode(), "text/javascript")),
            ("files", ("notes.md", b"# ignored", "text/markdown")),
        ]
        r = client.post("/api/analyze/files", files=files)
        assert r.status_code == 200
        assert r.json()["summary"]["totalFiles"] == 1
        assert r.json()["summary"]["languages"] == ["javascript"]

    def test_only_unsupported(self, client):
        r = client.post("/api/analyze/files", files=[("files", ("a.md", b"x", "text/plain"))])
        assert r.status_code == 400
        assert r.json()["error"] == "No supported code files found"


class TestReports:
    def _run(self, client, project) -> str:
        r = client.post("/api/analyze/directory", json={"directoryPath": str(project)})
        return r.json()["reportId"]

    def test_get_report(self, client, project):
        run_id = self._run(client, project)
        r = client.get(f"/api/report/{run_id}")
        assert r.status_code == 200
        issues = r.json()["issues"]
        assert issues[0]["title"] == "Hardcoded Secret Detected"
        assert issues[-1]["title"] == "Undocumented module"

    def test_markdown(self, client, project):
        run_id = self._run(client, project)
        r = client.get(f"/api/report/{run_id}/markdown")
        assert r.status_code == 200
        assert r.text.startswith("# Code Quality Report")

    def test_html(self, client, project):
        run_id = self._run(client, project)
        r = client.get(f"/api/report/{run_id}/html")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert "<title>Code Quality Report</title>" in r.text
        assert "Hardcoded Secret Detected" in r.text

    def test_unknown_report(self, client):
        assert client.get("/api/report/report-nope").status_code == 404
        assert client.get("/api/report/report-nope/markdown").status_code == 404
        assert client.get("/api/report/report-nope/html").status_code == 404

    def test_ask(self, client, project, advisor):
        run_id = self._run(client, project)
        advisor.text = "Remove the hardcoded password."
        r = client.post("/api/ask", json={"reportId": run_id, "question": "What first?"})
        assert r.status_code == 200
        assert r.json()["answer"] == "Remove the hardcoded password."

    def test_ask_unknown_report(self, client):
        r = client.post("/api/ask", json={"reportId": "report-nope", "question": "Why?"})
        assert r.status_code == 404
