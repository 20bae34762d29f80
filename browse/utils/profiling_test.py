from fastapi import FastAPI
from fastapi.testclient import TestClient

from utils.profiling import ProfilingMiddleware, profile_filename


def make_client(output_dir):
    app = FastAPI()
    app.add_middleware(ProfilingMiddleware, output_dir=output_dir)  # type: ignore[arg-type]

    @app.get("/api/ping")
    def ping():
        return {"ok": True}

    return TestClient(app)


class TestProfileFilename:
    def test_nested_path(self):
        assert profile_filename("/api/sitemap-data") == "api_sitemap-data.html"

    def test_root_path(self):
        assert profile_filename("/") == "root.html"


class TestProfilingMiddleware:
    def test_unprofiled_request_passes_through(self, tmp_path):
        client = make_client(tmp_path / "profiles")

        response = client.get("/api/ping")

        assert response.status_code == 200
        assert "x-profile-output" not in response.headers
        assert list((tmp_path / "profiles").iterdir()) == []

    def test_profiled_request_writes_html(self, tmp_path):
        client = make_client(tmp_path / "profiles")

        response = client.get("/api/ping", params={"profile": "true"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        output = tmp_path / "profiles" / "api_ping.html"
        assert response.headers["x-profile-output"] == str(output)
        assert output.exists()
