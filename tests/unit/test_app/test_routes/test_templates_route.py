"""
test_templates_route.py - GET /templates.js 유닛 테스트

검증 포인트:
1. Content-Type application/javascript
2. development: 요청마다 rebuild
3. production: 이미 빌드된 snapshot 재사용
4. rebuild 실패 시 이전 snapshot으로 응답
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.routes.templates import router
from src.core.config import RunMode
from src.templates import registry as registry_module
from src.templates.bundle import BundleRenderer
from src.templates.registry import RefreshGate, SharedTemplateRegistry

# =============================================================================
# Fixtures
# =============================================================================


def make_app(views_dir: Path, mode: RunMode) -> FastAPI:
    """테스트용 FastAPI 앱 (state 직접 설정)."""
    app = FastAPI()
    app.include_router(router)

    registry = SharedTemplateRegistry(views_dir / "shared", gate=RefreshGate(mode))
    registry.rebuild()

    app.state.registry = registry
    app.state.bundle_renderer = BundleRenderer(views_dir / "shared_templates.js.j2")
    return app


@pytest.fixture
def dev_client(views_dir: Path) -> TestClient:
    return TestClient(make_app(views_dir, RunMode.DEVELOPMENT))


@pytest.fixture
def prod_client(views_dir: Path) -> TestClient:
    return TestClient(make_app(views_dir, RunMode.PRODUCTION))


# =============================================================================
# Tests
# =============================================================================

class TestTemplatesScript:

    def test_returns_javascript(self, dev_client):
        response = dev_client.get("/templates.js")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/javascript")
        assert '"article": new Hogan.Template({code: function (c,p,i) {' in response.text

    def test_identical_output_for_unchanged_directory(self, dev_client):
        first = dev_client.get("/templates.js").content
        second = dev_client.get("/templates.js").content

        assert first == second


class TestRefreshPolicy:

    def test_development_rebuilds_per_request(self, dev_client):
        with patch.object(
            registry_module, "scan_templates", wraps=registry_module.scan_templates
        ) as scan:
            dev_client.get("/templates.js")
            dev_client.get("/templates.js")

        assert scan.call_count == 2

    def test_production_does_not_rebuild(self, prod_client):
        with patch.object(
            registry_module, "scan_templates", wraps=registry_module.scan_templates
        ) as scan:
            prod_client.get("/templates.js")
            prod_client.get("/templates.js")

        assert scan.call_count == 0

    def test_development_serves_new_template(self, dev_client, shared_dir):
        (shared_dir / "comment.mustache").write_text("<li>{{text}}</li>", encoding="utf-8")

        response = dev_client.get("/templates.js")
        assert '"comment": new Hogan.Template(' in response.text

    def test_production_ignores_new_template(self, prod_client, shared_dir):
        (shared_dir / "comment.mustache").write_text("<li>{{text}}</li>", encoding="utf-8")

        response = prod_client.get("/templates.js")
        assert '"comment"' not in response.text

    def test_broken_template_keeps_previous_bundle(self, dev_client, shared_dir):
        before = dev_client.get("/templates.js").text

        (shared_dir / "broken.mustache").write_text("{{#open}}", encoding="utf-8")
        response = dev_client.get("/templates.js")

        assert response.status_code == 200
        assert response.text == before


class TestBundleRenderFailure:

    def test_render_error_returns_500_with_code(self, views_dir):
        (views_dir / "shared_templates.js.j2").write_text(
            "{{ banner }}", encoding="utf-8"
        )
        client = TestClient(make_app(views_dir, RunMode.PRODUCTION))

        response = client.get("/templates.js")

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["code"] == "TEMPLATE_RENDER_ERROR"
        assert "banner" in detail["message"]
