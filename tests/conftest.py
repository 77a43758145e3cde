"""
Pytest fixtures for shared template tests.

구성:
- 프로젝트 views/ 를 tmp_path로 복사해 실제 템플릿으로 테스트
- development / production 설정 팩토리
- 번들 스크립트 평가용 V8 컨텍스트 (mini-racer)
"""

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest
from py_mini_racer import MiniRacer

from src.core.config import AppConfig, PageSettings, RunMode

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def views_dir(project_root: Path, tmp_path: Path) -> Path:
    """프로젝트 views/ 복사본 (layout, 번들 템플릿, shared/article)."""
    target = tmp_path / "views"
    shutil.copytree(project_root / "views", target)
    return target


@pytest.fixture
def shared_dir(views_dir: Path) -> Path:
    """shared 템플릿 디렉터리."""
    return views_dir / "shared"


@pytest.fixture
def empty_shared_dir(tmp_path: Path) -> Path:
    """비어 있는 shared 디렉터리."""
    directory = tmp_path / "empty_shared"
    directory.mkdir()
    return directory


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def make_config(views_dir: Path, tmp_path: Path) -> Callable[..., AppConfig]:
    """테스트용 AppConfig 팩토리."""

    def _make(mode: RunMode = RunMode.DEVELOPMENT, **page: object) -> AppConfig:
        return AppConfig(
            mode=mode,
            views_dir=views_dir,
            shared_dir=views_dir / "shared",
            bundle_template=views_dir / "shared_templates.js.j2",
            static_dir=tmp_path / "public",
            page=PageSettings.from_dict(page),
        )

    return _make


@pytest.fixture
def dev_config(make_config: Callable[..., AppConfig]) -> AppConfig:
    """development 모드 설정."""
    return make_config(RunMode.DEVELOPMENT)


@pytest.fixture
def prod_config(make_config: Callable[..., AppConfig]) -> AppConfig:
    """production 모드 설정."""
    return make_config(RunMode.PRODUCTION)


# =============================================================================
# Bundle Script Fixtures
# =============================================================================

# Hogan.Template 최소 구현 (b, fl, v, t, f, d, s, rs, rp).
# 실제 런타임은 CDN에서 받으므로 번들 평가 테스트에서만 사용.
HOGAN_RUNTIME = r"""
var Hogan = {};
Hogan.Template = function (spec) {
  this.r = spec.code;
  this.partials = spec.partials || {};
  this.buf = "";
};
Hogan.Template.prototype = {
  render: function (context, partials) {
    return this.r([context], partials || {}, "");
  },
  b: function (s) { this.buf += s; },
  fl: function () { var r = this.buf; this.buf = ""; return r; },
  t: function (s) { return s === null || s === undefined ? "" : String(s); },
  v: function (s) {
    return this.t(s)
      .replace(/&/g, "&amp;")
      .replace(/"/g, "&quot;")
      .replace(/</g, "&lt;")
      .replace(/>/g, "&gt;");
  },
  f: function (key, ctx, partials, returnFound) {
    for (var i = ctx.length - 1; i >= 0; i--) {
      var v = ctx[i];
      if (v !== null && typeof v === "object" && key in v) {
        return v[key];
      }
    }
    return returnFound ? false : "";
  },
  d: function (key, ctx, partials, returnFound) {
    if (key === ".") {
      return ctx[ctx.length - 1];
    }
    var names = key.split(".");
    var val = this.f(names[0], ctx, partials, returnFound);
    for (var i = 1; i < names.length; i++) {
      if (val !== null && typeof val === "object" && names[i] in val) {
        val = val[names[i]];
      } else {
        return returnFound ? false : "";
      }
    }
    return val;
  },
  s: function (val, ctx, partials, inverted) {
    if (Array.isArray(val) && val.length === 0) {
      return false;
    }
    var pass = !!val;
    if (!inverted && pass && ctx) {
      ctx.push(typeof val === "object" ? val : ctx[ctx.length - 1]);
    }
    return pass;
  },
  rs: function (ctx, partials, section) {
    var tail = ctx[ctx.length - 1];
    if (!Array.isArray(tail)) {
      section(ctx, partials, this);
      return;
    }
    for (var i = 0; i < tail.length; i++) {
      ctx.push(tail[i]);
      section(ctx, partials, this);
      ctx.pop();
    }
  },
  rp: function (symbol, ctx, partials, indent) {
    var spec = this.partials[symbol];
    var partial = spec && partials[spec.name];
    if (!partial) {
      return "";
    }
    return partial.r(ctx, partials, indent);
  }
};
"""


@pytest.fixture
def run_bundle() -> Callable[..., MiniRacer]:
    """Hogan 런타임 + (prelude) + 번들 스크립트를 평가한 V8 컨텍스트 팩토리."""

    def _run(script: str, prelude: str = "") -> MiniRacer:
        ctx = MiniRacer()
        ctx.eval(HOGAN_RUNTIME)
        if prelude:
            ctx.eval(prelude)
        ctx.eval(script)
        return ctx

    return _run
