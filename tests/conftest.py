from __future__ import annotations

import pytest

from app.core.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model="gemini-1.5-flash",
        gemini_allowed_models_raw=None,
        gemini_base_url="https://generativelanguage.googleapis.com",
        cors_origin=None,
        static_dir=str(tmp_path / "missing-frontend"),
    )
