"""
Unit Tests for Models and Settings
==================================
"""

import pytest
from pydantic import ValidationError

from pw_renderer.config.settings import Settings, get_settings, reload_settings
from pw_renderer.models.schemas import RenderJob, RendererConfig


class TestRendererConfig:
    def test_defaults(self):
        config = RendererConfig()

        assert config.browser_type == "chromium"
        assert config.headless is True
        assert config.launch_options() == {"headless": True, "args": []}

    def test_camel_case_keys(self):
        config = RendererConfig.model_validate(
            {
                "browserType": "firefox",
                "headless": False,
                "args": ["--mute-audio"],
                "executablePath": "/usr/bin/firefox",
            }
        )

        assert config.launch_options() == {
            "headless": False,
            "args": ["--mute-audio"],
            "executable_path": "/usr/bin/firefox",
        }

    def test_snake_case_keys(self):
        assert RendererConfig(browser_type="webkit").browser_type == "webkit"

    def test_unknown_engine_rejected(self):
        with pytest.raises(ValidationError):
            RendererConfig(browserType="netscape")

    def test_immutable(self):
        config = RendererConfig()

        with pytest.raises(ValidationError):
            config.headless = False


class TestRenderJob:
    def test_defaults(self):
        job = RenderJob.model_validate({"tplFile": "card.html"})

        assert job.tpl_file == "card.html"
        assert job.save_id is None
        assert job.img_type == "jpeg"
        assert job.quality == 90
        assert job.multi_page is False
        assert job.multi_page_height is None
        assert job.page_goto_params == {}
        assert job.screenshot_options().as_kwargs() == {
            "type": "jpeg",
            "omit_background": False,
            "quality": 90,
        }

    def test_template_data_is_kept(self):
        job = RenderJob.model_validate({"tplFile": "card.html", "title": "Hi"})

        assert job.model_extra == {"title": "Hi"}

    def test_tpl_file_required(self):
        with pytest.raises(ValidationError):
            RenderJob.model_validate({"saveId": "x"})

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_quality_range(self, quality):
        with pytest.raises(ValidationError):
            RenderJob.model_validate({"tplFile": "card.html", "quality": quality})

    @pytest.mark.parametrize("height", [0, None, ""])
    def test_falsy_page_height_is_unset(self, height):
        job = RenderJob.model_validate({"tplFile": "card.html", "multiPageHeight": height})

        assert job.multi_page_height is None

    def test_negative_page_height_rejected(self):
        with pytest.raises(ValidationError):
            RenderJob.model_validate({"tplFile": "card.html", "multiPageHeight": -10})

    def test_multi_page_forces_jpeg(self):
        job = RenderJob.model_validate(
            {"tplFile": "card.html", "imgType": "png", "multiPage": True, "path": "a.jpg"}
        )

        assert job.screenshot_options().as_kwargs() == {
            "type": "jpeg",
            "omit_background": False,
            "path": "a.jpg",
        }


class TestSettings:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PW_RENDER_RESTART_NUM", "5")
        monkeypatch.setenv("PW_RENDER_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.restart_num == 5
        assert settings.log_level == "DEBUG"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_get_settings_is_cached(self, monkeypatch):
        assert get_settings() is get_settings()

        monkeypatch.setenv("PW_RENDER_MULTI_PAGE_HEIGHT", "1234")
        assert reload_settings().multi_page_height == 1234
        monkeypatch.delenv("PW_RENDER_MULTI_PAGE_HEIGHT")
        reload_settings()
