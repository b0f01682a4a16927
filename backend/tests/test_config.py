"""
Wrapped Backend - Configuration Tests
=======================================

What:  Settings validation and the production startup check.
"""

import pytest

from wrapped.config import DEFAULT_JWT_SECRET, Settings
from wrapped.main import create_app, lifespan


class TestSettings:

    def test_app_env_normalized(self):
        assert Settings(app_env="Production", jwt_secret="s3cret").is_production

    def test_unknown_app_env_rejected(self):
        with pytest.raises(ValueError):
            Settings(app_env="staging")

    def test_origins_split_on_commas(self):
        settings = Settings(client_origin="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_default_secret_rejected_in_production(self):
        settings = Settings(app_env="production", jwt_secret=DEFAULT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET"):
            settings.validate_required_for_production()

    def test_default_secret_allowed_outside_production(self):
        Settings(app_env="development", jwt_secret=DEFAULT_JWT_SECRET).validate_required_for_production()


class TestStartup:

    @pytest.mark.asyncio
    async def test_production_with_default_secret_refuses_to_start(self, test_settings, database):
        prod_settings = Settings(
            **{**test_settings.model_dump(), "app_env": "production", "jwt_secret": DEFAULT_JWT_SECRET}
        )
        app = create_app(prod_settings, database)

        with pytest.raises(ValueError, match="JWT_SECRET"):
            async with lifespan(app):
                pass

    @pytest.mark.asyncio
    async def test_production_with_real_secret_starts(self, test_settings, database):
        prod_settings = Settings(
            **{**test_settings.model_dump(), "app_env": "production", "jwt_secret": "s3cret"}
        )
        app = create_app(prod_settings, database)

        async with lifespan(app):
            pass
