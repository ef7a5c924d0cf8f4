"""Shared fixtures for BootstrapCDN site tests."""

import pytest

from bootstrapcdn.config import Config, DeploymentMode, Settings
from bootstrapcdn.web.server import WebServer

SITE_DATA = {
    "port": 3000,
    "title": "BootstrapCDN by MaxCDN",
    "bootstrap": [
        {
            "version": "3.3.7",
            "latest": True,
            "css_complete": "https://x/css",
            "javascript": "https://x/js",
        },
        {
            "version": "3.3.6",
            "css_complete": "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.6/css/bootstrap.min.css",
            "javascript": "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.6/js/bootstrap.min.js",
        },
    ],
    "fontawesome": [
        {
            "version": "4.7.0",
            "css_complete": "https://maxcdn.bootstrapcdn.com/font-awesome/4.7.0/css/font-awesome.min.css",
        },
    ],
    "bootswatch": {
        "version": "3.3.7",
        "bootstrap": "https://maxcdn.bootstrapcdn.com/bootswatch/{version}/{theme}/bootstrap.min.css",
        "themes": [{"name": "Cerulean"}, {"name": "Darkly"}],
    },
    "showcase": [{"name": "Bootstrap Expo", "url": "https://expo.getbootstrap.com/"}],
    "integrations": [{"name": "WordPress", "url": "https://wordpress.org/plugins/bootstrapcdn/"}],
}


@pytest.fixture
def site_config() -> Config:
    return Config.from_mapping(SITE_DATA)


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(mode=DeploymentMode.DEVELOPMENT)


@pytest.fixture
def prod_settings() -> Settings:
    return Settings(mode=DeploymentMode.PRODUCTION)


@pytest.fixture
def make_client(aiohttp_client, site_config):
    """Factory: aiohttp test client for a WebServer built with the given settings."""

    async def _make(settings: Settings, config: Config | None = None, **kwargs):
        server = WebServer(config=config or site_config, settings=settings, **kwargs)
        return await aiohttp_client(server.app)

    return _make


@pytest.fixture
def client(make_client, dev_settings):
    """Development-mode client."""
    return make_client(dev_settings)


@pytest.fixture
def prod_client(make_client, prod_settings):
    """Production-mode client without HTTPS enforcement."""
    return make_client(prod_settings)
