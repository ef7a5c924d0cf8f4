"""Tests for page routes, 404s and request-boundary error handling."""

import logging

import pytest

from bootstrapcdn.config import Config
from bootstrapcdn.web.registry import ROUTES, RouteKind, page_routes

PAGE_PATHS = [
    "/", "/fontawesome/", "/bootswatch/", "/bootlint/",
    "/alpha/", "/legacy/", "/showcase/", "/integrations/",
]


def test_registry_lists_every_page():
    assert [r.path for r in page_routes()] == PAGE_PATHS
    assert all(r.template for r in page_routes())


def test_registry_paths_are_unique():
    paths = [r.path for r in ROUTES]
    assert len(paths) == len(set(paths))
    assert {r.kind for r in ROUTES} == set(RouteKind)


@pytest.mark.parametrize("path", PAGE_PATHS)
async def test_every_page_renders(client, path):
    c = await client
    resp = await c.get(path)

    assert resp.status == 200
    assert resp.headers["Content-Type"].startswith("text/html")
    text = await resp.text()
    assert "<!DOCTYPE html>" in text


async def test_index_lists_every_bootstrap_version(client, site_config):
    c = await client
    text = await (await c.get("/")).text()

    for record in site_config.bootstrap:
        assert record.version in text
    # Latest release is used for the page's own stylesheet
    assert '<link href="https://x/css" rel="stylesheet">' in text


async def test_fontawesome_lists_every_version(client, site_config):
    c = await client
    text = await (await c.get("/fontawesome/")).text()

    for record in site_config.fontawesome:
        assert record.version in text


async def test_bootswatch_expands_theme_urls(client):
    c = await client
    text = await (await c.get("/bootswatch/")).text()

    assert "Cerulean" in text
    assert "//maxcdn.bootstrapcdn.com/bootswatch/3.3.7/darkly/bootstrap.min.css" in text


async def test_pass_through_data_reaches_templates(client):
    c = await client
    text = await (await c.get("/showcase/")).text()
    assert "<title>Showcase · BootstrapCDN by MaxCDN</title>" in text
    assert 'href="https://expo.getbootstrap.com/"' in text


async def test_render_is_deterministic(client):
    c = await client
    first = await (await c.get("/integrations/")).text()
    second = await (await c.get("/integrations/")).text()
    assert first == second


async def test_unknown_path_is_404(client):
    c = await client
    resp = await c.get("/does-not-exist/")
    assert resp.status == 404


async def test_page_path_requires_trailing_slash(client):
    c = await client
    resp = await c.get("/fontawesome", allow_redirects=False)
    assert resp.status == 404


async def test_head_request_is_served(client):
    c = await client
    resp = await c.head("/")
    assert resp.status == 200


@pytest.fixture
def broken_templates(tmp_path):
    """Template directory whose index page fails at render time."""
    (tmp_path / "index.html").write_text("{{ helpers.latest(no_such_variable.items) }}")
    return tmp_path


async def test_render_failure_shows_traceback_in_development(make_client, dev_settings, broken_templates):
    c = await make_client(dev_settings, templates_dir=broken_templates)
    resp = await c.get("/")

    assert resp.status == 500
    text = await resp.text()
    assert "Traceback" in text
    assert "UndefinedError" in text


async def test_render_failure_hides_detail_in_production(make_client, prod_settings, broken_templates):
    c = await make_client(prod_settings, templates_dir=broken_templates)
    resp = await c.get("/")

    assert resp.status == 500
    text = await resp.text()
    assert text == "500: Internal Server Error"


async def test_render_failure_does_not_affect_other_requests(make_client, dev_settings, broken_templates):
    c = await make_client(dev_settings, templates_dir=broken_templates)
    assert (await c.get("/")).status == 500
    assert (await c.get("/data/bootstrapcdn.json")).status == 200


async def test_missing_template_hidden_and_logged_in_production(make_client, prod_settings, tmp_path, caplog):
    c = await make_client(prod_settings, templates_dir=tmp_path)

    with caplog.at_level(logging.ERROR, logger="bootstrapcdn.web.errors"):
        resp = await c.get("/")

    assert resp.status == 500
    assert await resp.text() == "500: Internal Server Error"
    errors = [r for r in caplog.records if r.name == "bootstrapcdn.web.errors"]
    assert errors and errors[0].exc_info is not None
    assert "index.html" in errors[0].getMessage()


async def test_missing_template_detail_shown_in_development(make_client, dev_settings, tmp_path):
    c = await make_client(dev_settings, templates_dir=tmp_path)
    resp = await c.get("/")

    assert resp.status == 500
    assert "Template 'index.html' not found" in await resp.text()


async def test_client_errors_still_pass_through(make_client, prod_settings, tmp_path):
    c = await make_client(prod_settings, templates_dir=tmp_path)
    assert (await c.get("/nowhere/")).status == 404


async def test_records_without_urls_render_no_empty_tags(make_client, dev_settings):
    config = Config.from_mapping({
        "bootstrap": [{"version": "5.0.0", "javascript": "https://x/js"}],
        "fontawesome": [{"version": "4.7.0"}],
    })
    c = await make_client(dev_settings, config=config)

    for path in ("/", "/fontawesome/"):
        resp = await c.get(path)
        assert resp.status == 200
        text = await resp.text()
        assert 'href="None"' not in text
        assert 'src=""' not in text
        # Only the site stylesheet remains in <head>
        assert text.split("<body")[0].count("<link href") == 1

    text = await (await c.get("/")).text()
    assert "5.0.0" in text
    assert '<script src="https://x/js"></script>' in text
