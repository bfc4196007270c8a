"""Tests for the deployment summary renderer."""

import pytest

from deploynotify.config import ServerConfig
from deploynotify.notifications.errors import RenderError
from deploynotify.notifications.renderer import SummaryRenderer


@pytest.fixture
def renderer() -> SummaryRenderer:
    return SummaryRenderer(ServerConfig(host="ci.acme.com", ssl_enabled=True))


def test_render_success(renderer, deployment, application, user):
    """Test the summary of a successful deployment."""
    text = renderer.render(deployment, application, user, True)

    assert text == (
        "app Successfully Deployed:\n"
        "alice deployed main on production :pizza:\n"
        "\n"
        "> fix bug\n"
        "<https://github.com/acme/app/commit/abc123|View latest commit on GitHub>\n"
        "<https://ci.acme.com/app/deployments/7|Open deployment in Applikatoni>"
    )


def test_render_failure(renderer, deployment, application, user):
    """Test that a failed deployment only changes the status phrase."""
    success = renderer.render(deployment, application, user, True)
    failure = renderer.render(deployment, application, user, False)

    assert failure.startswith("app Deploy Failed:\n")
    assert "Successfully Deployed" not in failure
    assert failure.splitlines()[1:] == success.splitlines()[1:]


def test_render_is_deterministic(renderer, deployment, application, user):
    first = renderer.render(deployment, application, user, True)
    second = renderer.render(deployment, application, user, True)

    assert first == second


def test_deployment_url_without_ssl(deployment, application):
    """Test that the dashboard link uses http when TLS is disabled."""
    renderer = SummaryRenderer(ServerConfig(host="localhost:8080", ssl_enabled=False))

    assert renderer.deployment_url(application, deployment) == "http://localhost:8080/app/deployments/7"


def test_render_custom_template(deployment, application, user):
    renderer = SummaryRenderer(ServerConfig(host="ci.acme.com"), template="{username}: {status} ({branch})")

    assert renderer.render(deployment, application, user, False) == "alice: Deploy Failed (main)"


@pytest.mark.parametrize("template", ["{unknown_field}", "{0}", "{username", "{username!z}"])
def test_render_invalid_template(deployment, application, user, template):
    """Test that template evaluation errors surface as RenderError."""
    renderer = SummaryRenderer(ServerConfig(), template=template)

    with pytest.raises(RenderError):
        renderer.render(deployment, application, user, True)
