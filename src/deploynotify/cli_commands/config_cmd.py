import os
import re
import subprocess
from typing import Any, Callable, Dict, Optional, Tuple

import typer

from deploynotify.messages import notify as msg

GITHUB_REMOTE = re.compile(r"github\.com[:/]+(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def parse_github_remote(url: str) -> Optional[Tuple[str, str]]:
    """Return ``(owner, repo)`` for a GitHub remote URL, SSH or HTTPS."""
    match = GITHUB_REMOTE.search(url.strip())
    if match is None:
        return None
    return match.group("owner"), match.group("repo")


def origin_repository() -> Optional[Tuple[str, str]]:
    """Read the GitHub repository of the ``origin`` remote, if there is one."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return parse_github_remote(result.stdout)


def register(app: typer.Typer) -> Dict[str, Callable[..., Any]]:
    @app.command()
    def init_config(
        path: str = typer.Option(".deploynotify.toml", "--path", "-p", help="Config file path"),
    ):
        """Generate example configuration file."""

        github_owner, github_repo = origin_repository() or ("your-github-username", "your-repo-name")

        example_config = """# deploynotify configuration file

[server]
host = "deploy.example.com"   # Host of the deployment dashboard, used in links
ssl_enabled = true

[notifier]
# timeout = 10      # Seconds to wait for the webhook, unset keeps the transport default
# max_workers = 8   # Bound concurrent notifications, unset spawns a thread per notification

[database]
url = "sqlite:///deploynotify.db"

[[applications]]
name = "{github_repo}"
github_owner = "{github_owner}"
github_repo = "{github_repo}"

[[applications.targets]]
name = "production"
slack_url = "https://hooks.slack.com/services/T000/B000/XXXX"

[[applications.targets]]
name = "staging"
slack_url = ""  # Empty disables notifications for this target
""".format(
            github_owner=github_owner,
            github_repo=github_repo,
        )

        if os.path.exists(path):
            overwrite = typer.confirm(f"{path} already exists. Overwrite?")
            if not overwrite:
                typer.echo("Cancelled.")
                raise typer.Exit(code=0)

        with open(path, "w") as f:
            f.write(example_config)

        typer.secho(msg.CONFIG_CREATED.format(path), fg=typer.colors.GREEN)

    return {"init_config": init_config}
