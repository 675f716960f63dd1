"""Loading of the repository list from bundled and user YAML files."""

import logging
from collections import Counter
from importlib.resources import files
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from boxupdater.config.models import Repository, RepositoryList
from boxupdater.core.errors import ConfigError
from boxupdater.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

BUNDLED_REPOSITORIES_FILE = "repositories.yaml"


def read_bundled_repositories_text() -> str:
    """Read the repositories YAML shipped inside the package."""
    resource = files("boxupdater.config").joinpath(BUNDLED_REPOSITORIES_FILE)
    try:
        return resource.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Bundled repository list is unreadable: {e}") from e


def parse_repositories(text: str, source: str) -> list[Repository]:
    """Parse a repositories YAML document.

    Args:
        text: YAML document content
        source: Name of the document, used in error messages

    Returns:
        Repositories in file order, without display names assigned

    Raises:
        ConfigError: If the document is not valid YAML or fails validation
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    if data is None:
        return []

    # A bare list is accepted as well as the ``repositories:`` mapping
    if isinstance(data, list):
        data = {"repositories": data}

    try:
        return list(RepositoryList.model_validate(data).repositories)
    except ValidationError as e:
        raise ConfigError(f"Invalid repository configuration in {source}: {e}") from e


def assign_display_names(repositories: list[Repository]) -> list[Repository]:
    """Give every repository a unique display name.

    Repositories whose name is shared with another entry are labelled
    ``"name (owner)"``; all others keep their plain name. An explicitly
    configured display name is left alone.
    """
    name_counts = Counter(repo.name for repo in repositories)
    named = []
    for repo in repositories:
        if repo.display_name:
            named.append(repo)
        elif name_counts[repo.name] > 1:
            named.append(
                repo.model_copy(update={"display_name": f"{repo.name} ({repo.owner})"})
            )
        else:
            named.append(repo.model_copy(update={"display_name": repo.name}))
    return named


def load_repositories(extra_file: Path | None = None) -> list[Repository]:
    """Load the bundled repository list and merge an optional user file.

    Args:
        extra_file: YAML file whose repositories are appended to the bundled ones

    Returns:
        Repositories with display names assigned

    Raises:
        ConfigError: If any source is missing or malformed
    """
    repositories = parse_repositories(
        read_bundled_repositories_text(), BUNDLED_REPOSITORIES_FILE
    )

    if extra_file is not None:
        try:
            extra_text = extra_file.read_text(encoding="utf-8")
        except OSError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "repositories_file_unreadable",
                path=str(extra_file),
                error=str(e),
                exc_info=exc_info,
            )
            raise ConfigError(f"Cannot read repositories file {extra_file}: {e}") from e
        repositories.extend(parse_repositories(extra_text, str(extra_file)))

    repositories = assign_display_names(repositories)
    logger.debug("repositories_loaded", count=len(repositories))
    return repositories


def find_repository(
    repositories: list[Repository], repo_name: str
) -> Repository | None:
    """Resolve a repository by display name, or by name when that is unique."""
    for repo in repositories:
        if repo.label == repo_name:
            return repo

    matches = [repo for repo in repositories if repo.name == repo_name]
    if len(matches) == 1:
        return matches[0]
    return None
