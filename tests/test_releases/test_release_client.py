"""Tests for the GitHub release API client."""

from unittest.mock import Mock

import pytest
import requests

from boxupdater.core.errors import ReleaseLookupError
from boxupdater.releases import GitHubReleaseClient, create_release_client


RELEASES_PAYLOAD = [
    {
        "tag_name": "v3.0.0",
        "name": "HayBox v3.0.0",
        "draft": False,
        "prerelease": False,
        "published_at": "2024-01-01T00:00:00Z",
        "html_url": "https://github.com/JonnyHaystack/HayBox/releases/tag/v3.0.0",
        "assets": [
            {
                "name": "HayBox-pico.uf2",
                "browser_download_url": "https://example.com/HayBox-pico.uf2",
                "size": 1024,
                "content_type": "application/octet-stream",
                "uploader": {"login": "JonnyHaystack"},
            }
        ],
    },
    {"tag_name": "v2.9.0", "assets": []},
]


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


def respond_with(session, payload=None, status_error=None, json_error=None):
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session.get.return_value = response
    return response


class TestFetchReleases:
    def test_parses_release_list(self, session):
        respond_with(session, RELEASES_PAYLOAD)
        client = GitHubReleaseClient(session=session, timeout=7.0)

        releases = client.fetch_releases("JonnyHaystack", "HayBox")

        session.get.assert_called_once_with(
            "https://api.github.com/repos/JonnyHaystack/HayBox/releases", timeout=7.0
        )
        assert [release.tag_name for release in releases] == ["v3.0.0", "v2.9.0"]
        asset = releases[0].assets[0]
        assert asset.name == "HayBox-pico.uf2"
        assert asset.browser_download_url == "https://example.com/HayBox-pico.uf2"
        assert releases[1].assets == []

    def test_sends_user_agent(self, session):
        GitHubReleaseClient(session=session, user_agent="boxupdater/1.0")

        assert session.headers["User-Agent"] == "boxupdater/1.0"
        assert session.headers["Accept"] == "application/vnd.github+json"

    def test_base_url_trailing_slash(self, session):
        client = GitHubReleaseClient(
            base_url="https://ghe.example.com/api/v3/", session=session
        )

        assert client.releases_url("o", "r") == (
            "https://ghe.example.com/api/v3/repos/o/r/releases"
        )

    def test_http_error(self, session):
        error = requests.exceptions.HTTPError(
            "404 Client Error", response=Mock(status_code=404)
        )
        respond_with(session, status_error=error)

        with pytest.raises(ReleaseLookupError, match="HTTP 404") as exc_info:
            GitHubReleaseClient(session=session).fetch_releases("o", "missing")

        assert exc_info.value.__cause__ is error

    def test_connection_error(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError("no route")

        with pytest.raises(ReleaseLookupError, match="no route"):
            GitHubReleaseClient(session=session).fetch_releases("o", "r")

    def test_invalid_json(self, session):
        respond_with(session, json_error=ValueError("Expecting value"))

        with pytest.raises(ReleaseLookupError, match="invalid JSON"):
            GitHubReleaseClient(session=session).fetch_releases("o", "r")

    @pytest.mark.parametrize(
        "payload",
        [
            {"message": "Not Found"},
            [{"name": "no tag"}],
            [{"tag_name": "v1", "assets": 3}],
        ],
    )
    def test_unexpected_payload(self, session, payload):
        respond_with(session, payload)

        with pytest.raises(ReleaseLookupError, match="Unexpected release payload"):
            GitHubReleaseClient(session=session).fetch_releases("o", "r")


def test_factory():
    client = create_release_client(base_url="https://x.test/", timeout=3.0)

    assert client.base_url == "https://x.test"
    assert client.timeout == 3.0
