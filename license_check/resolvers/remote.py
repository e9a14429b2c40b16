"""Resolver that downloads POMs from remote Maven repositories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import httpx
import structlog

from license_check.constants import DEFAULT_REMOTE_REPOSITORY
from license_check.exceptions import NetworkError, ResolutionError
from license_check.models.artifact import Artifact
from license_check.resolvers.base import BaseArtifactResolver
from license_check.resolvers.local import repository_path

logger = structlog.get_logger("remote_resolver")

DEFAULT_TIMEOUT = 30.0


def fetch_pom(url: str, client: httpx.Client, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Fetch a POM document.

    Args:
        url: Absolute URL of the POM.
        client: HTTP client to use.
        timeout: Request timeout in seconds.

    Returns:
        The POM text, or None if the repository does not have it.

    Raises:
        NetworkError: If the request fails at the transport level.
    """
    try:
        response = client.get(url, timeout=httpx.Timeout(timeout), follow_redirects=True)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError:
        return None
    except httpx.RequestError as e:
        raise NetworkError(f"Failed to fetch {url}: {e}") from e


class RemoteRepositoryResolver(BaseArtifactResolver):
    """Download POMs from remote repositories into a local cache.

    Repositories are tried in order and the first hit is written to the
    cache, which mirrors the Maven repository layout.
    """

    def __init__(
        self,
        cache_dir: Path,
        repositories: Sequence[str] = (DEFAULT_REMOTE_REPOSITORY,),
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache_dir: Directory where downloaded POMs are stored.
            repositories: Base URLs of the remote repositories.
            client: Optional httpx.Client. If not provided, one is created
                for each download.
            timeout: Request timeout in seconds.
        """
        self._cache_dir = cache_dir.expanduser()
        self._repositories = [url.rstrip("/") for url in repositories]
        self._client = client
        self._timeout = timeout

    def resolve(self, artifact: Artifact) -> Artifact:
        """Locate the artifact's POM, downloading it if needed.

        Raises:
            ResolutionError: If no repository has the POM.
        """
        relative = repository_path(artifact)
        cached = self._cache_dir / relative
        if cached.is_file():
            logger.debug("Artifact served from cache", coordinates=artifact.coordinates)
            return artifact.with_file(cached)

        if self._client is not None:
            pom = self._download(relative, self._client)
        else:
            with httpx.Client() as client:
                pom = self._download(relative, client)

        if pom is None:
            raise ResolutionError(
                f"{artifact.coordinates} not found in {', '.join(self._repositories) or 'any repository'}"
            )

        try:
            cached.parent.mkdir(parents=True, exist_ok=True)
            cached.write_text(pom, encoding="utf-8")
        except OSError as e:
            raise ResolutionError(
                f"Cannot cache {artifact.coordinates} at '{cached}': {e}"
            ) from e
        return artifact.with_file(cached)

    def _download(self, relative: str, client: httpx.Client) -> Optional[str]:
        for base_url in self._repositories:
            url = f"{base_url}/{relative}"
            logger.debug("Fetching POM", url=url)
            try:
                pom = fetch_pom(url, client, self._timeout)
            except NetworkError as e:
                logger.warning("Repository request failed", url=url, error=str(e))
                continue
            if pom is not None:
                return pom
        return None
