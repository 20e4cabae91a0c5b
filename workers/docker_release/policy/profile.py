"""
Profile — what gets released and under which names.

Adding an alias or moving the repository is a profile change, not a
code change.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ReleaseProfile:
    """Repository, floating aliases and where the version is declared."""

    profile_id: str
    repository: str

    # Floating tags, updated in this order after the version push
    aliases: Tuple[str, ...] = ()

    # `ENV <version_key> <value>` in the recipe
    recipe_name: str = "Dockerfile"
    declaration: str = "ENV"
    version_key: str = "SYMBOLSERVER_VERSION"

    # Declared alongside the version; expected to reference it
    download_url_key: str = "SYMBOLSERVER_DOWNLOAD_URL"

    def ref(self, tag: str) -> str:
        return f"{self.repository}:{tag}"

    @classmethod
    def v0(cls) -> "ReleaseProfile":
        """getsentry/symbolserver, aliases 1 / 1.4 / latest."""
        return cls(
            profile_id="getsentry-symbolserver-1.4",
            repository="getsentry/symbolserver",
            aliases=("1", "1.4", "latest"),
        )
