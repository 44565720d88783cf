from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from indexer.core import ENCRYPTION_KEY, MAX_ROOTLINE_DEPTH, setup_logger
from sites.models import Site, SiteResolutionError

logger = setup_logger("indexer.sites")

class SiteStore(ABC):
    """
    Abstract interface for resolving the site a page belongs to.
    """

    @abstractmethod
    def get_site_by_page_id(self, page_id: int) -> Site:
        """
        Return the site whose page tree contains page_id.
        Raises SiteResolutionError if no site matches.
        """
        pass

class SiteRepository(SiteStore):
    """
    In-memory site lookup.
    Sites are registered by root page id; other pages are registered with
    their parent id and resolved by walking up until a site root is hit.
    """

    def __init__(self, max_depth: int = MAX_ROOTLINE_DEPTH):
        self._sites: Dict[int, Site] = {}
        self._parents: Dict[int, int] = {}
        self._max_depth = max_depth

    def register_site(self, site: Site) -> None:
        self._sites[site.root_page_id] = site

    def register_page(self, page_id: int, parent_id: int) -> None:
        self._parents[int(page_id)] = int(parent_id)

    def get_site_by_page_id(self, page_id: int) -> Site:
        site = self._find_site(int(page_id))
        if site is None:
            logger.error(f"[SITE] No site found for page {page_id}")
            raise SiteResolutionError(page_id)
        return site

    def _find_site(self, page_id: int) -> Optional[Site]:
        current = page_id
        visited = set()
        # Bounded walk, stops on cycles and orphans
        for _ in range(self._max_depth + 1):
            if current in self._sites:
                return self._sites[current]
            if current in visited or current not in self._parents:
                return None
            visited.add(current)
            current = self._parents[current]
        return None

    @classmethod
    def from_config(cls, config: Dict[str, Any], encryption_key: str = ENCRYPTION_KEY) -> "SiteRepository":
        """
        Builds a repository from a mapping like:
            {"sites": [{"root_page_id": 1, "domain": "www.example.com"}],
             "pages": {"42": 1}}
        """
        repository = cls()
        for entry in config.get("sites", []):
            repository.register_site(Site.create(
                root_page_id=entry["root_page_id"],
                domain=entry["domain"],
                encryption_key=encryption_key,
                label=entry.get("label"),
            ))
        for page_id, parent_id in (config.get("pages") or {}).items():
            repository.register_page(int(page_id), int(parent_id))
        logger.debug(f"[SITE] Loaded {len(repository._sites)} sites, {len(repository._parents)} pages")
        return repository
