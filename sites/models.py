import hashlib
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class Site:
    """
    A configured site: a page-tree root served under one domain.
    site_hash identifies the site inside a shared search index.
    """
    root_page_id: int
    domain: str
    site_hash: str
    label: Optional[str] = None

    @classmethod
    def create(cls, root_page_id: int, domain: str, encryption_key: str = "", label: Optional[str] = None) -> "Site":
        return cls(
            root_page_id=int(root_page_id),
            domain=domain,
            site_hash=site_hash_for_domain(domain, encryption_key),
            label=label,
        )

def site_hash_for_domain(domain: str, encryption_key: str = "") -> str:
    # INVARIANT: Same domain + key = same hash across processes and hosts.
    seed = f"{domain}{encryption_key}tx_solr"
    return hashlib.sha1(seed.encode('utf-8')).hexdigest()

class SiteResolutionError(LookupError):
    """Raised when no configured site contains the given page."""

    def __init__(self, page_id, message: Optional[str] = None):
        self.page_id = page_id
        super().__init__(message or f"No site found for page id {page_id}")
