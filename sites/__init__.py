from sites.models import Site, SiteResolutionError, site_hash_for_domain
from sites.repository import SiteStore, SiteRepository
