from typing import Any, Callable, Dict

from access.rootline import AccessRootline
from extraction.content_extractor import PageContentExtractor
from indexer.core import APP_KEY, DOCUMENT_TYPE, setup_logger
from indexer.ids import page_document_id
from indexer.models import Page, SearchDocument
from sites.repository import SiteStore
from variants.id_builder import VariantIdBuilder

logger = setup_logger("indexer.builder")

class DocumentBuilder:
    """
    Maps a rendered page onto a SearchDocument.
    Invariants:
    - Determinism: same page, url, access rootline and mount point = same document.
    - All-or-nothing: a page without a site raises SiteResolutionError, no document is returned.
    - Stateless: collaborators are read-only, one builder may serve many threads.
    """

    def __init__(
        self,
        variant_id_builder: VariantIdBuilder,
        site_repository: SiteStore,
        extractor_factory: Callable[[str], Any] = PageContentExtractor,
    ):
        self._variant_id_builder = variant_id_builder
        self._site_repository = site_repository
        self._extractor_factory = extractor_factory

    def from_page(self, page: Page, url: str, access_rootline: AccessRootline, mount_point_parameter: str = "") -> SearchDocument:
        """
        Builds the search document for one page.
        Raises SiteResolutionError if the page belongs to no configured site.
        """
        document = SearchDocument()
        site = self._site_repository.get_site_by_page_id(page.id)

        access_groups = self._get_document_id_groups(access_rootline)
        document_id = page_document_id(
            site.site_hash, page.id, page.type, page.sys_language_uid,
            access_groups, mount_point_parameter,
        )

        document.set_field('id', document_id)
        document.set_field('site', site.domain)
        document.set_field('siteHash', site.site_hash)
        document.set_field('appKey', APP_KEY)
        document.set_field('type', DOCUMENT_TYPE)

        # system fields
        document.set_field('uid', page.id)
        document.set_field('pid', page.get('pid'))

        variant_id = self._variant_id_builder.build_from_type_and_uid(DOCUMENT_TYPE, page.id)
        document.set_field('variantId', variant_id)

        document.set_field('typeNum', page.type)
        document.set_field('created', page.get('crdate'))
        document.set_field('changed', page.get('SYS_LASTCHANGED'))

        document.set_field('rootline', self._get_rootline_field_value(page.id, mount_point_parameter))

        # access
        self._add_access_field(document, access_rootline)
        self._add_endtime_field(document, page.record)

        # content
        extractor = self._extractor_factory(page.content)
        document.set_field('title', extractor.get_page_title())
        document.set_field('subTitle', page.get('subtitle'))
        document.set_field('navTitle', page.get('nav_title'))
        document.set_field('author', page.get('author'))
        document.set_field('description', page.get('description'))
        document.set_field('abstract', page.get('abstract'))
        document.set_field('content', extractor.get_indexable_content())
        document.set_field('url', url)

        self._add_keywords_field(document, page.record)
        self._add_tag_content_fields(document, extractor.get_tag_content())

        logger.debug(f"[BUILD] Document {document_id} built with {len(document)} fields")
        return document

    @staticmethod
    def _get_rootline_field_value(page_id: int, mount_point_parameter: str) -> str:
        # Local context only (page + mount point), not the ancestor chain
        rootline = str(page_id)
        if mount_point_parameter != "":
            rootline += f",{mount_point_parameter}"
        return rootline

    @staticmethod
    def _get_document_id_groups(access_rootline: AccessRootline) -> str:
        groups = AccessRootline.clean_group_array(access_rootline.get_groups())
        if not groups:
            groups = [0]
        return ",".join(str(g) for g in groups)

    @staticmethod
    def _add_access_field(document: SearchDocument, access_rootline: AccessRootline) -> None:
        # Absent field = unrestricted; never write an empty value
        access = str(access_rootline)
        if access.strip() != "":
            document.set_field('access', access)

    @staticmethod
    def _add_endtime_field(document: SearchDocument, record: Dict[str, Any]) -> None:
        # 0 = never expires
        endtime = record.get('endtime')
        if endtime:
            document.set_field('endtime', endtime)

    @staticmethod
    def _add_keywords_field(document: SearchDocument, record: Dict[str, Any]) -> None:
        if record.get('keywords') is None:
            return

        keywords = [k.strip() for k in str(record['keywords']).split(',')]
        for keyword in dict.fromkeys(k for k in keywords if k):
            document.add_field('keywords', keyword)

    @staticmethod
    def _add_tag_content_fields(document: SearchDocument, tag_content: Dict[str, str]) -> None:
        # Tag fields are not guarded against fixed field names; a collision overwrites
        for field_name, field_value in (tag_content or {}).items():
            if field_name in document:
                logger.warning(f"[BUILD] Tag content field '{field_name}' overwrites existing field")
            document.set_field(field_name, field_value)
