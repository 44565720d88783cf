import sys
import json
import argparse
import logging
from pathlib import Path

from access.rootline import AccessRootline, RootlineElementFormatError
from indexer.builder import DocumentBuilder
from indexer.core import CompanyFormatter, setup_logger
from indexer.models import Page
from sites.models import SiteResolutionError
from sites.repository import SiteRepository
from variants.id_builder import VariantIdBuilder

logger = setup_logger("indexer.cli")

def _load_json(path):
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)

class IndexSessionManager:
    """
    Wires the collaborators together and builds one document per call.
    """
    def __init__(self, sites_config):
        self.site_repository = SiteRepository.from_config(sites_config)
        self.variant_id_builder = VariantIdBuilder.from_config()
        self.builder = DocumentBuilder(self.variant_id_builder, self.site_repository)

    def build(self, page, url, access_rootline="", mount_point=""):
        rootline = AccessRootline(access_rootline)
        return self.builder.from_page(page, url, rootline, mount_point)

def build_parser():
    parser = argparse.ArgumentParser(description="Build a search document from a rendered page")
    parser.add_argument("--html", required=True, help="Rendered page HTML file")
    parser.add_argument("--page", required=True, help="Page record JSON file (uid, pid, crdate, ...)")
    parser.add_argument("--sites", required=True, help="Site configuration JSON file")
    parser.add_argument("--url", required=True, help="Canonical page URL")
    parser.add_argument("--access-rootline", default="", help="Access rootline, e.g. '35:4/c:4,7'")
    parser.add_argument("--mount-point", default="", help="Mount point parameter, e.g. '5-3'")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    root_logger = logging.getLogger("indexer")
    if args.verbose:
        root_logger.setLevel(logging.DEBUG)
    if args.log_file:
        handler = logging.FileHandler(args.log_file)
        handler.setFormatter(CompanyFormatter())
        root_logger.addHandler(handler)

    try:
        record = _load_json(args.page)
        content = Path(args.html).read_text(encoding="utf-8")
        manager = IndexSessionManager(_load_json(args.sites))
        page = Page.from_record(record, content)
        document = manager.build(page, args.url, args.access_rootline, args.mount_point)
    except SiteResolutionError as e:
        logger.error(f"[INDEX] {e}")
        return 1
    except (OSError, ValueError, KeyError, RootlineElementFormatError) as e:
        logger.error(f"[INDEX] Invalid input: {e}")
        return 1

    logger.info(f"[INDEX] Built document {document['id']}")
    print(json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
    return 0

if __name__ == "__main__":
    sys.exit(main())
