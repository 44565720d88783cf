from indexer.models import Page, SearchDocument
from indexer.ids import document_id, page_document_id
