from extraction.content_extractor import PageContentExtractor, TAG_TO_FIELD
