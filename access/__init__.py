from access.rootline import AccessRootline, RootlineElement, RootlineElementFormatError

__all__ = ["AccessRootline", "RootlineElement", "RootlineElementFormatError"]
