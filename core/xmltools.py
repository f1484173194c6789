"""Namespace-agnostic lookups over ElementTree nodes.

Feeds mix default, prefixed and undeclared-but-common namespaces, so most
lookups compare local names only. ``find_qualified`` is used where the
namespace matters (``dc:creator``).
"""

from typing import Iterator, Optional
from xml.etree.ElementTree import Element

NS_DC = "http://purl.org/dc/elements/1.1/"
NS_MEDIA = "http://search.yahoo.com/mrss/"
NS_CONTENT = "http://purl.org/rss/1.0/modules/content/"
NS_ATOM = "http://www.w3.org/2005/Atom"


def local_name(tag) -> str:
    if not isinstance(tag, str):
        # comments / processing instructions
        return ""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    if ":" in tag:
        return tag.split(":", 1)[1]
    return tag


def namespace_of(tag) -> str:
    if isinstance(tag, str) and tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return ""


def iter_local(element: Element, *names: str) -> Iterator[Element]:
    """Yield descendants (not ``element`` itself) whose local name is in ``names``."""
    wanted = set(names)
    for el in element.iter():
        if el is element:
            continue
        if local_name(el.tag) in wanted:
            yield el


def find_local(element: Element, name: str) -> Optional[Element]:
    return next(iter_local(element, name), None)


def find_qualified(element: Element, ns: str, name: str) -> Optional[Element]:
    for el in iter_local(element, name):
        if namespace_of(el.tag) == ns:
            return el
    return None


def text_content(element: Optional[Element]) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def get_attr(element: Element, name: str) -> Optional[str]:
    """Attribute lookup that also matches namespaced attributes by local name."""
    value = element.get(name)
    if value is not None:
        return value
    for key, v in element.attrib.items():
        if local_name(key) == name:
            return v
    return None
