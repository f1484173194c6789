import codecs
import logging
import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from core.images import resolve_image
from core.models import Article, FeedEntry
from core.results import ErrorKind, ParseResult, ParseSuccess, failure
from core.utils import strip_html_to_text
from core.xmltools import NS_DC, find_qualified, get_attr, iter_local, local_name, text_content

log = logging.getLogger("thumbfeed.rss")

_XML_DECL_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*encoding=["']([A-Za-z0-9._-]+)["']""")
_DECL_ENCODING_ATTR = re.compile(r"""^(\s*<\?xml[^>]*?)\s+encoding=["'][^"']*["']""")


def _decode(data: bytes) -> str:
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig", errors="replace")
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    m = _XML_DECL_ENCODING.match(data[:512])
    encoding = m.group(1).decode("ascii") if m else "utf-8"
    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        log.debug("Encodage inconnu %r, repli sur utf-8.", encoding)
        return data.decode("utf-8", errors="replace")


def _without_declared_encoding(text: str) -> str:
    # already decoded; expat must not re-read the declared codec
    return _DECL_ENCODING_ATTR.sub(r"\1", text, count=1)


def _raw_pattern(name: str) -> "re.Pattern[str]":
    return re.compile(
        r"<(?:[\w.-]+:)?%s(?=[\s/>])[^>]*?(?:/>|>.*?</(?:[\w.-]+:)?%s\s*>)" % (name, name),
        re.S,
    )


_RAW_ITEM = _raw_pattern("item")
_RAW_ENTRY = _raw_pattern("entry")


def _entry_nodes(root: ET.Element) -> List[ET.Element]:
    items = [el for el in root.iter() if local_name(el.tag) == "item"]
    if items:
        return items
    return [el for el in root.iter() if local_name(el.tag) == "entry"]


def _raw_entries(text: str, nodes: List[ET.Element]) -> List[str]:
    """Source markup of each entry node, in document order."""
    if not nodes:
        return []
    pattern = _RAW_ITEM if local_name(nodes[0].tag) == "item" else _RAW_ENTRY
    raws = [m.group(0) for m in pattern.finditer(text)]
    if len(raws) != len(nodes):
        log.debug("Decoupage brut incoherent (%d/%d), serialisation des noeuds.", len(raws), len(nodes))
        # serializing escapes CDATA; append the text so markup inside it still matches
        return [ET.tostring(n, encoding="unicode") + text_content(n) for n in nodes]
    return raws


def _child(entry: ET.Element, name: str) -> Optional[ET.Element]:
    for el in entry:
        if local_name(el.tag) == name:
            return el
    return next(iter_local(entry, name), None)


def _text(entry: ET.Element, *names: str) -> str:
    for name in names:
        value = text_content(_child(entry, name)).strip()
        if value:
            return value
    return ""


def _link(entry: ET.Element) -> str:
    links = [el for el in entry if local_name(el.tag) == "link"]
    for el in links:
        value = text_content(el).strip()
        if value:
            return value
    # Atom: <link rel="alternate" href="..."/>
    for el in links:
        if (get_attr(el, "rel") or "alternate") == "alternate" and get_attr(el, "href"):
            return get_attr(el, "href")
    for el in links:
        if get_attr(el, "href"):
            return get_attr(el, "href")
    return ""


def _author(entry: ET.Element) -> str:
    el = _child(entry, "author")
    if el is not None:
        name = _child(el, "name")
        value = text_content(name if name is not None else el).strip()
        if value:
            return value
    return text_content(find_qualified(entry, NS_DC, "creator")).strip()


def _category(entry: ET.Element) -> str:
    el = _child(entry, "category")
    if el is None:
        return ""
    return text_content(el).strip() or (get_attr(el, "term") or "").strip()


def entry_to_article(index: int, entry: FeedEntry) -> Article:
    el = entry.element
    description = _text(el, "description", "summary", "content")
    return Article(
        id=index,
        title=_text(el, "title"),
        description=description,
        summary=strip_html_to_text(description),
        link=_link(el),
        pub_date=_text(el, "pubDate", "published", "updated", "date"),
        author=_author(el) or None,
        category=_category(el) or None,
        guid=_text(el, "guid", "id") or None,
        image=resolve_image(entry),
    )


def parse_feed(text: Union[str, bytes, None]) -> ParseResult:
    """Parse raw feed XML into articles; never raises."""
    if isinstance(text, bytes):
        decoded = _decode(text)
    else:
        decoded = text or ""
    if not decoded.strip():
        return failure(ErrorKind.EMPTY_FEED)

    try:
        root = ET.fromstring(_without_declared_encoding(decoded))
    except (ET.ParseError, ValueError, LookupError) as e:
        log.info("Flux XML invalide: %s", e)
        return failure(ErrorKind.MALFORMED_FEED)

    try:
        nodes = _entry_nodes(root)
        raws = _raw_entries(decoded, nodes)
        articles = [
            entry_to_article(i, FeedEntry(element=node, raw=raw))
            for i, (node, raw) in enumerate(zip(nodes, raws))
        ]
    except Exception:
        log.exception("Erreur inattendue pendant le parsing du flux.")
        return failure(ErrorKind.UNKNOWN)

    if not articles:
        return failure(ErrorKind.NO_ARTICLES)
    with_image = sum(1 for a in articles if a.image)
    log.info("Flux parse: %d article(s), %d avec image.", len(articles), with_image)
    return ParseSuccess(articles=articles)
