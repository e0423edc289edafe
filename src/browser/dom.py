from __future__ import annotations

from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# --------------- Classes ---------------
def classes(el: Tag) -> List[str]:
    raw = el.get("class")
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split()
    return list(raw)


def has_class(el: Tag, name: str) -> bool:
    return name in classes(el)


def add_class(el: Tag, *names: str) -> None:
    current = classes(el)
    for name in names:
        if name not in current:
            current.append(name)
    el["class"] = current


def remove_class(el: Tag, *names: str) -> None:
    current = [c for c in classes(el) if c not in names]
    if current:
        el["class"] = current
    elif "class" in el.attrs:
        del el["class"]


def toggle_class(el: Tag, name: str) -> bool:
    """Toggle a class; returns True if the class is now present."""
    if has_class(el, name):
        remove_class(el, name)
        return False
    add_class(el, name)
    return True


def replace_class(el: Tag, old: str, new: str) -> None:
    el["class"] = [new if c == old else c for c in classes(el)]


# --------------- Inline style ---------------
def get_style(el: Tag) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for decl in (el.get("style") or "").split(";"):
        if ":" not in decl:
            continue
        prop, _, value = decl.partition(":")
        prop = prop.strip()
        if prop:
            out[prop] = value.strip()
    return out


def style(el: Tag, prop: str) -> Optional[str]:
    return get_style(el).get(prop)


def set_style(el: Tag, **props: str) -> None:
    """Set inline style properties; underscores map to dashes (font_size -> font-size).

    An empty value removes the property.
    """
    current = get_style(el)
    for key, value in props.items():
        prop = key.replace("_", "-")
        if value == "":
            current.pop(prop, None)
        else:
            current[prop] = value
    if current:
        el["style"] = "; ".join(f"{k}: {v}" for k, v in current.items())
    elif "style" in el.attrs:
        del el["style"]


# --------------- Tree helpers ---------------
def closest(el: Optional[Tag], selector: str) -> Optional[Tag]:
    node = el
    while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
        if node.css.match(selector):
            return node
        node = node.parent
    return None


def element_children(el: Tag) -> List[Tag]:
    return [c for c in el.children if isinstance(c, Tag)]


def index_in_parent(el: Tag) -> int:
    parent = el.parent
    if parent is None:
        return 0
    for i, child in enumerate(element_children(parent)):
        if child is el:
            return i
    return 0


def text(el: Tag) -> str:
    return el.get_text()


def set_text(el: Tag, value: str) -> None:
    el.string = value


def set_html(el: Tag, html: str) -> None:
    el.clear()
    el.append(BeautifulSoup(html, "html.parser"))


def create_element(doc: BeautifulSoup, name: str, *, text: Optional[str] = None, **attrs: str) -> Tag:
    """Create a detached element; `class_` sets the class attribute."""
    if "class_" in attrs:
        attrs["class"] = attrs.pop("class_")
    el = doc.new_tag(name, attrs=attrs)
    if text is not None:
        el.string = text
    return el


def body(doc: BeautifulSoup) -> Tag:
    """Return <body>, creating it if the document has none."""
    found = doc.find("body")
    if found is None:
        found = doc.new_tag("body")
        html = doc.find("html")
        (html if html is not None else doc).append(found)
    return found


def head(doc: BeautifulSoup) -> Tag:
    found = doc.find("head")
    if found is None:
        found = doc.new_tag("head")
        html = doc.find("html")
        (html if html is not None else doc).insert(0, found)
    return found


# --------------- Form fields ---------------
def field_value(el: Tag) -> str:
    if el.name == "textarea":
        return el.get_text()
    return el.get("value") or ""


def set_field_value(el: Tag, value: str) -> None:
    if el.name == "textarea":
        el.string = value
    else:
        el["value"] = value


def field_type(el: Tag) -> str:
    if el.name == "textarea":
        return "textarea"
    return (el.get("type") or "text").lower()
