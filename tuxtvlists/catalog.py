"""The catalog of predefined channels groups, grouped by language."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from xml.etree import ElementTree


@dataclass
class CatalogGroup:
    """A predefined channels group that can be added from the catalog."""

    name: str | None = None
    uri: str | None = None
    required_isp: str | None = None
    bregex: str | None = None
    eregex: str | None = None


@dataclass
class CatalogLanguage:
    """A language section of the catalog with its channels groups."""

    name: str | None = None
    groups: list[CatalogGroup] = field(default_factory=list)


def parse_catalog(data: str | bytes) -> list[CatalogLanguage]:
    """Parse a channels groups catalog document.

    Element and attribute names are matched without regard to case; other
    elements are ignored. A channels_group outside any language is an error.
    """
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as exc:
        raise ValueError(f"invalid channels groups catalog: {exc}") from exc

    languages: list[CatalogLanguage] = []
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        tag = element.tag.lower()
        attrs = {key.lower(): value for key, value in element.attrib.items()}
        if tag == "language":
            languages.append(CatalogLanguage(attrs.get("lang")))
        elif tag == "channels_group":
            if not languages:
                raise ValueError("channels_group found outside of a language")
            languages[-1].groups.append(
                CatalogGroup(
                    name=attrs.get("name"),
                    uri=attrs.get("uri"),
                    required_isp=attrs.get("required_isp"),
                    bregex=attrs.get("bregex"),
                    eregex=attrs.get("eregex"),
                )
            )
    return languages


def load_catalog(cache_dir: str | Path, data_dir: str | Path) -> list[CatalogLanguage]:
    """Load the catalog, preferring the cached copy over the installed one."""
    path = Path(cache_dir) / "freetuxtv" / "channels_groups.dat"
    if not path.exists():
        path = Path(data_dir) / "channels_groups.xml"
    return parse_catalog(path.read_bytes())