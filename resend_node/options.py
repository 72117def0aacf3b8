"""
Option lists for UI selectors, built from Resend collections.

Each loader pages through a collection (capped at a few pages) and turns
every record with an ``id`` into a ``{name, value}`` option.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List
from urllib.parse import quote

from .base import ListOptions
from .pagination import JsonTransport, fetch_collection
from .schemas import parse_template_variables, record_id

logger = logging.getLogger(__name__)

OPTIONS_MAX_PAGES = 10

TEMPLATES_PATH = "/templates"
SEGMENTS_PATH = "/segments"
TOPICS_PATH = "/topics"


@dataclass
class OptionItem:
    """A selectable option: display label plus submitted value."""
    name: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


def _option_label(record: Dict[str, Any], record_id_: str) -> str:
    name = record.get("name")
    if name:
        return f"{name} ({record_id_})"
    return record_id_


async def load_options(
    client: JsonTransport,
    api_key: str,
    path: str,
    max_pages: int = OPTIONS_MAX_PAGES,
) -> List[OptionItem]:
    """
    Load every record of a collection as options.

    Args:
        client: Transport issuing the GET requests
        api_key: Bearer token
        path: Collection path, e.g. ``/templates``
        max_pages: Page cap

    Returns:
        Options in fetch order; records without an id are skipped
    """
    response = await fetch_collection(
        client,
        client.build_url(path),
        ListOptions(),
        api_key,
        return_all=True,
        max_pages=max_pages,
    )

    options: List[OptionItem] = []
    for record in response.items:
        rid = record_id(record)
        if rid is None:
            continue
        options.append(OptionItem(name=_option_label(record, rid), value=rid))

    logger.debug(f"Loaded {len(options)} options from {path}")
    return options


async def get_templates(client: JsonTransport, api_key: str) -> List[OptionItem]:
    return await load_options(client, api_key, TEMPLATES_PATH)


async def get_segments(client: JsonTransport, api_key: str) -> List[OptionItem]:
    return await load_options(client, api_key, SEGMENTS_PATH)


async def get_topics(client: JsonTransport, api_key: str) -> List[OptionItem]:
    return await load_options(client, api_key, TOPICS_PATH)


async def get_template_variables(
    client: JsonTransport,
    api_key: str,
    template_id: str,
) -> List[OptionItem]:
    """
    List the variables a template declares, labelled ``key (type)``.

    Returns an empty list without calling the API when the template id is
    blank or still an unresolved ``{{ }}`` expression.
    """
    template_id = (template_id or "").strip()
    if not template_id or "{{" in template_id:
        return []

    raw = await client.get_json(
        client.build_url(f"{TEMPLATES_PATH}/{quote(template_id, safe='')}"),
        api_key,
    )

    options: List[OptionItem] = []
    for variable in parse_template_variables(raw):
        if not variable.key:
            continue
        type_label = f" ({variable.type})" if variable.type else ""
        options.append(OptionItem(name=f"{variable.key}{type_label}", value=variable.key))
    return options
