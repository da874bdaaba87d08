"""
Local intent classification for incoming chat messages.

Matchers run in a fixed priority order and the first one that produces a
reply wins:

    LIST_ALL       -> every product name
    DIRECT_LOOKUP  -> SKU / id tokens such as "sku-001", "product 12", "42"
    FUZZY_LOOKUP   -> loose word/substring match against product text
    DELEGATE       -> nothing matched locally; the router forwards the message

Fuzzy matching is deliberately high-recall: a single common word can match
many unrelated products.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from src.catalog.models import Product
from src.catalog.search import names_only
from src.catalog.store import ProductCatalogue

logger = logging.getLogger(__name__)

LIST_TRIGGERS = (
    "list",
    "names",
    "show products",
    "product list",
    "give the list",
    "give list",
    "give the list product",
    "product names",
)
LIST_REPLY = "Here are the product names:"

# Hard cap on products returned by a lookup reply; extra matches are dropped.
MAX_LOOKUP_RESULTS = 20

_SKU_TOKEN = re.compile(r"(sku[-_ ]?[0-9]{1,6}|product\s*[0-9]{1,6})", re.IGNORECASE | re.ASCII)
_ID_TOKEN = re.compile(r"\b([0-9]{1,6})\b", re.ASCII)
_NON_ALNUM = re.compile(r"[^a-z0-9]", re.IGNORECASE)
_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9 ]", re.IGNORECASE)
_NON_DIGIT = re.compile(r"[^0-9]")


@dataclass
class ChatReply:
    reply: str
    products: Optional[List[Union[str, Dict[str, Any]]]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"reply": self.reply}
        if self.products is not None:
            payload["products"] = self.products
        return payload


@dataclass
class IntentResult:
    label: str  # "LIST_ALL" | "DIRECT_LOOKUP" | "FUZZY_LOOKUP" | "DELEGATE"
    reply: Optional[ChatReply] = None

    @property
    def is_local(self) -> bool:
        return self.reply is not None


def lookup_reply(matches: Sequence[Product]) -> ChatReply:
    return ChatReply(
        reply=f"Found {len(matches)} matching product(s).",
        products=[p.to_summary() for p in matches[:MAX_LOOKUP_RESULTS]],
    )


def match_list_all(message: str, catalogue: ProductCatalogue) -> Optional[ChatReply]:
    lowered = message.lower()
    if any(trigger in lowered for trigger in LIST_TRIGGERS):
        return ChatReply(reply=LIST_REPLY, products=names_only(catalogue.all()))
    return None


def find_direct_matches(message: str, products: Sequence[Product]) -> List[Product]:
    """
    SKU-like tokens match on id equality or SKU containment; otherwise the
    first standalone 1-6 digit run is tried against ids only.
    """
    matches: List[Product] = []
    sku_token = _SKU_TOKEN.search(message)
    if sku_token:
        digits = _NON_DIGIT.sub("", sku_token.group(0))
        matches = [p for p in products if p.id_text == digits or (p.sku and digits in p.sku.lower())]

    if not matches:
        id_token = _ID_TOKEN.search(message)
        if id_token:
            wanted = id_token.group(1)
            matches = [p for p in products if p.id_text == wanted]
    return matches


def match_direct_lookup(message: str, catalogue: ProductCatalogue) -> Optional[ChatReply]:
    matches = find_direct_matches(message, catalogue.all())
    return lookup_reply(matches) if matches else None


def find_fuzzy_matches(message: str, products: Sequence[Product]) -> List[Product]:
    lowered = message.lower()
    words = [_NON_ALNUM.sub("", w) for w in lowered.split()]
    # SKU-like alphanumeric tokens, e.g. "txj001"
    tokens = [w for w in words if len(w) >= 3]
    whole = _NON_ALNUM_SPACE.sub("", lowered)

    matches = []
    for p in products:
        hay = p.haystack
        if any(w and w in hay for w in words) or any(t in hay for t in tokens) or whole in hay:
            matches.append(p)
    return matches


def match_fuzzy_lookup(message: str, catalogue: ProductCatalogue) -> Optional[ChatReply]:
    matches = find_fuzzy_matches(message, catalogue.all())
    return lookup_reply(matches) if matches else None


Matcher = Callable[[str, ProductCatalogue], Optional[ChatReply]]

DEFAULT_MATCHERS: Tuple[Tuple[str, Matcher], ...] = (
    ("LIST_ALL", match_list_all),
    ("DIRECT_LOOKUP", match_direct_lookup),
    ("FUZZY_LOOKUP", match_fuzzy_lookup),
)


class IntentClassifier:
    """Runs the local matchers against a read-only catalog."""

    def __init__(self, catalogue: ProductCatalogue, matchers: Sequence[Tuple[str, Matcher]] = DEFAULT_MATCHERS):
        self.catalogue = catalogue
        self.matchers = tuple(matchers)

    def classify(self, message: str) -> IntentResult:
        for label, matcher in self.matchers:
            reply = matcher(message, self.catalogue)
            if reply is not None:
                return IntentResult(label=label, reply=reply)
        return IntentResult(label="DELEGATE")
