"""Heuristic attribute extraction from free-text product descriptions.

Every extractor here takes raw text and returns either a display value or
``SENTINEL``. None of them raise: a row in the catalog table must always
render, whatever the description looks like.

Rule lists are plain data, evaluated top to bottom with first-match-wins.
Their order is a precedence policy (structural patterns before single-unit
patterns) and changing it changes output for ambiguous descriptions.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Pattern, Tuple

from catalog.config import CAS_LOOKUP_TABLE, SENTINEL
from catalog.models import Product, ProductAttributes

__all__ = [
    "PatternRule",
    "PACK_SIZE_RULES",
    "FORMULATION_RULES",
    "CAS_LOOKUP_RULES",
    "extract_pharm_spec",
    "extract_pack_size",
    "extract_formulation_type",
    "resolve_cas_id",
    "derive_attributes",
]


@dataclass(frozen=True)
class PatternRule:
    """A named regex whose first capture group is the extracted value."""

    name: str
    pattern: Pattern[str]

    def extract(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
        return None


def _rule(name: str, regex: str) -> PatternRule:
    return PatternRule(name, re.compile(regex, re.IGNORECASE))


PHARM_SPEC_PATTERN = re.compile(r"\b(BP/USP|BP|USP|INH|IP|IH)\b", re.IGNORECASE)

PACK_SIZE_RULES: List[PatternRule] = [
    _rule("multiplier", r"(\d+\s*[xX]\s*\d+(?:\s*[xX]\s*\d+)?(?:\s*'?s)?)"),
    _rule("unit_count", r"(\d+\s*(?:ml|g|mg|mcg|tablet|cap|vial|ampoule|bottle|pouch|kit)s?)"),
    _rule("vial_of", r"(vial(?:\s*of)?\s*[^,.;]+)"),
    _rule("bottle_of", r"(bottle(?:\s*of)?\s*[^,.;]+)"),
    _rule("ampoule_of", r"(ampoule(?:\s*of)?\s*[^,.;]+)"),
    _rule("pouch_of", r"(pouch(?:\s*of)?\s*[^,.;]+)"),
    _rule("kit", r"(kit)"),
]

# (label, lowercase substrings that trigger it)
FORMULATION_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("Dry Powder For Injection", ("dry powder for injection",)),
    ("Liquid Injection", ("liquid injection",)),
    ("Film Coated", ("film coated",)),
    ("Hard Gelatin", ("hard gelatin",)),
    ("Soft Gelatin", ("soft gelatin",)),
    ("Oral Liquid", ("oral liquid",)),
    ("Extended Release", ("extended release", "er ")),
    ("Sustained Release", ("sustained release", "sr ")),
    ("Immediate Release", ("immediate release", "ir ")),
    ("Effervescent", ("effervescent",)),
    ("Chewable", ("chewable",)),
    ("Orally Disintegrating", ("orally disintegrating", "odt")),
]

CAS_NUMBER_PATTERN = re.compile(r"\b\d{2,7}-\d{2}-\d\b")

CAS_LOOKUP_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(pattern, re.IGNORECASE), cas) for pattern, cas in CAS_LOOKUP_TABLE
]


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _unique(items: List[str]) -> List[str]:
    """De-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(items))


def _normalize_spec(spec: str) -> str:
    return re.sub(r"\s+", "", spec.upper())


def extract_pharm_spec(details: Any) -> str:
    """Collect pharmacopoeia codes (BP, USP, IP, ...) mentioned in the text."""
    text = _as_text(details)
    found = [_normalize_spec(m.group(1)) for m in PHARM_SPEC_PATTERN.finditer(text)]
    unique = _unique(found)
    return ", ".join(unique) if unique else SENTINEL


def extract_pack_size(details: Any, rules: Optional[List[PatternRule]] = None) -> str:
    """Return the pack size from the first pack-size rule that matches."""
    text = _as_text(details)
    for rule in PACK_SIZE_RULES if rules is None else rules:
        value = rule.extract(text)
        if value:
            return value
    return SENTINEL


def extract_formulation_type(
    details: Any,
    dosage_form: Any = "",
    rules: Optional[List[Tuple[str, Tuple[str, ...]]]] = None,
) -> str:
    """Classify the formulation, falling back to the dosage form column."""
    text = _as_text(details).lower()
    for label, triggers in FORMULATION_RULES if rules is None else rules:
        if any(trigger in text for trigger in triggers):
            return label
    return _as_text(dosage_form) or SENTINEL


def resolve_cas_id(product: Product) -> str:
    """Resolve a CAS registry number for a product.

    Explicit ``cas_id`` wins, then CAS-shaped numbers found in the name and
    details, then the static substance lookup table.
    """
    explicit = _as_text(getattr(product, "cas_id", None))
    if explicit and explicit != SENTINEL:
        return explicit

    source = f"{_as_text(getattr(product, 'name', ''))} {_as_text(getattr(product, 'details', ''))}"

    direct = _unique(CAS_NUMBER_PATTERN.findall(source))
    if direct:
        return ", ".join(direct)

    for pattern, cas in CAS_LOOKUP_RULES:
        if pattern.search(source):
            return cas

    return SENTINEL


@lru_cache(maxsize=4096)
def derive_attributes(product: Product) -> ProductAttributes:
    """Compute every derived display attribute for a product."""
    return ProductAttributes(
        pack_size=extract_pack_size(product.details),
        pharm_spec=extract_pharm_spec(product.details),
        formulation_type=extract_formulation_type(product.details, product.dosage_form),
        cas_id=resolve_cas_id(product),
    )
