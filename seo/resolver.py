"""
Maps storefront slug paths onto intent descriptors.

Two ordered rule tables drive resolution. The first rule whose predicate
matches builds the descriptor; later rules are never consulted.

- SEO rules apply when the final segment carries the service-area suffix
  (``-lafayette-la``). The suffix is removed from that segment before
  matching.
- Legacy rules apply to suffix-less paths and produce redirect intents that
  point at the structured type / make / city routes.

Anything else resolves to ``unknown``; callers render a 404 for it.
"""

from __future__ import annotations

from typing import Callable, List, Literal, NamedTuple, Optional, Sequence

from pydantic import BaseModel

from inventory.geo import DEFAULT_SERVICE_AREA
from seo.slugs import listing_path

IntentKind = Literal[
    "equipment",
    "service",
    "brand",
    "industry",
    "project",
    "specification",
    "attachment",
    "seasonal",
    "compare",
    "pricing",
    "guide",
    "makeModel",
    "makeModelCity",
    "typeCity",
    "listing",
    "redirectLegacy",
    "unknown",
]
RedirectTarget = Literal["type", "typeCity", "makeModel", "makeModelCity"]

# SEO pages living under a fixed prefix segment, in match priority order
SEO_PREFIX_KINDS: List[str] = [
    "service",
    "brand",
    "industry",
    "project",
    "specification",
    "attachment",
    "seasonal",
    "compare",
    "pricing",
    "guide",
]


class IntentDescriptor(BaseModel):
    """What a storefront URL asks for."""

    kind: IntentKind
    locale: str = "en"
    slug_path: str = ""
    category: Optional[str] = None
    subcategory: Optional[str] = None
    is_canonical_seo_form: bool = False
    make: Optional[str] = None
    model: Optional[str] = None
    city: Optional[str] = None
    primary_type: Optional[str] = None
    redirect_target: Optional[RedirectTarget] = None
    redirect_path: Optional[str] = None

    model_config = {"frozen": True, "protected_namespaces": ()}

    @property
    def is_redirect(self) -> bool:
        return self.kind == "redirectLegacy"

    @property
    def is_unknown(self) -> bool:
        return self.kind == "unknown"


Predicate = Callable[[List[str]], bool]
Constructor = Callable[[List[str], str, str], IntentDescriptor]


class Rule(NamedTuple):
    name: str
    matches: Predicate
    build: Constructor


def _seo_intent(kind: str, category: str, segments: List[str], slug_path: str, locale: str) -> IntentDescriptor:
    return IntentDescriptor(
        kind=kind,
        locale=locale,
        slug_path=slug_path,
        category=category,
        subcategory=segments[2] if len(segments) > 2 else None,
        is_canonical_seo_form=True,
    )


def _equipment_rule() -> Rule:
    def matches(segs: List[str]) -> bool:
        return len(segs) == 1 and segs[0].endswith("-rental") and len(segs[0]) > len("-rental")

    def build(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        return _seo_intent("equipment", segs[0][: -len("-rental")], segs, slug_path, locale)

    return Rule("equipment", matches, build)


def _prefix_rule(kind: str) -> Rule:
    def matches(segs: List[str]) -> bool:
        return len(segs) >= 2 and segs[0] == kind and bool(segs[1])

    def build(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        return _seo_intent(kind, segs[1], segs, slug_path, locale)

    return Rule(kind, matches, build)


def _redirect(
    target: RedirectTarget,
    slug_path: str,
    locale: str,
    *,
    primary_type: Optional[str] = None,
    make: Optional[str] = None,
    model: Optional[str] = None,
    city: Optional[str] = None,
) -> IntentDescriptor:
    if target == "type":
        path = listing_path(locale, "type", primary_type)
    elif target == "typeCity":
        path = listing_path(locale, "type", primary_type, city)
    elif target == "makeModel":
        path = listing_path(locale, "make", make, model)
    else:
        path = listing_path(locale, "make", make, model, city)

    return IntentDescriptor(
        kind="redirectLegacy",
        locale=locale,
        slug_path=slug_path,
        category=primary_type,
        primary_type=primary_type,
        make=make,
        model=model,
        city=city,
        redirect_target=target,
        redirect_path=path,
    )


def _legacy_rules() -> List[Rule]:
    def type_with_location(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        equipment_type = segs[0].split("-rental-", 1)[0]
        return _redirect("type", slug_path, locale, primary_type=equipment_type)

    def make_model_parts(segs: List[str]) -> List[str]:
        return segs[0][: -len("-rental")].split("-")

    def make_model(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        parts = make_model_parts(segs)
        return _redirect("makeModel", slug_path, locale, make=parts[0], model="-".join(parts[1:]))

    def make_model_city(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        city = segs[2][len("rental-"):]
        return _redirect("makeModelCity", slug_path, locale, make=segs[0], model=segs[1], city=f"{city}-la")

    def type_city_state(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        return _redirect("typeCity", slug_path, locale, primary_type=segs[0], city=f"{segs[1]}-{segs[2]}")

    def type_equipment_city(segs: List[str], slug_path: str, locale: str) -> IntentDescriptor:
        equipment_type, city = segs[0].split("-equipment-", 1)
        return _redirect("typeCity", slug_path, locale, primary_type=equipment_type, city=f"{city}-la")

    return [
        Rule(
            "type-rental-location",
            lambda s: len(s) == 1 and "-rental-" in s[0],
            type_with_location,
        ),
        Rule(
            "make-model-rental",
            lambda s: len(s) == 1 and s[0].endswith("-rental") and len(make_model_parts(s)) >= 2,
            make_model,
        ),
        Rule(
            "make-model-rental-city",
            lambda s: len(s) == 3 and s[2].startswith("rental-") and len(s[2]) > len("rental-"),
            make_model_city,
        ),
        Rule(
            "type-city-state",
            lambda s: len(s) == 3 and all(s),
            type_city_state,
        ),
        Rule(
            "type-equipment-city",
            lambda s: len(s) == 1 and "-equipment-" in s[0],
            type_equipment_city,
        ),
    ]


class UrlPatternResolver:
    """First-match resolver over the SEO and legacy rule tables."""

    def __init__(self, seo_suffix: str = DEFAULT_SERVICE_AREA.seo_suffix, base_segment: str = "equipment-rental"):
        self.seo_suffix = seo_suffix
        self.base_segment = base_segment
        self.seo_rules: List[Rule] = [_equipment_rule()] + [_prefix_rule(kind) for kind in SEO_PREFIX_KINDS]
        self.legacy_rules: List[Rule] = _legacy_rules()

    def resolve(self, segments: Sequence[str], locale: str = "en") -> IntentDescriptor:
        segs = [s for s in segments if s]
        slug_path = "/".join(segs)
        unknown = IntentDescriptor(kind="unknown", locale=locale, slug_path=slug_path)
        if not segs:
            return unknown

        if segs[-1].endswith(self.seo_suffix):
            stripped = segs[:-1] + [segs[-1][: -len(self.seo_suffix)]]
            rules, candidate = self.seo_rules, stripped
        else:
            rules, candidate = self.legacy_rules, segs

        for rule in rules:
            if rule.matches(candidate):
                return rule.build(candidate, slug_path, locale)
        return unknown

    def resolve_path(self, path: str) -> IntentDescriptor:
        """Resolve a full path such as ``/en/equipment-rental/service/x-lafayette-la``."""
        parts = [p for p in path.split("/") if p]
        locale = "en"
        if parts and parts[0] != self.base_segment:
            locale = parts.pop(0)
        if parts and parts[0] == self.base_segment:
            parts.pop(0)
        return self.resolve(parts, locale)
