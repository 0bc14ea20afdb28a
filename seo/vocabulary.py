"""
Fixed vocabularies behind the long-tail SEO pages.

Every list here is ordered; sitemap generation iterates them in order, so the
output is stable across runs.
"""

from typing import Dict, List, Tuple

EQUIPMENT_TYPE_VARIATIONS: Dict[str, List[str]] = {
    "excavator": [
        "excavator", "mini-excavator", "large-excavator", "hydraulic-excavator",
        "tracked-excavator", "wheeled-excavator", "compact-excavator",
        "crawler-excavator", "long-reach-excavator", "standard-excavator",
    ],
    "skid-steer": [
        "skid-steer", "skid-steer-loader", "compact-track-loader", "wheeled-skid-steer",
        "tracked-skid-steer", "mini-skid-steer", "large-skid-steer",
    ],
    "bulldozer": [
        "bulldozer", "dozer", "crawler-dozer", "wheeled-dozer", "mini-dozer", "large-bulldozer",
    ],
    "backhoe": [
        "backhoe", "backhoe-loader", "tractor-backhoe", "wheeled-backhoe", "extendable-backhoe",
    ],
    "lift": [
        "scissor-lift", "boom-lift", "aerial-lift", "man-lift", "personnel-lift",
        "electric-scissor-lift", "rough-terrain-scissor-lift", "telescopic-boom-lift",
        "articulating-boom-lift", "straight-boom-lift",
    ],
    "forklift": [
        "forklift", "telehandler", "reach-forklift", "warehouse-forklift",
        "rough-terrain-forklift", "electric-forklift", "diesel-forklift", "pneumatic-forklift",
    ],
    "generator": [
        "generator", "portable-generator", "diesel-generator", "industrial-generator",
        "standby-generator", "towable-generator", "silent-generator",
    ],
    "compactor": [
        "compactor", "plate-compactor", "roller-compactor", "vibratory-compactor",
        "asphalt-compactor", "soil-compactor", "trench-compactor",
    ],
    "crane": [
        "crane", "mobile-crane", "tower-crane", "rough-terrain-crane", "all-terrain-crane",
        "crawler-crane", "carry-deck-crane",
    ],
    "dump-truck": [
        "dump-truck", "articulated-dump-truck", "rigid-dump-truck", "off-road-dump-truck",
        "side-dump-truck",
    ],
}

# (brand, model, equipment type)
BRAND_MODELS: List[Tuple[str, str, str]] = [
    ("caterpillar", "320", "excavator"),
    ("caterpillar", "336", "excavator"),
    ("caterpillar", "d6", "bulldozer"),
    ("caterpillar", "299d", "skid-steer"),
    ("john-deere", "310sl", "backhoe"),
    ("john-deere", "35g", "excavator"),
    ("john-deere", "333g", "skid-steer"),
    ("komatsu", "pc210", "excavator"),
    ("komatsu", "d65", "bulldozer"),
    ("bobcat", "t770", "skid-steer"),
    ("bobcat", "e85", "excavator"),
    ("case", "580", "backhoe"),
    ("case", "cx350", "excavator"),
    ("jlg", "600s", "boom-lift"),
    ("jlg", "1850sj", "boom-lift"),
    ("genie", "s65", "boom-lift"),
    ("genie", "gs2669", "scissor-lift"),
    ("terex", "th844c", "telehandler"),
    ("kubota", "kx040", "excavator"),
    ("volvo", "ec220", "excavator"),
]

SERVICE_TYPES: List[str] = [
    "daily", "weekly", "monthly", "long-term", "short-term", "emergency",
    "same-day", "weekend", "24-hour", "overnight", "hourly", "seasonal",
]

INDUSTRIES: List[str] = [
    "construction", "oil-gas", "oilfield", "industrial", "agricultural", "landscaping",
    "residential", "commercial", "municipal", "infrastructure", "marine", "pipeline",
]

PROJECT_TYPES: List[str] = [
    "home-renovation", "driveway-construction", "pool-installation", "tree-removal",
    "concrete-work", "demolition", "foundation-repair", "land-clearing", "storm-cleanup",
    "excavation", "grading", "trenching", "site-preparation", "drainage-installation",
    "septic-installation", "utility-installation", "road-construction",
    "parking-lot-construction", "landscaping-project", "fence-installation",
]

EQUIPMENT_SPECS: Dict[str, List[str]] = {
    "excavator": ["5-ton", "10-ton", "15-ton", "20-ton", "30-ton", "40-ton"],
    "boom-lift": ["30-foot", "40-foot", "60-foot", "80-foot", "120-foot", "150-foot"],
    "scissor-lift": ["20-foot", "26-foot", "32-foot", "40-foot", "50-foot"],
    "forklift": ["3000-lb", "5000-lb", "8000-lb", "10000-lb", "15000-lb"],
    "generator": ["20kw", "50kw", "100kw", "200kw", "500kw"],
    "compactor": ["1-ton", "2-ton", "5-ton", "10-ton"],
}

ATTACHMENTS: List[str] = [
    "bucket", "hydraulic-hammer", "auger", "grapple", "pallet-fork", "trencher", "ripper",
    "thumb", "quick-coupler", "breaker", "compactor-plate", "sweeper", "mulcher", "rake",
]

SEASONAL_EVENTS: List[str] = [
    "hurricane-preparation", "hurricane-recovery", "festival-season", "mardi-gras",
    "crawfish-season", "sugarcane-harvest", "rice-harvest", "football-season",
    "spring-construction", "summer-projects", "fall-cleanup", "winter-maintenance",
]

COMPARISONS: List[Tuple[str, str]] = [
    ("excavator", "backhoe"),
    ("scissor-lift", "boom-lift"),
    ("skid-steer", "compact-track-loader"),
    ("diesel-generator", "gas-generator"),
    ("wheeled-excavator", "tracked-excavator"),
    ("telehandler", "forklift"),
    ("mini-excavator", "backhoe"),
]

PRICING_TERMS: List[str] = [
    "rental-cost", "rental-rates", "daily-rates", "weekly-rates", "monthly-rates",
    "affordable-rental", "budget-rental", "rental-pricing", "rental-estimate", "rental-quote",
]
PRICING_EQUIPMENT: List[str] = ["excavator", "bulldozer", "lift", "generator"]

GUIDE_TOPICS: List[str] = [
    "how-to-rent", "rental-guide", "sizing-guide", "selection-guide", "safety-guide",
    "operation-guide", "rental-requirements", "rental-process", "first-time-rental", "rental-tips",
]
GUIDE_EQUIPMENT: List[str] = ["excavator", "skid-steer", "lift", "generator"]

# Highest-intent equipment pages, ranked first in the sitemap
HEADLINE_EQUIPMENT: List[str] = ["excavator", "skid-steer"]

RECOMMENDED_BY_INDUSTRY: Dict[str, List[str]] = {
    "construction": ["excavator", "bulldozer", "crane", "loader", "compactor"],
    "oil-gas": ["generator", "pump", "compressor", "welder", "light-tower"],
    "agricultural": ["tractor", "loader", "excavator", "forklift", "mower"],
    "industrial": ["forklift", "scissor-lift", "boom-lift", "generator", "compressor"],
    "landscaping": ["skid-steer", "mini-excavator", "loader", "chipper", "mower"],
    "infrastructure": ["paver", "roller", "grader", "excavator", "loader"],
}

RECOMMENDED_BY_PROJECT: Dict[str, List[str]] = {
    "home-renovation": ["mini-excavator", "skid-steer", "dumpster", "scaffold", "generator"],
    "land-clearing": ["bulldozer", "excavator", "chipper", "stump-grinder", "loader"],
    "pool-installation": ["mini-excavator", "skid-steer", "compactor", "pump"],
    "driveway-construction": ["excavator", "roller", "paver", "compactor", "skid-steer"],
    "foundation-work": ["excavator", "compactor", "concrete-mixer", "pump", "generator"],
    "demolition": ["excavator", "bulldozer", "dumpster", "jackhammer", "loader"],
    "landscaping": ["mini-excavator", "skid-steer", "trencher", "auger", "chipper"],
    "drainage": ["excavator", "trencher", "pump", "compactor", "pipe-layer"],
}

# Cities with dedicated type/model landing pages
MAJOR_CITIES: List[str] = ["lafayette-la", "new-orleans-la", "baton-rouge-la", "lake-charles-la"]


def brand_names() -> List[str]:
    seen: List[str] = []
    for brand, _, _ in BRAND_MODELS:
        if brand not in seen:
            seen.append(brand)
    return seen


def longest_prefix(slug: str, candidates: List[str]) -> str:
    """Longest candidate that equals ``slug`` or prefixes it at a hyphen boundary."""
    best = ""
    for candidate in candidates:
        if (slug == candidate or slug.startswith(candidate + "-")) and len(candidate) > len(best):
            best = candidate
    return best
