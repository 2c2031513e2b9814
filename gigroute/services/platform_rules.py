"""Platform-specific extraction rules for the job text parser

Every supported platform maps to a PlatformProfile holding its title and
description extractors, a default duration and a placeholder address. Adding
a platform means adding an entry to PLATFORM_PROFILES.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from gigroute.utils.string_matcher import KeywordMatcher


FEATURE_SEPARATOR = " • "

GENERIC_ADDRESS = "Job location"

# Name-like run ahead of a suffix; bounded so that long lines without the
# suffix fail in linear time
NAME_RUN = r"[A-Za-z ]{1,60}"

# Longer item counts are not real orders
MAX_ITEM_DIGITS = 4


@dataclass(frozen=True)
class FeatureRule:
    """
    A feature label detected from keywords or a regular expression

    Attributes:
        label: Text shown in the description when the feature is present
        keywords: Literal keywords (case-insensitive substring match)
        pattern: Optional regular expression, searched case-insensitively
    """
    label: str
    keywords: Tuple[str, ...] = ()
    pattern: Optional[str] = None


@dataclass(frozen=True)
class PlatformProfile:
    """
    Extraction settings for one platform

    Attributes:
        id: Platform identifier
        name: Display name
        category: Category alias that also resolves to this platform
        description_extractor: text -> description (never empty)
        fallback_address: Used when no address is found in the text
        title_extractor: text -> title, None to keep the generic title
        default_duration: Minutes, None to keep the generic duration
        duration_extractor: text -> minutes, overrides default_duration
    """
    id: str
    name: str
    category: str
    description_extractor: Callable[[str], str]
    fallback_address: str
    title_extractor: Optional[Callable[[str], str]] = None
    default_duration: Optional[int] = None
    duration_extractor: Optional[Callable[[str], int]] = field(default=None)

    def duration_for(self, text: str) -> Optional[int]:
        if self.duration_extractor is not None:
            return self.duration_extractor(text)
        return self.default_duration


def feature_description(rules: List[FeatureRule], default: str) -> Callable[[str], str]:
    """
    Build a description extractor from feature rules

    The returned function joins the labels of every matching rule, in rule
    order, and falls back to the default when nothing matches.
    """
    compiled = [
        (
            rule.label,
            KeywordMatcher(rule.keywords) if rule.keywords else None,
            re.compile(rule.pattern, re.IGNORECASE) if rule.pattern else None
        )
        for rule in rules
    ]

    def extract(text: str) -> str:
        features = []
        for label, matcher, pattern in compiled:
            if matcher is not None and matcher.contains_any(text):
                features.append(label)
            elif pattern is not None and pattern.search(text):
                features.append(label)
        return FEATURE_SEPARATOR.join(features) if features else default

    return extract


def keyword_title(rules: List[Tuple[Tuple[str, ...], str]], default: str) -> Callable[[str], str]:
    """
    Build a title extractor from ordered (keywords, title) rules

    The first rule with a keyword present in the text wins.
    """
    compiled = [(KeywordMatcher(keywords), title) for keywords, title in rules]

    def extract(text: str) -> str:
        for matcher, title in compiled:
            if matcher.contains_any(text):
                return title
        return default

    return extract


# Grocery delivery

_GROCERY_STORE = re.compile(r"(Whole Foods|Costco|Safeway|QFC|Fred Meyer|Target)", re.IGNORECASE)
_ITEM_COUNT = re.compile(r"(?<!\d)(\d{1,%d})(?!\d)\s*item" % MAX_ITEM_DIGITS, re.IGNORECASE)


def _instacart_title(text: str) -> str:
    store = _GROCERY_STORE.search(text)
    items = _ITEM_COUNT.search(text)

    if store and items:
        return f"Grocery Delivery - {store.group(1)} ({items.group(1)} items)"
    if store:
        return f"Grocery Delivery - {store.group(1)}"
    if items:
        return f"Grocery Delivery - {items.group(1)} items"
    return "Grocery Delivery"


def _instacart_duration(text: str) -> int:
    items = _ITEM_COUNT.search(text)
    if items:
        # 2 minutes per item plus 15 base, kept within 15-60
        item_count = int(items.group(1))
        return max(15, min(60, item_count * 2 + 15))
    return 45


# Restaurant pickup

_RESTAURANT_PATTERNS = [
    re.compile(r"\bfrom[ \t]+(" + NAME_RUN + r")", re.IGNORECASE),
    re.compile(r"(McDonald's|Starbucks|Chipotle|Subway|Pizza Hut|Domino's)", re.IGNORECASE),
    re.compile(r"(" + NAME_RUN + r"(?:Restaurant|Cafe|Kitchen|Grill|Pizza))\b", re.IGNORECASE),
]


def _doordash_title(text: str) -> str:
    for pattern in _RESTAURANT_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return f"Restaurant Pickup - {match.group(1).strip()}"
    return "Restaurant Pickup"


_FAST_FOOD = re.compile(r"McDonald's|fast food", re.IGNORECASE)
_EATERY = re.compile(r"(" + NAME_RUN + r"(?:Restaurant|Cafe|Kitchen))\b", re.IGNORECASE)


def _uber_title(text: str) -> str:
    if _FAST_FOOD.search(text):
        return "Fast Food - McDonald's"

    match = _EATERY.search(text)
    if match and match.group(1).strip():
        return f"Restaurant - {match.group(1).strip()}"

    return "Food Delivery"


PLATFORM_PROFILES: Dict[str, PlatformProfile] = {
    "instacart": PlatformProfile(
        id="instacart",
        name="Instacart",
        category="grocery-delivery",
        title_extractor=_instacart_title,
        description_extractor=feature_description([
            FeatureRule("Heavy items", ("heavy",)),
            FeatureRule("Organic products", ("organic",)),
            FeatureRule("Alcohol delivery", ("alcohol",)),
            FeatureRule("Good tipper", ("tip",)),
        ], "Grocery shopping and delivery"),
        default_duration=45,
        duration_extractor=_instacart_duration,
        fallback_address="Local grocery store",
    ),
    "doordash": PlatformProfile(
        id="doordash",
        name="DoorDash",
        category="food-delivery",
        title_extractor=_doordash_title,
        description_extractor=feature_description([
            FeatureRule("Order ready", ("ready",)),
            FeatureRule("Peak pay", ("peak",)),
            FeatureRule("Bonus pay", pattern=r"\+\$\d"),
            FeatureRule("Close delivery", ("close", "near")),
        ], "Food pickup and delivery"),
        default_duration=25,
        fallback_address="Restaurant pickup location",
    ),
    "uber": PlatformProfile(
        id="uber",
        name="Uber Eats",
        category="rideshare-food",
        title_extractor=_uber_title,
        description_extractor=feature_description([
            FeatureRule("Quick pickup", ("quick", "fast")),
            FeatureRule("Drive-thru", pattern=r"drive.?thru"),
            FeatureRule("Small order", ("small", "little")),
        ], "Food delivery"),
        default_duration=20,
        fallback_address="Restaurant pickup location",
    ),
    "fieldagent": PlatformProfile(
        id="fieldagent",
        name="Field Agent",
        category="field-audit",
        title_extractor=keyword_title([
            (("starbucks",), "Starbucks Experience Audit"),
            (("target", "walmart", "retail"), "Retail Display Audit"),
            (("secret shop", "mystery"), "Mystery Shopping Task"),
        ], "Field Agent Task"),
        description_extractor=feature_description([
            FeatureRule("Photo required", ("photo",)),
            FeatureRule("Receipt photo", ("receipt",)),
            FeatureRule("Price check", ("price",)),
            FeatureRule("Display audit", ("audit", "display")),
        ], "Field audit task"),
        default_duration=30,
        fallback_address="Retail location",
    ),
    "epms": PlatformProfile(
        id="epms",
        name="EPMS",
        category="retail-audit",
        title_extractor=keyword_title([
            (("walmart",), "Walmart Store Audit"),
            (("target",), "Target Display Check"),
            (("kroger",), "Kroger Compliance Audit"),
            (("home depot",), "Home Depot Product Audit"),
            (("audit", "compliance"), "Store Compliance Audit"),
        ], "EPMS Store Audit"),
        description_extractor=feature_description([
            FeatureRule("Planogram check", ("planogram",)),
            FeatureRule("Price verification", ("price",)),
            FeatureRule("Inventory count", ("inventory",)),
            FeatureRule("Display compliance", ("display",)),
            FeatureRule("Photo documentation", ("photo",)),
        ], "Store audit and compliance check"),
        default_duration=45,
        fallback_address="Store location",
    ),
    "ellis": PlatformProfile(
        id="ellis",
        name="Ellis",
        category="mystery-shop",
        title_extractor=keyword_title([
            (("restaurant",), "Restaurant Mystery Shop"),
            (("hotel",), "Hotel Service Evaluation"),
            (("bank",), "Bank Service Assessment"),
            (("retail",), "Retail Mystery Shop"),
            (("mystery shop",), "Mystery Shopping Assignment"),
        ], "Ellis Service Evaluation"),
        description_extractor=feature_description([
            FeatureRule("Purchase required", ("purchase",)),
            FeatureRule("Staff interaction", ("interaction",)),
            FeatureRule("Service timing", ("timing",)),
            FeatureRule("Cleanliness check", ("cleanliness",)),
            FeatureRule("Receipt required", ("receipt",)),
        ], "Service quality evaluation"),
        default_duration=60,
        fallback_address="Client location",
    ),
    "alt360": PlatformProfile(
        id="alt360",
        name="Alt360",
        category="survey",
        title_extractor=keyword_title([
            (("survey",), "Customer Survey Collection"),
            (("data collection",), "Data Collection Assignment"),
            (("market research",), "Market Research Task"),
            (("interview",), "Customer Interview"),
        ], "Alt360 Survey Task"),
        description_extractor=feature_description([
            FeatureRule("Tablet provided", ("tablet",)),
            FeatureRule("Demographic targeting", ("demographic",)),
            FeatureRule("Customer incentive", ("incentive",)),
            FeatureRule("Location specific", ("location",)),
        ], "Survey and data collection"),
        default_duration=35,
        fallback_address="Survey location",
    ),
    "prestoshopper": PlatformProfile(
        id="prestoshopper",
        name="PrestoShopper",
        category="personal-shopping",
        title_extractor=keyword_title([
            (("grocery",), "Grocery Shopping Assignment"),
            (("pharmacy",), "Pharmacy Shopping Task"),
            (("delivery",), "Shopping & Delivery"),
            (("pickup",), "Shopping & Pickup"),
        ], "PrestoShopper Assignment"),
        description_extractor=feature_description([
            FeatureRule("Organic products", ("organic",)),
            FeatureRule("Prescription pickup", ("prescription",)),
            FeatureRule("Substitutions allowed", ("substitution",)),
            FeatureRule("Special requests", ("special request",)),
            FeatureRule("Full reimbursement", ("reimbursement",)),
        ], "Shopping and fulfillment service"),
        default_duration=40,
        fallback_address="Shopping location",
    ),
    "gigspot": PlatformProfile(
        id="gigspot",
        name="Gig Spot",
        category="photo-task",
        description_extractor=feature_description([
            FeatureRule("Photo required", ("photo", "picture")),
            FeatureRule("Shelf check", ("shelf", "display")),
        ], "Photo and data capture task"),
        fallback_address="Task location",
    ),
}

CATEGORY_ALIASES: Dict[str, str] = {
    profile.category: platform_id for platform_id, profile in PLATFORM_PROFILES.items()
}

MANUAL_PLATFORM = "manual"


def normalize_platform(platform: Optional[str]) -> Optional[str]:
    """
    Resolve a platform id or category alias to a platform id

    Args:
        platform: Raw platform value (any case, may be a category alias)

    Returns:
        Known platform id, the lower-cased value when unknown, or None when
        the value is missing or blank
    """
    if platform is None:
        return None

    normalized = str(platform).strip().lower()
    if not normalized:
        return None

    return CATEGORY_ALIASES.get(normalized, normalized)


def get_profile(platform: Optional[str]) -> Optional[PlatformProfile]:
    """Get the extraction profile for a platform id or alias, if it has one"""
    platform_id = normalize_platform(platform)
    if platform_id is None:
        return None
    return PLATFORM_PROFILES.get(platform_id)


def fallback_address(platform: Optional[str]) -> str:
    """Placeholder address used when no address is found in the text"""
    profile = get_profile(platform)
    return profile.fallback_address if profile else GENERIC_ADDRESS


def platform_names() -> Dict[str, str]:
    """Get display names of all known platforms"""
    names = {platform_id: profile.name for platform_id, profile in PLATFORM_PROFILES.items()}
    names[MANUAL_PLATFORM] = "Manual"
    return names
