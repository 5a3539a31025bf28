from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

INDIRECT_DEPENDENCIES_FLAG = "hasIndirectDependencies"

# Fallback emojis when the flags document does not describe a flag.
DEFAULT_FLAG_EMOJIS: Dict[str, str] = {
    "isGit": "☁️",
    "isOutdated": "⌚️",
    "hasMissingOrUnusedDependency": "👀",
    "hasMinifiedCode": "🔬",
    "isDeprecated": "⛔️",
    "hasWarnings": "🚧",
    "hasNoLicense": "📜",
    "hasMultipleLicenses": "📚",
    "hasBannedFile": "⚔️",
    "hasNativeCode": "🐲",
    "hasScript": "📦",
    INDIRECT_DEPENDENCIES_FLAG: "🌲",
    "hasCustomResolver": "💎",
    "hasExternalCapacity": "🌍",
    "hasDuplicate": "🎭",
}

VULNERABLE_EMOJI = "🚨"
NO_DEPENDENCIES_EMOJI = "🍃"
MANY_PUBLISHERS_EMOJI = "👥"
NO_RECENT_UPDATE_EMOJI = "💤"
DUPLICATE_EMOJI = DEFAULT_FLAG_EMOJIS["hasDuplicate"]

ROOT_COLOR = {"background": "#01579B", "border": "#0277BD", "highlight": {"background": "#0288D1", "border": "#01579B"}}
WARNING_COLOR = {"background": "#EF6C00", "border": "#E65100", "highlight": {"background": "#F57C00", "border": "#E65100"}}
DEFAULT_COLOR = {"background": "#B0BEC5", "border": "#78909C", "highlight": {"background": "#CFD8DC", "border": "#78909C"}}

WARNING_FLAGS = ("hasWarnings", "isDeprecated")


def _flag_emoji(flag: str, flags_doc: Dict[str, Any]) -> str:
    entry = flags_doc.get(flag) if isinstance(flags_doc, dict) else None
    if isinstance(entry, dict) and entry.get("emoji"):
        return entry["emoji"]
    return DEFAULT_FLAG_EMOJIS.get(flag, "")


def get_flags(
    flags: Iterable[str],
    flags_doc: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
    vulnerabilities: Optional[List[Any]] = None,
    versions: Optional[List[str]] = None,
) -> str:
    """Return the emoji suffix shown after ``name@version`` in a node label.

    Empty string when nothing applies, otherwise a leading space followed by
    space separated emojis.
    """
    flags_doc = flags_doc or {}
    metadata = metadata or {}
    emojis = []
    for flag in flags:
        emoji = _flag_emoji(flag, flags_doc)
        if emoji:
            emojis.append(emoji)

    if vulnerabilities:
        emojis.append(VULNERABLE_EMOJI)
    if metadata.get("dependencyCount") == 0:
        emojis.append(NO_DEPENDENCIES_EMOJI)
    if metadata.get("hasManyPublishers"):
        emojis.append(MANY_PUBLISHERS_EMOJI)
    if metadata.get("hasReceivedUpdateInOneYear") is False:
        emojis.append(NO_RECENT_UPDATE_EMOJI)
    if versions and len(versions) > 1 and DUPLICATE_EMOJI not in emojis:
        emojis.append(DUPLICATE_EMOJI)

    if not emojis:
        return ""
    return " " + " ".join(emojis)


def get_node_color(package_id, flags: Iterable[str]) -> Dict[str, Any]:
    if package_id == 0:
        return copy.deepcopy(ROOT_COLOR)
    flag_set = set(flags)
    if any(flag in flag_set for flag in WARNING_FLAGS):
        return copy.deepcopy(WARNING_COLOR)
    return copy.deepcopy(DEFAULT_COLOR)


def classify(
    package_id,
    flags: Iterable[str],
    flags_doc: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
    vulnerabilities: Optional[List[Any]] = None,
    versions: Optional[List[str]] = None,
) -> Tuple[str, Dict[str, Any]]:
    flags = list(flags)
    suffix = get_flags(flags, flags_doc, metadata, vulnerabilities, versions)
    return suffix, get_node_color(package_id, flags)
