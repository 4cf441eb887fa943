"""
Substring search and tiered relevance ranking over the application catalog.

Everything here is pure: callers pass the catalog in and get new lists back.
"""

from typing import List, Tuple

from .app_models import AppRecord


def matches_query(app: AppRecord, query: str) -> bool:
    """Check whether a lowercase query is a substring of any searchable field."""
    if query in app.name.lower():
        return True
    if query in app.display_name.lower():
        return True
    if query in app.description.lower():
        return True
    return any(query in keyword.lower() for keyword in app.keywords)


def filter_apps(apps: List[AppRecord], query: str) -> List[AppRecord]:
    """Return matching apps in catalog order; an empty query matches everything."""
    if not query:
        return list(apps)
    query = query.lower()
    return [app for app in apps if matches_query(app, query)]


def relevance_key(app: AppRecord, query: str) -> Tuple[int, str]:
    """Sort key: exact display-name match, then prefix match, then alphabetical."""
    name = app.display_name.lower()
    if name == query:
        tier = 0
    elif name.startswith(query):
        tier = 1
    else:
        tier = 2
    return tier, name


def rank_apps(apps: List[AppRecord], query: str) -> List[AppRecord]:
    """Filter and rank apps for a query.

    An empty query returns the catalog unranked.
    """
    results = filter_apps(apps, query)
    if not query:
        return results
    query = query.lower()
    return sorted(results, key=lambda app: relevance_key(app, query))


def sort_apps(apps: List[AppRecord]) -> List[AppRecord]:
    """Alphabetical order by case-insensitive display name."""
    return sorted(apps, key=lambda app: app.display_name.lower())
