"""Search suggestions over the song catalog.

Suggestions are ranked into four tiers: primary songs starting with the
query, primary songs containing it, then the same two tiers for marked
songs. Within a tier the catalog order is kept.
"""

from worship_log.core.catalog import DEFAULT_MARKER, is_marked

BROWSE_LIMIT = 10

# Scanning stops after this many raw matches, so on very large catalogs
# the result only reflects the first matches in catalog order.
SCAN_LIMIT = 40


def suggest(
    catalog: list[str],
    query: str,
    limit: int = 15,
    marker: str = DEFAULT_MARKER,
) -> list[str]:
    """Get ranked suggestions for a query.

    Args:
        catalog: Sorted catalog (see build_catalog)
        query: Text typed by the operator
        limit: Maximum number of suggestions
        marker: Marker prefix for the secondary collection

    Returns:
        Ranked list of matching songs; the first catalog entries when the
        query is blank
    """
    search = query.strip().lower()
    if not search:
        return catalog[:BROWSE_LIMIT]

    primary_starts: list[str] = []
    primary_contains: list[str] = []
    marked_starts: list[str] = []
    marked_contains: list[str] = []
    found = 0

    for song in catalog:
        lowered = song.lower()
        marked = is_marked(song, marker)

        if lowered.startswith(search):
            (marked_starts if marked else primary_starts).append(song)
            found += 1
        elif search in lowered:
            (marked_contains if marked else primary_contains).append(song)
            found += 1

        if found >= SCAN_LIMIT:
            break

    ranked = primary_starts + primary_contains + marked_starts + marked_contains
    return ranked[:limit]
