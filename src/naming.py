"""Station name canonicalization shared by every lookup and comparison."""

STATION_SUFFIX = " Station"


def base_station_name(name: str) -> str:
    """Station name without the trailing " Station" marker"""
    if not name:
        return ""
    name = name.strip()
    if name.endswith(STATION_SUFFIX):
        name = name[:-len(STATION_SUFFIX)].rstrip()
    return name


def canonical_station_name(name: str) -> str:
    """Canonical lookup key: "Bole" and "Bole Station" both become "Bole Station".

    Blank input yields "" so callers can reject it.
    """
    base = base_station_name(name)
    if not base:
        return ""
    return base + STATION_SUFFIX
