PATTERN_TAGS = [
    (lambda p: p.startswith("/api/v1/auth/jwt/"), "JWT Authentication"),
    (lambda p: p.startswith("/api/v1/entries/"), "Entries"),
    (lambda p: p.startswith("/api/v1/members/"), "Members"),
    (
        lambda p: p.startswith("/api/v1/seasons/") and "members" in p,
        "Season Members",
    ),
    (lambda p: p.startswith("/api/v1/seasons/"), "Seasons"),
    (lambda p: p.startswith("/api/v1/statistics/"), "Statistics"),
    (lambda p: p == "/api/v1/schema/", "Meta"),
]


def group_tags(result, generator, request, public):
    """Give every operation a single tag derived from its path prefix."""
    for path, operations in result.get("paths", {}).items():
        tag = None
        for pred, name in PATTERN_TAGS:
            if pred(path):
                tag = name
                break
        if tag is None:
            continue
        for op in operations.values():
            op["tags"] = [tag]
    return result
