# =============================================================================
# formflow/lib/paths.py - Path and URL Helpers
# =============================================================================
# Filesystem resolution for views/fields directories and URL building for
# step routes (baseUrl prefixes, express-style route params).
# =============================================================================

import os
import re

# ":name" or ":name?" inside a params pattern
_PARAM_RE = re.compile(r"^:(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?P<optional>\?)?$")


def resolve_path(base: str | os.PathLike, path: str | os.PathLike) -> str:
    """
    Resolve path against base, returning an absolute, normalized path.

    Absolute paths are returned unchanged (apart from normalization).

    Example:
        resolve_path("/srv/app", "views")      # "/srv/app/views"
        resolve_path("/srv/app", "/tmp/views") # "/tmp/views"
    """
    return os.path.abspath(os.path.join(os.fspath(base), os.fspath(path)))


def expand_params(pattern: str | None) -> list[str]:
    """
    Expand an express-style params pattern into FastAPI path suffixes.

    Each optional param doubles as "present" or "absent"; an optional
    param can only be present when every optional param before it is.
    Required params appear in every expansion.

    Args:
        pattern: e.g. "/:action?" or "/:id/:action?"

    Returns:
        List of path suffixes, shortest first

    Example:
        expand_params("/:action?/:id?")  # ["", "/{action}", "/{action}/{id}"]
        expand_params("/:id")            # ["/{id}"]
        expand_params("")                # [""]

    Raises:
        ValueError: If a segment is not a valid ":param" token
    """
    if not pattern:
        return [""]

    expansions = [""]
    for segment in (s for s in pattern.split("/") if s):
        match = _PARAM_RE.match(segment)
        if not match:
            raise ValueError(f"Invalid route param segment: {segment!r}")
        part = "/{" + match.group("name") + "}"
        if match.group("optional"):
            # Only the longest expansion so far can grow
            expansions.append(expansions[-1] + part)
        else:
            expansions = [e + part for e in expansions]
    return expansions


def join_url(*parts: str) -> str:
    """
    Join URL fragments with single slashes.

    Example:
        join_url("/app_1", "/one", "/{action}")  # "/app_1/one/{action}"
        join_url("", "one")                      # "/one"
    """
    segments = [p.strip("/") for p in parts if p and p.strip("/")]
    return "/" + "/".join(segments)


def step_template_name(step: str) -> str:
    """Default template for a step: the step path without slashes."""
    return step.strip("/") or "index"
