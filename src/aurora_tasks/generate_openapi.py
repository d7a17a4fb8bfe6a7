"""
Utility script to generate and write the OpenAPI schema for the task API.

Serializes the app's OpenAPI schema so clients of the local task API can
consume a stable contract without running the server.

Usage:
    python -m aurora_tasks.generate_openapi [OUT_PATH]

Notes:
- The 'health' and 'tasks' tags are ensured in the tag metadata.
- Default output path is interfaces/openapi.json under the current directory.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .main import create_app, openapi_tags
from .settings import get_settings
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)

DEFAULT_OUT_PATH = os.path.join("interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema contains the expected tags metadata. Existing
    tag definitions are left untouched; only missing ones are appended.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """
    Write the OpenAPI schema to `out_path` (creating directories as needed)
    and return the written path.
    """
    out_path = out_path or DEFAULT_OUT_PATH
    # The schema does not depend on stored tasks; avoid touching real storage.
    app = create_app(settings=get_settings(), storage=InMemoryStorage())
    schema = app.openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", out_path)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    path = generate_openapi(args[0] if args else None)
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
