from __future__ import annotations

import os


def catalog_base_url() -> str:
    url = os.getenv("CATALOG_API_URL")

    if not url:
        raise RuntimeError("CATALOG_API_URL environment variable is not set")

    return url.rstrip("/")


def catalog_products_path() -> str:
    path = os.getenv("CATALOG_PRODUCTS_PATH", "/products")

    return path if path.startswith("/") else f"/{path}"


def catalog_timeout_seconds() -> float:
    return float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10"))
