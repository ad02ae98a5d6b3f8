#!/usr/bin/env python3
"""
Serve a deterministic fake upstream catalog for local development.

Features:
- Deterministic: fixed seed → same catalog every run
- Speaks the upstream wire format (camelCase, currency-prefixed prices)
- No filtering, exactly like the real upstream

Usage:
    python scripts/fake_catalog.py            # listens on :8081
    CATALOG_API_URL=http://localhost:8081 uvicorn catalog_filter.entrypoints.http.app:app --port 8080
"""

from __future__ import annotations

import random
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import uvicorn
from fastapi import FastAPI, Query

from catalog_filter.adapters.in_memory_catalog_source import InMemoryCatalogSource
from catalog_filter.domain.product import Product


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_PRODUCTS = 137  # Deliberately not a multiple of common page sizes
PORT = 8081

ADJECTIVES = ["Wireless", "Compact", "Ergonomic", "Vintage", "Smart", "Portable", "Deluxe"]
NOUNS = ["Headphones", "Desk Lamp", "Keyboard", "Backpack", "Water Bottle", "Speaker", "Chair"]


def generate_product(index: int, rng: random.Random) -> Product:
    name = f"{rng.choice(ADJECTIVES)} {rng.choice(NOUNS)}"
    price = rng.randint(500, 25000) / 100

    return Product(
        id=f"P{index:04d}",
        name=name,
        short_description=f"{name} for everyday use",
        long_description=f"The {name.lower()} comes with a {rng.randint(1, 3)}-year warranty.",
        price=f"${price:.2f}",
        rating=round(rng.uniform(1, 5), 1),
        review_count=rng.randint(0, 2000),
        in_stock=rng.random() > 0.25,
    )


def build_fake_catalog(num_products: int = NUM_PRODUCTS, seed: int = RANDOM_SEED) -> FastAPI:
    rng = random.Random(seed)
    source = InMemoryCatalogSource([generate_product(i, rng) for i in range(1, num_products + 1)])

    app = FastAPI(title="Fake Upstream Catalog")

    @app.get("/products")
    def list_products(
        page: int = Query(ge=1),
        page_size: int = Query(alias="pageSize", ge=0, le=30),
    ) -> dict:
        result = source.fetch_page(page, page_size)
        return {
            "status": "ok",
            "page": result.page_number,
            "pageSize": result.page_size,
            "totalProducts": result.total_products,
            "products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "shortDescription": p.short_description,
                    "longDescription": p.long_description,
                    "price": p.price,
                    "rating": p.rating,
                    "reviewCount": p.review_count,
                    "inStock": p.in_stock,
                }
                for p in result.products
            ],
        }

    return app


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    print(f"🛒 Serving {NUM_PRODUCTS} fake products on :{PORT} (seed={RANDOM_SEED})")
    uvicorn.run(build_fake_catalog(), port=PORT)
