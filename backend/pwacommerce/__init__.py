"""
PWAcommerce Backend - Application Package
==========================================

What: Storefront API that exposes a WooCommerce store to a progressive web app.
How:  Layered the same way throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (catalog, cart, uploads) │  ← Remote calls, cart rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Options + session carts
    └─────────────────────────────────────┘

    Catalog data is never stored here; every catalog request is forwarded
    to the store's REST API and the JSON body is passed through.
"""

__version__ = "1.0.0"
