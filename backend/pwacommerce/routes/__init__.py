# Routes package init
"""
PWAcommerce Backend - API Routes Package
==========================================

Route Inventory:
    - commerce.py:     /pwacommerce/*   (storefront, gated on store credentials)
    - admin.py:        /admin/*         (store options, gated on X-Admin-Key)
    - health.py:       GET /health
    - dependencies.py: per-request options, store client and cart

Routes stay thin: read the request, call a service, shape the response.
"""
