# Services package init
"""
PWAcommerce Backend - Services Layer
======================================

Service Inventory:
    - CommerceClient:      async REST client for one WooCommerce store
    - CatalogService:      category/product/review/variation queries
    - ManifestService:     web app manifest from settings and stored icons
    - UploadService:       icon storage in every manifest size, URL resolution
    - OptionsService:      store options (credentials, icon) in the database
    - CartService (ABC):   cart capability used by the checkout redirect
    - SessionCartService:  cookie-identified cart lines in the database
    - CheckoutService:     checkout payload → sequential cart additions
"""
