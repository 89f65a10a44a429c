# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.errors import register_error_handlers
from storefront.api.routers import health, products, auth, cart, orders, contact, admin


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(auth.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(contact.router)
    app.include_router(admin.router)

    return app
