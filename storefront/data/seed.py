# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import AdminUserRepo
from storefront.services.auth_service import AuthService
from storefront.utils.settings import DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "id": "zeus-whey",
        "name": "Zeus Whey",
        "description": "The Ultimate Strength Formula - Premium whey protein for maximum muscle growth",
        "price": Decimal("2999"),
        "image": "assets/product.png",
        "category": "supplements",
    },
    {
        "id": "ares-preworkout",
        "name": "Ares Pre-workout",
        "description": "Unleash Your Power Surge - High-intensity pre-workout for explosive energy",
        "price": Decimal("1999"),
        "image": "assets/product.png",
        "category": "supplements",
    },
    {
        "id": "hermes-energy",
        "name": "Hermes Energy",
        "description": "For Unmatched Speed & Endurance - Natural energy booster for peak performance",
        "price": Decimal("1499"),
        "image": "assets/product.png",
        "category": "supplements",
    },
    {
        "id": "athena-focus",
        "name": "Athena Focus",
        "description": "A True Brain Booster - Cognitive enhancement for mental clarity",
        "price": Decimal("1799"),
        "image": "assets/product.png",
        "category": "supplements",
    },
    {
        "id": "olympian-tee",
        "name": "The Olympian Tee",
        "description": "Premium Cotton-Poly Blend with Athletic Fit & High-Durability FEAR Logo Print",
        "price": Decimal("1999"),
        "image": "assets/merchandise.png",
        "category": "apparel",
    },
]


def seed_db(db: Session):
    # not forcing: only seed empty tables
    products = ProductRepo(db)
    if products.count() == 0:
        products.add_all([ProductModel(**p) for p in SAMPLE_PRODUCTS])
        db.commit()
        logger.info(f"Inserted {len(SAMPLE_PRODUCTS)} sample products")

    if AdminUserRepo(db).count() == 0:
        AuthService(db).create_admin(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)
        logger.info(f"Default admin user '{DEFAULT_ADMIN_USERNAME}' created")


def seed():
    db = SessionLocal()
    try:
        seed_db(db)
    finally:
        db.close()
