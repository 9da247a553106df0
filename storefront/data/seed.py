# storefront/data/seed.py
from decimal import Decimal
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# (name, category, price, description, image)
SAMPLE_PRODUCTS = [
    ("Leche entera 1L", "Lácteos", "4200", "Leche entera pasteurizada", "leche-entera.jpg"),
    ("Queso campesino 500g", "Lácteos", "12500", "Queso fresco campesino", "queso-campesino.jpg"),
    ("Yogur natural 1L", "Lácteos", "8900", "Yogur natural sin azúcar", "yogur-natural.jpg"),
    ("Pan tajado", "Panadería", "6500", "Pan blanco tajado 500g", "pan-tajado.jpg"),
    ("Almojábanas x6", "Panadería", "7800", "Almojábanas recién horneadas", "almojabanas.jpg"),
    ("Arroz 1kg", "Despensa", "5200", "Arroz blanco premium", "arroz.jpg"),
    ("Aceite vegetal 1L", "Despensa", "11900", "Aceite de girasol", "aceite.jpg"),
    ("Café molido 500g", "Despensa", "18500", "Café colombiano tostado y molido", "cafe.jpg"),
    ("Pechuga de pollo 1kg", "Carnes", "19800", "Pechuga de pollo sin hueso", "pechuga.jpg"),
    ("Carne molida 500g", "Carnes", "14900", "Carne de res molida", "carne-molida.jpg"),
    ("Banano x6", "Frutas", "3600", "Banano maduro", "banano.jpg"),
    ("Aguacate Hass", "Frutas", "4500", "Aguacate Hass por unidad", "aguacate.jpg"),
    ("Agua sin gas 600ml", "Bebidas", "2000", "Agua de manantial", "agua.jpg"),
    ("Jugo de naranja 1L", "Bebidas", "7400", "Jugo de naranja natural", "jugo-naranja.jpg"),
    ("Jabón de baño x3", "Higiene", "9900", "Jabón de tocador", "jabon.jpg"),
    ("Crema dental 100ml", "Higiene", "6900", "Crema dental con flúor", "crema-dental.jpg"),
]


def seed_catalog(db: Session) -> int:
    repo = ProductRepo(db)

    #only seed an empty catalog
    if repo.count():
        return 0

    products = [
        ProductModel(
            name=name,
            category=category,
            price=Decimal(price),
            description=description,
            image=image,
        )
        for name, category, price, description, image in SAMPLE_PRODUCTS
    ]
    repo.add_all(products)
    logger.info(f"Seeded catalog with {len(products)} products")
    return len(products)
