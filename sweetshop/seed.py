"""Reset the database to a demo catalog with one admin and one shopper.

Usage:
    python -m sweetshop.seed
"""
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from sweetshop.auth.passwords import hash_password
from sweetshop.database import Base, SessionLocal, engine
from sweetshop.models.sweet import Sweet
from sweetshop.models.user import User
from sweetshop.schemas.sweet import SweetCreate

logger = logging.getLogger(__name__)

ADMIN_ACCOUNT = {'name': 'Admin User', 'email': 'admin@sweetdelights.com', 'password': 'admin123', 'role': 'admin'}
USER_ACCOUNT = {'name': 'Test User', 'email': 'user@test.com', 'password': 'user123', 'role': 'user'}

SAMPLE_SWEETS = [
    {
        'name': 'Gulab Jamun',
        'category': 'Syrup-based',
        'price': 250,
        'quantity': 50,
        'description': 'Soft, spongy milk-solid balls soaked in aromatic sugar syrup. A classic Indian dessert loved by all.',
        'image': 'https://images.unsplash.com/photo-1589119908995-c6c1cd6e8743?w=400',
        'ingredients': ['Milk powder', 'Sugar', 'Ghee', 'Cardamom', 'Rose water'],
        'weight': '500g',
    },
    {
        'name': 'Kaju Katli',
        'category': 'Dry Fruits',
        'price': 800,
        'quantity': 30,
        'description': 'Premium cashew fudge with a thin silver leaf. Smooth, melt-in-mouth texture.',
        'image': 'https://images.unsplash.com/photo-1627662055085-e3c2f0f4b9c0?w=400',
        'ingredients': ['Cashews', 'Sugar', 'Ghee', 'Silver leaf'],
        'weight': '500g',
    },
    {
        'name': 'Rasgulla',
        'category': 'Syrup-based',
        'price': 200,
        'quantity': 40,
        'description': 'Spongy cottage cheese balls soaked in light sugar syrup. Refreshingly sweet.',
        'image': 'https://images.unsplash.com/photo-1586190848861-99aa4a171e90?w=400',
        'ingredients': ['Cottage cheese', 'Sugar', 'Cardamom'],
        'weight': '500g',
    },
    {
        'name': 'Barfi',
        'category': 'Milk-based',
        'price': 350,
        'quantity': 45,
        'description': 'Traditional milk fudge with pistachios and almonds. Rich and creamy.',
        'image': 'https://images.unsplash.com/photo-1631452180519-c014fe946bc7?w=400',
        'ingredients': ['Milk', 'Sugar', 'Pistachios', 'Almonds', 'Cardamom'],
        'weight': '500g',
    },
    {
        'name': 'Ladoo',
        'category': 'Special',
        'price': 300,
        'quantity': 60,
        'description': 'Golden spherical sweets made with gram flour and ghee. Perfect for celebrations.',
        'image': 'https://images.unsplash.com/photo-1599599810769-bcde5a160d32?w=400',
        'ingredients': ['Gram flour', 'Sugar', 'Ghee', 'Cashews', 'Raisins'],
        'weight': '500g',
    },
    {
        'name': 'Jalebi',
        'category': 'Syrup-based',
        'price': 180,
        'quantity': 35,
        'description': 'Crispy, spiral-shaped dessert soaked in saffron-flavored sugar syrup.',
        'image': 'https://images.unsplash.com/photo-1626776877389-6b16dd290f4d?w=400',
        'ingredients': ['Flour', 'Sugar', 'Saffron', 'Cardamom'],
        'weight': '250g',
    },
    {
        'name': 'Sandesh',
        'category': 'Milk-based',
        'price': 280,
        'quantity': 25,
        'description': 'Bengali delicacy made from cottage cheese and sugar. Light and aromatic.',
        'image': 'https://images.unsplash.com/photo-1606312619070-d48b4a8d8f8f?w=400',
        'ingredients': ['Cottage cheese', 'Sugar', 'Cardamom', 'Saffron'],
        'weight': '500g',
    },
    {
        'name': 'Mysore Pak',
        'category': 'Special',
        'price': 400,
        'quantity': 20,
        'description': 'South Indian specialty with gram flour, sugar, and generous ghee. Melt-in-mouth texture.',
        'image': 'https://images.unsplash.com/photo-1606857521015-7f9fcf423740?w=400',
        'ingredients': ['Gram flour', 'Sugar', 'Ghee', 'Cardamom'],
        'weight': '500g',
    },
    {
        'name': 'Rasmalai',
        'category': 'Milk-based',
        'price': 320,
        'quantity': 30,
        'description': 'Cottage cheese patties soaked in sweetened, thickened milk with saffron and cardamom.',
        'image': 'https://images.unsplash.com/photo-1606857521011-c1b8c45d891c?w=400',
        'ingredients': ['Cottage cheese', 'Milk', 'Sugar', 'Saffron', 'Cardamom', 'Pistachios'],
        'weight': '500g',
    },
    {
        'name': 'Peda',
        'category': 'Milk-based',
        'price': 260,
        'quantity': 40,
        'description': 'Soft, dense milk cake flavored with cardamom. A traditional favorite.',
        'image': 'https://images.unsplash.com/photo-1621193967057-09d3e4bb38c6?w=400',
        'ingredients': ['Milk', 'Sugar', 'Cardamom', 'Saffron'],
        'weight': '500g',
    },
    {
        'name': 'Soan Papdi',
        'category': 'Special',
        'price': 220,
        'quantity': 50,
        'description': 'Flaky, crispy threads of sweetness that dissolve on your tongue.',
        'image': 'https://images.unsplash.com/photo-1610192244261-3f33de3f55e4?w=400',
        'ingredients': ['Gram flour', 'Sugar', 'Ghee', 'Cardamom'],
        'weight': '250g',
    },
    {
        'name': 'Motichoor Ladoo',
        'category': 'Seasonal',
        'price': 340,
        'quantity': 35,
        'description': 'Tiny gram flour pearls shaped into balls. Festive and flavorful.',
        'image': 'https://images.unsplash.com/photo-1599599810847-a8e0c4e93da8?w=400',
        'ingredients': ['Gram flour', 'Sugar', 'Ghee', 'Cashews', 'Saffron'],
        'weight': '500g',
    },
]


def _account(data: dict) -> User:
    return User(
        name=data['name'],
        email=data['email'],
        hashed_password=hash_password(data['password']),
        role=data['role'],
    )


def seed_database(bind=None) -> int:
    """Drop every table, recreate them and insert the demo data. Returns the sweet count."""
    bind = bind or engine
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        db.add_all([_account(ADMIN_ACCOUNT), _account(USER_ACCOUNT)])
        db.add_all(Sweet(**SweetCreate(**sweet).to_record()) for sweet in SAMPLE_SWEETS)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()

    return len(SAMPLE_SWEETS)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        count = seed_database()
    except SQLAlchemyError:
        logger.exception('Seeding failed. Check DATABASE_URL and database credentials.')
        sys.exit(1)

    print('Database seeded successfully!')
    print(f"Admin login: {ADMIN_ACCOUNT['email']} / {ADMIN_ACCOUNT['password']}")
    print(f"User login:  {USER_ACCOUNT['email']} / {USER_ACCOUNT['password']}")
    print(f'{count} sweets added to database')


if __name__ == '__main__':
    main()
