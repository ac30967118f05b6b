from decimal import Decimal

from sqlalchemy.orm import Session

from .db import SessionLocal
from .models import Category, MenuItem, utcnow


DEMO_MENU = [
    {
        "name": "Pizza",
        "description": "Stone-baked, 12 inch",
        "display_order": 1,
        "items": [
            ("Margherita", "Tomato, mozzarella, basil", "11.50", True, 15),
            ("Pepperoni", "Tomato, mozzarella, pepperoni", "13.00", True, 15),
            ("Four Cheese", "Mozzarella, gorgonzola, parmesan, fontina", "13.50", False, 15),
        ],
    },
    {
        "name": "Burgers",
        "description": "Served with fries",
        "display_order": 2,
        "items": [
            ("Classic Burger", "Beef patty, cheddar, pickles", "10.00", True, 12),
            ("Veggie Burger", "Black bean patty, avocado", "9.50", False, 12),
        ],
    },
    {
        "name": "Sides",
        "description": None,
        "display_order": 3,
        "items": [
            ("Garlic Bread", "Toasted with herb butter", "4.50", False, 6),
            ("Fries", "Skin-on, sea salt", "3.50", False, 5),
        ],
    },
    {
        "name": "Drinks",
        "description": None,
        "display_order": 4,
        "items": [
            ("Lemonade", "House-made", "3.00", False, None),
            ("Cola", "330ml can", "2.00", False, None),
        ],
    },
]


def seed_menu(db: Session = None) -> int:
    """
    Insert the demo categories and menu items into an empty catalog.

    Returns the number of menu items created (0 if the menu already has items).
    """
    # Note: Tables should exist first.
    # Run `alembic upgrade head` or `storefront init-db` before seeding.
    owns_session = db is None
    db = db or SessionLocal()
    try:
        existing = db.query(MenuItem).count()
        if existing > 0:
            print(f"Menu already has {existing} items. Not seeding again.")
            return 0

        created = 0
        for entry in DEMO_MENU:
            category = Category(
                name=entry["name"],
                description=entry["description"],
                display_order=entry["display_order"],
                is_active=True,
            )
            db.add(category)
            db.flush()

            for name, description, price, featured, prep_minutes in entry["items"]:
                db.add(MenuItem(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    category_id=category.id,
                    is_available=True,
                    is_featured=featured,
                    preparation_time=prep_minutes,
                    created_at=utcnow(),
                ))
                created += 1

        db.commit()
        print(f"Seeded {len(DEMO_MENU)} categories and {created} menu items.")
        return created
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_menu()
