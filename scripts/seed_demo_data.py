#!/usr/bin/env python3
"""Seed demo data for local development.

Creates the product catalogue, one shopping list with duplicate and bought
rows, a small pantry and two public recipes for a demo owner, then prints an
access token for that owner.

Usage:
    DATABASE_URL=sqlite:///./bonapp.db python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bonapp.database import SessionLocal, init_db
from bonapp.models import (
    PantryEntry,
    Product,
    ProductCategory,
    ProductInRecipe,
    ProductOnList,
    Recipe,
    RecipeCategory,
    RecipeCategoryLink,
    ShoppingList,
)
from bonapp.services.auth import create_access_token

# Stands in for the identity provider's user id
DEMO_OWNER_ID = "00000000-0000-0000-0000-000000000001"

CATALOGUE = {
    "Nabiał": [("Mleko", "ml"), ("Masło", "g"), ("Jogurt naturalny", "g")],
    "Warzywa": [("Pomidory", "g"), ("Czosnek", "szt"), ("Cebula", "szt")],
    "Suche": [("Makaron", "g"), ("Ryż", "g"), ("Mąka pszenna", "g")],
}

# title, minutes, description, category, steps, ingredients
RECIPES = [
    (
        "Makaron z pomidorami",
        20,
        "Szybkie danie wegetariańskie",
        "Obiady",
        ["Ugotuj makaron", "Podsmaż czosnek i pomidory", "Wymieszaj z makaronem"],
        [("Makaron", 250), ("Pomidory", 400), ("Czosnek", 2)],
    ),
    (
        "Risotto z masłem",
        45,
        "Kremowe risotto",
        "Obiady",
        ["Zeszklij cebulę na maśle", "Dodaj ryż", "Podlewaj mlekiem do miękkości"],
        [("Ryż", 200), ("Cebula", 1), ("Masło", 30), ("Mleko", 300)],
    ),
]


def seed_demo_data():
    """Seed the database with representative data."""
    init_db()
    session = SessionLocal()

    try:
        existing_lists = session.query(ShoppingList.id).filter_by(owner_id=DEMO_OWNER_ID)
        if existing_lists.first():
            print("Demo data already exists. Clearing and re-seeding...")
            session.query(ProductOnList).filter(
                ProductOnList.shopping_list_id.in_(existing_lists)
            ).delete(synchronize_session=False)
            session.query(ShoppingList).filter_by(owner_id=DEMO_OWNER_ID).delete()
            session.query(PantryEntry).filter_by(user_id=DEMO_OWNER_ID).delete()
            owned = session.query(Recipe.id).filter_by(user_id=DEMO_OWNER_ID)
            session.query(ProductInRecipe).filter(ProductInRecipe.recipe_id.in_(owned)).delete(
                synchronize_session=False
            )
            session.query(RecipeCategoryLink).filter(
                RecipeCategoryLink.recipe_id.in_(owned)
            ).delete(synchronize_session=False)
            session.query(Recipe).filter_by(user_id=DEMO_OWNER_ID).delete()
            session.commit()

        # =================================================================
        # PRODUCT CATALOGUE
        # =================================================================
        products: dict[str, Product] = {p.name: p for p in session.query(Product).all()}
        if not products:
            print("Creating product catalogue...")
            for category_name, entries in CATALOGUE.items():
                category = ProductCategory(name=category_name)
                session.add(category)
                session.flush()
                for name, unit in entries:
                    product = Product(name=name, unit=unit, category_id=category.id)
                    session.add(product)
                    products[name] = product
            session.flush()

        # =================================================================
        # SHOPPING LIST (with a duplicated product and bought rows)
        # =================================================================
        print("Creating shopping list...")
        weekly = ShoppingList(name="Zakupy na weekend", owner_id=DEMO_OWNER_ID)
        session.add(weekly)
        session.flush()

        session.add_all(
            [
                ProductOnList(
                    shopping_list_id=weekly.id,
                    product_id=products["Makaron"].id,
                    quantity=500,
                    is_bought=True,
                ),
                ProductOnList(
                    shopping_list_id=weekly.id,
                    product_id=products["Makaron"].id,
                    quantity=250,
                    is_bought=True,
                ),
                ProductOnList(
                    shopping_list_id=weekly.id,
                    product_id=products["Pomidory"].id,
                    quantity=400,
                    is_bought=False,
                ),
                ProductOnList(
                    shopping_list_id=weekly.id,
                    product_id=products["Mleko"].id,
                    quantity=1000,
                    is_bought=True,
                ),
            ]
        )

        # =================================================================
        # PANTRY
        # =================================================================
        print("Creating pantry...")
        session.add_all(
            [
                PantryEntry(user_id=DEMO_OWNER_ID, product_id=products["Makaron"].id, quantity=300),
                PantryEntry(user_id=DEMO_OWNER_ID, product_id=products["Ryż"].id, quantity=1000),
            ]
        )

        # =================================================================
        # RECIPES
        # =================================================================
        print("Creating recipes...")
        categories = {c.name: c for c in session.query(RecipeCategory).all()}
        for title, minutes, description, category_name, steps, ingredients in RECIPES:
            if category_name not in categories:
                categories[category_name] = RecipeCategory(name=category_name)
                session.add(categories[category_name])
                session.flush()
            recipe = Recipe(
                user_id=DEMO_OWNER_ID,
                title=title,
                description=description,
                prepare_time=minutes,
                visibility=True,
                steps_list=[
                    {"order": order, "instruction": text}
                    for order, text in enumerate(steps, start=1)
                ],
            )
            session.add(recipe)
            session.flush()
            session.add(
                RecipeCategoryLink(recipe_id=recipe.id, category_id=categories[category_name].id)
            )
            session.add_all(
                ProductInRecipe(recipe_id=recipe.id, product_id=products[name].id, quantity=amount)
                for name, amount in ingredients
            )

        session.commit()
        print("Demo data seeded successfully!")
        print(f"Access token for the demo owner:\n{create_access_token(DEMO_OWNER_ID, 60 * 24)}")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
