#!/usr/bin/env python3
"""
Food Traceability Database Setup Script
Creates the tables and a demo organization with a few records
"""

import sys
from datetime import date
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from foodtrace.core.database import SessionLocal, init_db
from foodtrace.models import Organization
from foodtrace.schemas import (
    RegisterRequest,
    EmployeeCreate,
    IngredientCreate,
    RecipeCreate,
    BatchCreate,
)
from foodtrace.services import (
    OrganizationService,
    EmployeeRepository,
    IngredientRepository,
    RecipeRepository,
    BatchRepository,
)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password"


def setup_database():
    """Initialize database with demo data"""

    print("🚀 Setting up food traceability database...")

    # Create all tables
    print("📊 Creating database tables...")
    init_db()
    print("✅ Tables created")

    # Create session
    db = SessionLocal()

    try:
        # Check if data already exists
        existing_org = db.query(Organization).filter(Organization.email == DEMO_EMAIL).first()
        if existing_org:
            print("⚠️  Demo organization already exists. Skipping setup.")
            print(f"   Existing org: {existing_org.name} (ID: {existing_org.id})")
            return

        # Create organization
        print("\n📦 Creating organization...")
        org = OrganizationService(db).register(RegisterRequest(
            name="Demo Organization",
            email=DEMO_EMAIL,
            password=DEMO_PASSWORD
        ))
        print(f"✅ Created org: {org.name} (ID: {org.id})")

        # Sample records
        print("\n🧾 Creating sample records...")
        EmployeeRepository(db).create(org.id, EmployeeCreate(name="Sam Baker", role="Head Baker"))

        ingredients = IngredientRepository(db)
        flour = ingredients.create(org.id, IngredientCreate(lotcode="FL-0001", name="Flour", date=date.today()))
        yeast = ingredients.create(org.id, IngredientCreate(lotcode="YE-0001", name="Yeast", date=date.today()))

        RecipeRepository(db).create(org.id, RecipeCreate(
            name="Country Loaf",
            lotcode="R-LOAF",
            date_made=date.today(),
            ingredient_ids=[flour.id, yeast.id]
        ))
        batch = BatchRepository(db).create(org.id, BatchCreate(
            employee="Sam Baker",
            recipe_lotcode="R-LOAF",
            batch_lot_code="B-0001",
            date_made=date.today(),
            amount_made="40 loaves",
            ingredients=[
                {"ingredient_id": flour.id, "amount": 20.0},
                {"ingredient_id": yeast.id, "amount": 0.5},
            ]
        ))
        print(f"✅ Created batch {batch.batch_lot_code} using lots FL-0001 and YE-0001")

        print("\n" + "="*60)
        print("🎉 Database setup complete!")
        print("="*60)
        print("\n📝 Login credentials:")
        print(f"   Email:    {DEMO_EMAIL}")
        print(f"   Password: {DEMO_PASSWORD}")
        print("\n🌐 API endpoints:")
        print("   API Docs: http://localhost:8000/docs")
        print("   Login:    POST http://localhost:8000/v1/auth/login")
        print("\n💡 Test the login:")
        print('   curl -X POST http://localhost:8000/v1/auth/login \\')
        print('     -H "Content-Type: application/json" \\')
        print(f'     -d \'{{"email":"{DEMO_EMAIL}","password":"{DEMO_PASSWORD}"}}\'')
        print()

    except Exception as e:
        print(f"\n❌ Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_database()
