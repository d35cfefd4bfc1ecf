"""
Test Data Generator for PR Tracker
Populates the database with realistic sample exercises and PR entries

Run with: python seed_test_data.py
"""

import sys
from datetime import datetime, timedelta
import random

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from database import engine, SessionLocal
from services import RecordStore, RecordStoreError, build_snapshot
from services.record_store import ensure_schema

# Starting weights in kg for each exercise (will progressively increase)
STARTING_WEIGHTS = {
    'Bench Press': 60.0,
    'Back Squat': 80.0,
    'Deadlift': 100.0,
    'Overhead Press': 40.0,
    'Barbell Row': 55.0,
    'Pull Ups': 0.0,
}

# Training days: Mon, Wed, Fri
TRAINING_DAYS = {0, 2, 4}


def clear_existing_data(db):
    """Clear existing exercises and PR entries"""
    print("Clearing existing data...")
    db.execute(text("DELETE FROM pr_entries"))
    db.execute(text("DELETE FROM exercises"))
    db.commit()
    print("✓ Existing data cleared")


def create_exercises(store):
    """Create the sample exercise list"""
    return [store.create_exercise(name) for name in STARTING_WEIGHTS]


def generate_entries(store, exercises, num_weeks=12):
    """
    Generate PR entries over a period of weeks.

    Simulates three sessions a week with 2-3 exercises per session and
    steady progressive overload.
    """
    current_weights = {ex.name: STARTING_WEIGHTS[ex.name] for ex in exercises}
    start_date = datetime.now() - timedelta(weeks=num_weeks)
    entries_created = 0

    current_date = start_date
    while current_date <= datetime.now():
        if current_date.weekday() in TRAINING_DAYS:
            # Random chance to skip a session (life happens)
            if random.random() < 0.1:
                current_date += timedelta(days=1)
                continue

            for exercise in random.sample(exercises, random.randint(2, 3)):
                weight = current_weights[exercise.name]
                reps = random.randint(3, 8)
                note = "Felt strong" if random.random() < 0.1 else None

                store.create_pr_entry(
                    exercise_id=exercise.id,
                    entry_date=current_date.date(),
                    weight_kg=round(weight * 2) / 2,  # Nearest 0.5 kg plate
                    reps=reps,
                    sets=random.randint(1, 5),
                    note=note,
                )
                entries_created += 1

        # Progressive overload: add a little weight at the end of each week
        if current_date.weekday() == 6:
            for name in current_weights:
                if current_weights[name] > 0:
                    current_weights[name] = round(current_weights[name] * random.uniform(1.01, 1.025), 1)

        current_date += timedelta(days=1)

    return entries_created


def print_summary(store):
    """Print summary of generated data"""
    exercises = store.list_exercises()
    entries = store.list_pr_entries()
    snapshot = build_snapshot(exercises, entries, datetime.now())
    stats = snapshot.stats

    print("\n" + "=" * 50)
    print("📊 TEST DATA SUMMARY")
    print("=" * 50)
    print(f"✓ Exercises:             {len(exercises)}")
    print(f"✓ PR entries:            {len(entries)}")
    print(f"✓ Sessions:              {stats.total_sessions}")
    print(f"✓ Sessions per week:     {stats.sessions_per_week}")
    print(f"✓ Current streak:        {stats.current_streak} weeks")
    print(f"✓ Strength gain:         {stats.strength_gain_percent}%")
    print("\n🏆 Top Exercises:")
    for item in stats.top_exercises:
        best = snapshot.index[item['exercise_id'].lower()].best_weight
        print(f"   • {item['name']}: {item['entry_count']} entries (best: {best} kg)")
    print("=" * 50)


def main():
    print("\n🏋️ PR Tracker - Test Data Generator")
    print("=" * 50)

    try:
        ensure_schema(engine)
        print("✓ Connected to database")
    except SQLAlchemyError as e:
        print(f"❌ Database connection failed: {e}")
        sys.exit(1)

    db = SessionLocal()
    store = RecordStore(db)

    try:
        # Ask for confirmation
        print("\n⚠️  This will DELETE existing exercises and PR entries and create new test data.")
        response = input("Continue? (y/n): ").strip().lower()

        if response != 'y':
            print("Cancelled.")
            sys.exit(0)

        clear_existing_data(db)

        exercises = create_exercises(store)
        print(f"✓ Created {len(exercises)} exercises")

        print("\nGenerating 12 weeks of PR entries...")
        entries = generate_entries(store, exercises, num_weeks=12)
        print(f"✓ Created {entries} PR entries")

        print_summary(store)

        print("\n✅ Test data generated successfully!")
        print("\nYou can now test:")
        print("  • http://localhost:8000/docs (Swagger UI)")
        print("  • http://localhost:8000/stats")
        print("  • http://localhost:8000/records/exercises")
        print("  • http://localhost:8000/calendar/heatmap")

    except (SQLAlchemyError, RecordStoreError) as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
