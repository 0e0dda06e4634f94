"""
Seed script to populate a Supabase project with sample dreams for development.

Signs in (or signs up) as a seed user and stores the sample dreams under that
account. With --review-as, a second account reviews every seeded dream.

Run: python scripts/seed_data.py --email seed@example.com --password secret123
"""

import argparse
import asyncio
import os
import random
import sys

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dreamrate.crud import DreamCRUD, ReviewCRUD  # noqa: E402
from dreamrate.dependencies import get_db_client  # noqa: E402
from dreamrate.models import ReviewCreate  # noqa: E402
from dreamrate.services.auth_service import AuthService  # noqa: E402
from dreamrate.utils.exceptions import AuthenticationError  # noqa: E402


# ── Sample Dreams ───────────────────────────────────────────────────

SAMPLE_DREAMS = [
    {
        "title": "The Library Under the Lake",
        "content": (
            "I was swimming in the lake behind my grandmother's house, but instead of "
            "mud at the bottom there was a staircase. It led down into a library where "
            "every book was wet but still readable. A heron was the librarian and it "
            "kept asking me to return a book I had never borrowed."
        ),
        "tags": ["water", "recurring"],
    },
    {
        "title": "Late for an Exam in a Language I Don't Speak",
        "content": (
            "The classroom was my old school, but the exam was written in a language that "
            "looked like music notes. Everyone else was finishing. When I finally started "
            "writing, my pen only drew circles, and the proctor said circles were correct."
        ),
        "tags": ["school", "anxiety"],
    },
    {
        "title": "Flying Over a City Made of Bread",
        "content": (
            "I could fly if I held my breath. The whole city below was built from bread, "
            "with rivers of soup between the loaves. I landed on a baguette tower and a "
            "pigeon told me the mayor was a croissant."
        ),
        "tags": ["lucid", "flying", "food"],
    },
    {
        "title": "The Elevator That Only Went Sideways",
        "content": (
            "I pressed the button for the ground floor and the elevator moved sideways "
            "through the building, opening onto apartments of people I knew. Each of them "
            "was cooking the same dinner."
        ),
        "tags": None,
    },
    {
        "title": "My Phone Kept Ringing With My Own Number",
        "content": (
            "Every time I answered, I heard myself from a few minutes in the future warning "
            "me not to answer the phone."
        ),
        "tags": ["time"],
    },
]


async def _session_user(auth: AuthService, email: str, password: str):
    """Sign in, creating the account on first use."""
    try:
        response = await auth.sign_in(email, password)
    except AuthenticationError:
        print(f"  Sign-in failed for {email}, trying sign-up...")
        response = await auth.sign_up(email, password)
    if response.user is None:
        raise SystemExit(f"No user returned for {email}")
    if response.session is None:
        raise SystemExit(f"{email} needs to confirm their email before seeding")
    return response.user


async def seed_supabase(args: argparse.Namespace) -> None:
    """Store the sample dreams, and optionally review them."""
    db = await get_db_client()
    auth = AuthService(db)
    dreams = DreamCRUD(db)

    owner = await _session_user(auth, args.email, args.password)
    print(f"Seeding {len(SAMPLE_DREAMS)} dreams as {args.email}...")
    created = []
    for sample in SAMPLE_DREAMS:
        dream = await dreams.create_dream(
            title=sample["title"],
            content=sample["content"],
            owner_id=owner.id,
            tags=sample["tags"],
        )
        created.append(dream)
        print(f"  + #{dream.id}: {dream.title}")

    if args.review_as:
        reviewer = await _session_user(auth, args.review_as, args.password)
        reviews = ReviewCRUD(db)
        print(f"\nReviewing seeded dreams as {args.review_as}...")
        for dream in created:
            review = await reviews.create_review(
                ReviewCreate(
                    dream_id=dream.id,
                    review="Vivid and strange, in the best way.",
                    overall_rating=random.randint(3, 5),
                    creativity_rating=random.randint(1, 5),
                    created_by=reviewer.id,
                )
            )
            print(f"  + review #{review.id} on dream #{dream.id} ({review.overall_rating:g}/5)")

    await auth.sign_out()
    print("\nSeed complete!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a Supabase project with sample dreams")
    parser.add_argument("--email", required=True, help="Seed account email")
    parser.add_argument("--password", required=True, help="Seed account password")
    parser.add_argument("--review-as", help="Second account email that reviews every seeded dream")
    args = parser.parse_args()

    print("=" * 50)
    print("DreamRate Seed Data")
    print("=" * 50)
    print()
    asyncio.run(seed_supabase(args))
