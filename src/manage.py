"""RecipeShare management CLI.

Creates and drops database schemas for both domains, and recomputes recipe
ratings from their rated comments.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py recompute-ratings             # Refresh every recipe
    python src/manage.py recompute-ratings --recipe ID # Refresh one recipe
"""

import argparse
import sys

DOMAIN_NAMES = ["cookbook", "members"]


def _domains(names=None):
    from cookbook.domain import cookbook
    from cookbook.utils import db as cookbook_db
    from members.domain import members
    from members.utils import db as members_db

    all_domains = {"cookbook": (cookbook, cookbook_db), "members": (members, members_db)}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(names=None):
    """Create database schemas for the specified (or all) domains."""
    for name, (domain, db) in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        db.setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(names=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, (domain, db) in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        db.drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def recompute_ratings(recipe_id=None):
    """Recompute ratings for one recipe, or for every recipe. Returns the failure count."""
    from cookbook.domain import cookbook
    from cookbook.rating import get_aggregator
    from cookbook.rating.errors import RatingAggregationError
    from cookbook.recipe.recipe import Recipe
    from cookbook.utils.query import fetch_all

    cookbook.init()
    failures = 0

    with cookbook.domain_context():
        recipe_ids = [recipe_id] if recipe_id else [str(recipe.id) for recipe in fetch_all(Recipe)]
        aggregator = get_aggregator()

        for current_id in recipe_ids:
            try:
                summary = aggregator.recompute(current_id)
            except RatingAggregationError as exc:
                failures += 1
                print(f"  {current_id}: failed ({exc})")
                continue
            print(f"  {current_id}: rating={summary.rating} ratings_count={summary.ratings_count}")

    print(f"Recomputed {len(recipe_ids) - failures} of {len(recipe_ids)} recipe(s).")
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="RecipeShare management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    recompute_parser = subparsers.add_parser("recompute-ratings", help="Recompute recipe ratings from comments")
    recompute_parser.add_argument("--recipe", help="Recompute a single recipe (default: all)")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "recompute-ratings":
        if recompute_ratings(args.recipe):
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
